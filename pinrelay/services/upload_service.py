"""UploadService: fans a batch of files out to Pinata and merges the outcomes.

Each file gets its own worker thread; the batch waits for all of them
before returning. A failure in one file never cancels or affects another:
every exception is converted to an error message at the task boundary.
"""

from __future__ import annotations

import logging
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Optional, Sequence

import httpx

from pinrelay.config import Config
from pinrelay.schemas import AggregateResult, FileEntry, UploadFailure, UploadOutcome, UploadSuccess
from pinrelay.services.pinata_service import PinataClient

logger = logging.getLogger(__name__)


class UploadService:
    def __init__(self, cfg: Config, *, transport: Optional[httpx.BaseTransport] = None):
        self.cfg = cfg
        self.transport = transport

    def _max_workers(self, n_files: int) -> int:
        cap = self.cfg.max_concurrent_uploads
        return min(cap, n_files) if cap else n_files

    def _upload_one(self, pinata: PinataClient, entry: FileEntry) -> UploadOutcome:
        try:
            pin = pinata.pin_file(entry.filename, entry.stream)
        except Exception as e:
            return UploadFailure(entry.filename, f"Error uploading {entry.filename}: {e}")
        return UploadSuccess(entry.filename, pin)

    def upload_all(self, files: Sequence[FileEntry]) -> AggregateResult:
        """Upload every file concurrently and return the merged result."""
        result = AggregateResult()
        if not files:
            return result

        batch_id = uuid.uuid4().hex[:8]
        lock = threading.Lock()
        logger.info("[UPLOAD %s] Pinning %d file(s)", batch_id, len(files))

        def task(pinata: PinataClient, entry: FileEntry) -> None:
            outcome = self._upload_one(pinata, entry)
            with lock:
                if isinstance(outcome, UploadSuccess):
                    result.successes.append(outcome.pin)
                else:
                    result.errors.append(outcome.message)
            _log_outcome(batch_id, outcome)

        with PinataClient(self.cfg, transport=self.transport) as pinata:
            with ThreadPoolExecutor(max_workers=self._max_workers(len(files))) as ex:
                futures = [ex.submit(task, pinata, entry) for entry in files]
                wait(futures)
            # task() never raises; surface anything unexpected rather than drop a file
            for f in futures:
                f.result()

        logger.info(
            "[UPLOAD %s] Completed: %d succeeded, %d failed",
            batch_id,
            len(result.successes),
            len(result.errors),
        )
        return result


def _log_outcome(batch_id: str, outcome: UploadOutcome) -> None:
    if isinstance(outcome, UploadSuccess):
        logger.info(
            "[UPLOAD %s] %s -> %s (%d bytes)",
            batch_id,
            outcome.filename,
            outcome.pin.IpfsHash,
            outcome.pin.PinSize,
        )
    else:
        logger.warning("[UPLOAD %s] %s", batch_id, outcome.message)
