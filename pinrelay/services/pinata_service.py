"""PinataClient: forwards a single file to the Pinata pinning endpoint.

One call to ``pin_file`` performs exactly one POST: the file is buffered in
memory, re-encoded as a multipart body with a single ``file`` part, and the
JSON reply is decoded into a ``PinataResponse``. There are no retries and no
timeout beyond httpx's defaults.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Optional

import httpx
from pydantic import ValidationError

from pinrelay.config import Config
from pinrelay.schemas import PinataResponse
from pinrelay.utils.names import safe_basename

logger = logging.getLogger(__name__)

UPSTREAM_FIELD = "file"


class PinataUploadError(Exception):
    """A single file could not be pinned; the message names the failed step."""


class PinataClient:
    def __init__(
        self,
        cfg: Config,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.cfg = cfg
        self._owns_client = client is None
        self.client = client or httpx.Client(transport=transport)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "PinataClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _headers(self) -> dict:
        return {
            "pinata_api_key": self.cfg.api_key,
            "pinata_secret_api_key": self.cfg.api_secret,
        }

    def pin_file(self, filename: str, stream: BinaryIO) -> PinataResponse:
        """Upload one file and return Pinata's pin record.

        Raises ``PinataUploadError`` for every failure, with the originating
        cause embedded in the message.
        """
        try:
            data = stream.read()
        except (OSError, ValueError) as e:
            raise PinataUploadError(f"failed to read file: {e}") from e

        try:
            url = httpx.URL(self.cfg.api_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise PinataUploadError(f"failed to create request: {e}") from e

        part_name = safe_basename(filename)
        try:
            request = self.client.build_request(
                "POST",
                url,
                headers=self._headers(),
                files={UPSTREAM_FIELD: (part_name, data)},
            )
        except (TypeError, ValueError) as e:
            raise PinataUploadError(f"failed to create multipart body: {e}") from e

        logger.debug("POST %s (%s, %d bytes)", url, part_name, len(data))
        try:
            response = self.client.send(request)
        except httpx.RequestError as e:
            raise PinataUploadError(f"failed to send request: {e}") from e

        try:
            if response.status_code != httpx.codes.OK:
                raise PinataUploadError(
                    f"pinata API returned non-OK status: {response.status_code} {response.reason_phrase}"
                )
            try:
                return PinataResponse.model_validate_json(response.content)
            except ValidationError as e:
                raise PinataUploadError(f"failed to decode Pinata response: {e}") from e
        finally:
            response.close()
