from __future__ import annotations

import json
import random
import re
import threading
import time
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from pinrelay import create_app
from pinrelay.config import Config

PINATA_URL = "https://pinata.test/pinning/pinFileToIPFS"

_FILENAME_RE = re.compile(rb'filename="([^"]*)"')


class FakePinata:
    """In-process stand-in for the pinning endpoint.

    Files whose outbound part name is in ``fail`` get a 500. ``delay`` adds a
    random per-request sleep (seconds, upper bound) to shuffle completion order.
    """

    def __init__(self, fail: Optional[set] = None, delay: float = 0.0):
        self.fail = set(fail or ())
        self.delay = delay
        self.calls = 0
        self.requests: List[httpx.Request] = []
        self.part_names: List[str] = []
        self._lock = threading.Lock()
        self.before_reply: Optional[Callable[[str], None]] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        m = _FILENAME_RE.search(request.content)
        name = m.group(1).decode() if m else ""
        with self._lock:
            self.calls += 1
            self.requests.append(request)
            self.part_names.append(name)
        if self.before_reply is not None:
            self.before_reply(name)
        if self.delay:
            time.sleep(random.uniform(0, self.delay))
        if name in self.fail:
            return httpx.Response(500, json={"error": "boom"})
        body: Dict[str, object] = {
            "IpfsHash": f"Qm{name}",
            "PinSize": len(request.content),
            "Timestamp": "2024-05-01T12:00:00.000Z",
        }
        return httpx.Response(200, content=json.dumps(body).encode())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def cfg() -> Config:
    return Config(api_key="key-123", api_secret="secret-456", api_url=PINATA_URL)


@pytest.fixture
def pinata() -> FakePinata:
    return FakePinata()


@pytest.fixture
def app(cfg, pinata):
    app = create_app(cfg, transport=pinata.transport)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
