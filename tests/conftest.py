from __future__ import annotations

import json
import os
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from turnbridge.config import Settings
from turnbridge.session import Session
from turnbridge.transport import HttpResponse

HELLO_BODY = '{"content":[{"type":"text","text":"hello"}]}'


class FakeTransport:
    def __init__(self, status: int = 200, body: str = HELLO_BODY) -> None:
        self.status = status
        self.body = body
        self.error: Exception | None = None
        self.release: threading.Event | None = None
        self.started = threading.Event()
        self.calls: list[dict[str, Any]] = []

    def post(
        self,
        host: str,
        path: str,
        headers: dict[str, str],
        body: bytes,
        timeout: float | None = None,
    ) -> HttpResponse:
        self.calls.append(
            {
                "host": host,
                "path": path,
                "headers": headers,
                "payload": json.loads(body),
                "timeout": timeout,
            }
        )
        self.started.set()
        if self.release is not None:
            assert self.release.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return HttpResponse(status=self.status, body=self.body)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    for name in list(os.environ):
        if name.startswith("TURNBRIDGE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def session(transport: FakeTransport) -> Iterator[Session]:
    with Session(Settings(api_key="test-key"), transport) as bridge:
        yield bridge
