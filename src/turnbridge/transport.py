"""HTTPS transport for the messages API."""

from __future__ import annotations

import http.client
import ssl
from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from .errors import TransportError, TransportStage


@dataclass(frozen=True)
class HttpResponse:
    """Status and decoded body of one HTTP exchange."""

    status: int
    body: str


class Transport(Protocol):
    """Minimal contract for sending one JSON POST."""

    def post(
        self,
        host: str,
        path: str,
        headers: dict[str, str],
        body: bytes,
        timeout: float | None = None,
    ) -> HttpResponse: ...


class HttpsTransport:
    """Send one POST per call over a fresh HTTPS connection.

    Each stage of the exchange is run separately so a failure can be reported
    as the stage it happened in. The connection is closed after every call.
    """

    def __init__(self, context: ssl.SSLContext | None = None) -> None:
        self._context = context

    def post(
        self,
        host: str,
        path: str,
        headers: dict[str, str],
        body: bytes,
        timeout: float | None = None,
    ) -> HttpResponse:
        try:
            context = self._context or ssl.create_default_context()
            if timeout is None:
                conn = http.client.HTTPSConnection(host, context=context)
            else:
                conn = http.client.HTTPSConnection(host, timeout=timeout, context=context)
        except (OSError, ValueError) as exc:
            raise TransportError(TransportStage.SESSION, str(exc)) from exc

        try:
            return self._exchange(conn, path, headers, body)
        finally:
            conn.close()

    def _exchange(
        self,
        conn: http.client.HTTPSConnection,
        path: str,
        headers: dict[str, str],
        body: bytes,
    ) -> HttpResponse:
        try:
            conn.connect()
        except OSError as exc:
            raise TransportError(TransportStage.CONNECT, str(exc)) from exc

        try:
            conn.putrequest("POST", path, skip_accept_encoding=True)
            for name, value in headers.items():
                conn.putheader(name, value)
            conn.putheader("Content-Length", str(len(body)))
        except (http.client.HTTPException, UnicodeError, ValueError) as exc:
            raise TransportError(TransportStage.REQUEST, str(exc)) from exc

        try:
            conn.endheaders(body)
        except OSError as exc:
            raise TransportError(TransportStage.SEND, str(exc), code=exc.errno) from exc
        except http.client.HTTPException as exc:
            raise TransportError(TransportStage.SEND, str(exc)) from exc

        try:
            response = conn.getresponse()
        except (OSError, http.client.HTTPException) as exc:
            raise TransportError(TransportStage.RECEIVE, str(exc)) from exc

        try:
            raw = response.read()
        except (OSError, http.client.HTTPException) as exc:
            raise TransportError(TransportStage.READ, str(exc)) from exc

        logger.debug("transport.received status={} bytes={}", response.status, len(raw))
        return HttpResponse(status=response.status, body=raw.decode("utf-8", errors="replace"))
