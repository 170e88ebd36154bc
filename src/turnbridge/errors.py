"""Application-level exception types for turnbridge."""

from __future__ import annotations

from enum import StrEnum


class TurnbridgeError(Exception):
    """Base exception for turnbridge."""


class TransportStage(StrEnum):
    """Stages of one HTTPS exchange, in the order they run."""

    SESSION = "session"
    CONNECT = "connect"
    REQUEST = "request"
    SEND = "send"
    RECEIVE = "receive"
    READ = "read"


class TransportError(TurnbridgeError):
    """Raised when the HTTPS exchange fails at one stage."""

    def __init__(self, stage: TransportStage, detail: str = "", *, code: int | None = None) -> None:
        self.stage = stage
        self.detail = detail
        self.code = code
        message = f"{stage.value} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


