"""Human-readable response strings shared with the host binding layer.

A response is either the assistant text or an error message. Errors are plain
strings starting with ``ERROR_PREFIX`` because host scripts match on it.
"""

from __future__ import annotations

from typing import TypeAlias

from .errors import TransportError, TransportStage

Response: TypeAlias = str

ERROR_PREFIX = "Error"
NO_RESPONSE = ""

MISSING_API_KEY = "Error: Claude API key not set."
TURN_LIMITED = "Error: Only one Claude query allowed per turn."

_STAGE_MESSAGES: dict[TransportStage, str] = {
    TransportStage.SESSION: "Error: Failed to open HTTP session.",
    TransportStage.CONNECT: "Error: Failed to connect to Claude API.",
    TransportStage.REQUEST: "Error: Failed to open HTTP request.",
    TransportStage.SEND: "Error: Failed to send HTTP request.",
    TransportStage.RECEIVE: "Error: Failed to receive HTTP response.",
    TransportStage.READ: "Error: Failed to read response data.",
}


def is_error(response: Response) -> bool:
    return response.startswith(ERROR_PREFIX)


def transport_failure(exc: TransportError) -> Response:
    message = _STAGE_MESSAGES[exc.stage]
    if exc.stage is TransportStage.SEND:
        code = exc.code if exc.code is not None else 0
        return f"{message} Error code: {code}"
    return message


def status_failure(status: int, body: str) -> Response:
    return f"Error: Claude API returned status code {status}. Response: {body}"


def api_error(message: str) -> Response:
    return f"Error from Claude API: {message}"


def unexpected_format(body: str) -> Response:
    return f"Error: Unexpected response format from Claude API: {body}"


def parse_failure(detail: str) -> Response:
    return f"Error: Failed to parse JSON response: {detail}"


def worker_failure(exc: BaseException) -> Response:
    return f"Error: Background query failed: {exc!s}"
