"""Bridge session: configuration, turn gate and async dispatch in one object."""

from __future__ import annotations

from typing import Any

from loguru import logger

from . import codec, responses
from .config import Settings, get_settings
from .dispatcher import AsyncDispatcher
from .errors import TransportError
from .gate import TurnGate
from .responses import Response
from .transport import HttpsTransport, Transport


class Session:
    """Entry points the host turn loop calls.

    Holds the state that would otherwise be process-wide: settings, the last
    gated turn and the response queue. Use it as a context manager, or call
    ``shutdown`` before exit so a running worker is not abandoned.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Transport,
        *,
        gate: TurnGate | None = None,
        dispatcher: AsyncDispatcher | None = None,
    ) -> None:
        self.settings = settings
        self.transport = transport
        self.gate = gate or TurnGate()
        self.dispatcher = dispatcher or AsyncDispatcher()

    def __enter__(self) -> Session:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        self.shutdown()

    # Configuration

    def set_api_key(self, api_key: str) -> None:
        self.settings.api_key = api_key
        logger.info("config.api_key set")

    def set_model(self, model: str) -> None:
        self.settings.model = model
        logger.info("config.model model={}", model)

    def set_max_tokens(self, max_tokens: int) -> None:
        self.settings.max_tokens = max_tokens
        logger.info("config.max_tokens max_tokens={}", max_tokens)

    # Queries

    def query(self, prompt: str, system_prompt: str = "") -> Response:
        """Send one blocking query and return its text or an error response."""
        settings = self.settings
        api_key = settings.resolved_api_key
        if not api_key:
            return responses.MISSING_API_KEY

        body = codec.encode_request(settings.model, settings.max_tokens, prompt, system_prompt)
        headers = codec.build_headers(api_key, settings.api_version, settings.user_agent)
        logger.info("query.send model={} max_tokens={}", settings.model, settings.max_tokens)
        try:
            result = self.transport.post(
                settings.api_host,
                settings.api_path,
                headers,
                body,
                timeout=settings.timeout_seconds,
            )
        except TransportError as exc:
            logger.warning("query.transport.error stage={} detail={}", exc.stage, exc.detail)
            return responses.transport_failure(exc)

        if result.status != 200:
            logger.warning("query.status status={}", result.status)
            return responses.status_failure(result.status, result.body)

        response = codec.decode_response(result.body)
        logger.info("query.received error={}", responses.is_error(response))
        return response

    def query_for_turn(self, turn: int, prompt: str, system_prompt: str = "") -> Response:
        if not self.gate.try_accept(turn):
            logger.info("gate.rejected turn={}", turn)
            return responses.TURN_LIMITED
        return self.query(prompt, system_prompt)

    def query_async(self, prompt: str, system_prompt: str = "") -> None:
        """Queue a query on the background worker; poll ``get_response`` for it.

        Blocks only while a previous async query is still running.
        """
        self.dispatcher.submit(lambda: self.query(prompt, system_prompt))

    def query_for_turn_async(self, turn: int, prompt: str, system_prompt: str = "") -> None:
        if not self.gate.try_accept(turn):
            logger.info("gate.rejected turn={}", turn)
            self.dispatcher.queue.push(responses.TURN_LIMITED)
            return
        self.query_async(prompt, system_prompt)

    # Response polling

    @property
    def pending(self) -> bool:
        return self.dispatcher.pending

    def has_response(self) -> bool:
        return self.dispatcher.queue.has_response()

    def get_response(self) -> Response:
        return self.dispatcher.queue.pop()

    def shutdown(self) -> None:
        self.dispatcher.shutdown()


def build_session(*, transport: Transport | None = None, **overrides: Any) -> Session:
    """Build a session from environment settings and the HTTPS transport."""
    return Session(get_settings(**overrides), transport or HttpsTransport())
