"""Named entry points for a host scripting namespace."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any, TypeAlias

from loguru import logger

from .session import Session

HOST_TABLE_NAME = "Claude"

EntryPoint: TypeAlias = Callable[..., Any]


def build_entry_points(session: Session) -> dict[str, EntryPoint]:
    """Build the host-facing table of callables bound to ``session``."""

    def query(prompt: object, system_prompt: object = "") -> str:
        return session.query(str(prompt), str(system_prompt))

    def query_async(prompt: object, system_prompt: object = "") -> None:
        session.query_async(str(prompt), str(system_prompt))

    def query_for_turn(turn: object, prompt: object, system_prompt: object = "") -> str:
        return session.query_for_turn(int(turn), str(prompt), str(system_prompt))

    def query_for_turn_async(turn: object, prompt: object, system_prompt: object = "") -> None:
        session.query_for_turn_async(int(turn), str(prompt), str(system_prompt))

    def set_api_key(api_key: object) -> None:
        session.set_api_key(str(api_key))

    def set_model(model: object) -> None:
        session.set_model(str(model))

    def set_max_tokens(max_tokens: object) -> None:
        session.set_max_tokens(int(max_tokens))

    return {
        "Query": query,
        "QueryAsync": query_async,
        "QueryForTurn": query_for_turn,
        "QueryForTurnAsync": query_for_turn_async,
        "HasResponse": session.has_response,
        "GetResponse": session.get_response,
        "SetAPIKey": set_api_key,
        "SetModel": set_model,
        "SetMaxTokens": set_max_tokens,
    }


def register(
    namespace: MutableMapping[str, Any],
    session: Session,
    table_name: str = HOST_TABLE_NAME,
) -> dict[str, EntryPoint]:
    """Publish the entry point table under ``table_name`` in ``namespace``."""
    table = build_entry_points(session)
    namespace[table_name] = table
    logger.info("bindings.registered table={} entries={}", table_name, len(table))
    return table
