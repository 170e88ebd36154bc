"""Messages API request/response codec."""

from __future__ import annotations

import json
from typing import Any

from . import responses
from .responses import Response


def build_request_body(model: str, max_tokens: int, prompt: str, system_prompt: str = "") -> dict[str, Any]:
    body: dict[str, Any] = {
        "model": model,
        "max_tokens": max_tokens,
    }
    if system_prompt:
        body["system"] = system_prompt
    body["messages"] = [{"role": "user", "content": prompt}]
    return body


def encode_request(model: str, max_tokens: int, prompt: str, system_prompt: str = "") -> bytes:
    body = build_request_body(model, max_tokens, prompt, system_prompt)
    return json.dumps(body, ensure_ascii=False).encode("utf-8")


def build_headers(api_key: str, api_version: str, user_agent: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "x-api-key": api_key,
        "anthropic-version": api_version,
        "User-Agent": user_agent,
    }


def decode_response(body: str) -> Response:
    """Extract the first text block from a messages API response body.

    Falls back to the ``error`` field, then to an unexpected-format error
    carrying the raw body. Undecodable JSON yields a parse-failure error.
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        return responses.parse_failure(str(exc))

    if not isinstance(data, dict):
        return responses.unexpected_format(body)

    text = _first_text_block(data.get("content"))
    if text is not None:
        return text

    if "error" in data:
        return responses.api_error(_error_message(data["error"]))

    return responses.unexpected_format(body)


def _first_text_block(content: object) -> str | None:
    if not isinstance(content, list):
        return None
    for block in content:
        if not isinstance(block, dict) or block.get("type") != "text":
            continue
        text = block.get("text")
        if isinstance(text, str):
            return text
    return None


def _error_message(error: object) -> str:
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return json.dumps(error, ensure_ascii=False)
