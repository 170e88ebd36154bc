from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import pytest
from conftest import FakeTransport
from typer.testing import CliRunner

from turnbridge.config import Settings
from turnbridge.session import Session

cli_module = importlib.import_module("turnbridge.cli")


def _patch_session(monkeypatch: pytest.MonkeyPatch, transport: FakeTransport) -> dict[str, Any]:
    seen: dict[str, Any] = {}

    def _fake_build_session(**overrides: Any) -> Session:
        seen.update(overrides)
        return Session(Settings(api_key="cli-key", **overrides), transport)

    monkeypatch.setattr(cli_module, "build_session", _fake_build_session)
    return seen


def test_query_command_prints_response(monkeypatch: pytest.MonkeyPatch, transport: FakeTransport) -> None:
    seen = _patch_session(monkeypatch, transport)

    result = CliRunner().invoke(
        cli_module.app,
        ["query", "hi", "--system", "short", "--model", "claude-cli", "--max-tokens", "9"],
    )

    assert result.exit_code == 0
    assert "hello" in result.output
    assert seen == {"model": "claude-cli", "max_tokens": 9}
    assert transport.calls[0]["payload"]["system"] == "short"


def test_query_command_fails_on_error_response(monkeypatch: pytest.MonkeyPatch, transport: FakeTransport) -> None:
    _patch_session(monkeypatch, transport)
    transport.status = 500
    transport.body = "oops"

    result = CliRunner().invoke(cli_module.app, ["query", "hi"])

    assert result.exit_code == 1
    assert "status code 500" in result.output


def test_turns_command_runs_one_query_per_line(
    monkeypatch: pytest.MonkeyPatch, transport: FakeTransport, tmp_path: Path
) -> None:
    _patch_session(monkeypatch, transport)
    prompts = tmp_path / "prompts.txt"
    prompts.write_text("scout the river\n\nfound a city\n", encoding="utf-8")

    result = CliRunner().invoke(cli_module.app, ["turns", str(prompts), "--start-turn", "10", "--poll-interval", "0"])

    assert result.exit_code == 0
    assert "turn 10" in result.output
    assert "turn 11" in result.output
    assert [call["payload"]["messages"][0]["content"] for call in transport.calls] == [
        "scout the river",
        "found a city",
    ]


def test_turns_command_reads_stdin(monkeypatch: pytest.MonkeyPatch, transport: FakeTransport) -> None:
    _patch_session(monkeypatch, transport)

    result = CliRunner().invoke(cli_module.app, ["turns", "--poll-interval", "0"], input="one\n")

    assert result.exit_code == 0
    assert "turn 1" in result.output
    assert len(transport.calls) == 1
