"""turnbridge command line interface."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from .logging_utils import configure_logging
from .responses import is_error
from .session import build_session

app = typer.Typer(name="turnbridge", help="Turn-loop bridge to the Claude messages API", add_completion=False)


@app.callback()
def main_callback() -> None:
    configure_logging(profile="console")


@app.command()
def query(
    prompt: str = typer.Argument(..., help="User prompt"),
    system: str = typer.Option("", "--system", "-s", help="Optional system prompt"),
    model: str | None = typer.Option(None, "--model", "-m", help="Model override"),
    max_tokens: int | None = typer.Option(None, "--max-tokens", help="Max output tokens override"),
) -> None:
    """Send one blocking query and print the response."""
    overrides: dict[str, Any] = {}
    if model:
        overrides["model"] = model
    if max_tokens is not None:
        overrides["max_tokens"] = max_tokens

    with build_session(**overrides) as session:
        response = session.query(prompt, system)

    typer.echo(response)
    if is_error(response):
        raise typer.Exit(1)


@app.command()
def turns(
    source: Path | None = typer.Argument(None, help="File with one prompt per line; stdin when omitted"),  # noqa: B008
    system: str = typer.Option("", "--system", "-s", help="Optional system prompt"),
    start_turn: int = typer.Option(1, "--start-turn", help="Number of the first turn"),
    poll_interval: float = typer.Option(0.1, "--poll-interval", help="Seconds between polls"),
) -> None:
    """Simulate a turn loop: one async query per prompt line, polled each tick."""
    prompts = _read_prompts(source)
    console = Console()

    with build_session() as session:
        for offset, prompt in enumerate(prompts):
            turn = start_turn + offset
            session.query_for_turn_async(turn, prompt, system)
            ticks = 0
            while not session.has_response():
                time.sleep(poll_interval)
                ticks += 1
            response = session.get_response()
            style = "red" if is_error(response) else "green"
            console.print(f"turn {turn} ({ticks} ticks)", style=f"bold {style}")
            console.print(response, markup=False, highlight=False)


def _read_prompts(source: Path | None) -> list[str]:
    text = source.read_text(encoding="utf-8") if source is not None else sys.stdin.read()
    return [line.strip() for line in text.splitlines() if line.strip()]


if __name__ == "__main__":
    app()
