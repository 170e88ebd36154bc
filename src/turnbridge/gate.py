"""One-query-per-turn gate."""

from __future__ import annotations

import threading


class TurnGate:
    """Remember the last accepted turn and reject repeats of it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_turn: int | None = None

    @property
    def last_turn(self) -> int | None:
        return self._last_turn

    def try_accept(self, turn: int) -> bool:
        """Accept ``turn`` unless it equals the last accepted one.

        Rejections leave the gate untouched.
        """
        with self._lock:
            if turn == self._last_turn:
                return False
            self._last_turn = turn
            return True
