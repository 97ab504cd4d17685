"""
Game state representation.
All state is immutable; mutations return new state copies.
Includes JSON serialization so the presentation layer can render snapshots.
"""

import json
from dataclasses import dataclass, field
from copy import deepcopy
from typing import Any

from tictactoe.engine import (
    EMPTY,
    PLAYERS,
    PLAYER_X,
    IN_PROGRESS,
    WIN,
    DRAW,
    TIMER_DURATION,
)

OUTCOMES = (IN_PROGRESS, WIN, DRAW)


def _ensure_cells(value: Any, board_size: int) -> list[str]:
    """Parse cells from a list; anything malformed becomes an empty board of board_size."""
    expected = board_size * board_size
    if not isinstance(value, list) or len(value) != expected:
        return [EMPTY] * expected
    return [str(c) if str(c) in PLAYERS else EMPTY for c in value]


def _ensure_scores(value: Any) -> dict[str, int]:
    """Parse scores from dict; missing or negative entries become 0."""
    scores = {p: 0 for p in PLAYERS}
    if not isinstance(value, dict):
        return scores
    for p in PLAYERS:
        try:
            scores[p] = max(0, int(value.get(p, 0)))
        except (TypeError, ValueError):
            pass
    return scores


def _int(v: Any, default: int) -> int:
    try:
        return int(v) if v is not None else default
    except (TypeError, ValueError):
        return default


@dataclass
class GameState:
    """Complete game state for one session (board, turn, outcome, score, timer)."""
    board_size: int  # 3, 4 or 5; 0 = no active session
    cells: list[str]  # row-major, index = row * board_size + col
    current_player: str = PLAYER_X
    outcome: str = IN_PROGRESS  # "in_progress", "win", "draw"
    # Winning player (None unless outcome == "win")
    winner: str | None = None
    # Result message shown when a round ends ("Player X wins!", "It's a draw!")
    message: str = ""
    scores: dict[str, int] = field(default_factory=lambda: {p: 0 for p in PLAYERS})
    timer_duration: int = TIMER_DURATION
    time_left: int = TIMER_DURATION
    # Cell indices of the completed line (empty unless outcome == "win")
    winning_line: list[int] = field(default_factory=list)
    # Identity counters: a running turn timer is only valid while these are unchanged.
    session_number: int = 0
    round_number: int = 0
    turn_number: int = 0

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    @property
    def has_session(self) -> bool:
        return self.board_size != 0

    @property
    def is_finished(self) -> bool:
        return self.outcome != IN_PROGRESS

    @property
    def timer_key(self) -> tuple[int, int, int]:
        """Identity of the current turn; changes whenever the countdown must restart."""
        return (self.session_number, self.round_number, self.turn_number)

    # ===== Serialization Methods =====

    def to_dict(self) -> dict[str, Any]:
        """Convert GameState to a dictionary for JSON serialization."""
        return {
            "board_size": self.board_size,
            "cells": list(self.cells),
            "current_player": self.current_player,
            "outcome": self.outcome,
            "winner": self.winner,
            "message": self.message,
            "scores": dict(self.scores),
            "timer_duration": self.timer_duration,
            "time_left": self.time_left,
            "winning_line": list(self.winning_line),
            "session_number": self.session_number,
            "round_number": self.round_number,
            "turn_number": self.turn_number,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        """Create GameState from a dictionary (missing or malformed fields fall back to defaults)."""
        if not isinstance(data, dict):
            data = {}
        board_size = _int(data.get("board_size"), 0)
        if board_size < 0:
            board_size = 0
        timer_duration = max(1, _int(data.get("timer_duration"), TIMER_DURATION))
        time_left = min(max(0, _int(data.get("time_left"), timer_duration)), timer_duration)
        current = data.get("current_player")
        outcome = data.get("outcome")
        winner = data.get("winner")
        line = data.get("winning_line")
        if not isinstance(line, list):
            line = []
        return cls(
            board_size=board_size,
            cells=_ensure_cells(data.get("cells"), board_size),
            current_player=current if current in PLAYERS else PLAYER_X,
            outcome=outcome if outcome in OUTCOMES else IN_PROGRESS,
            winner=winner if winner in PLAYERS else None,
            message=str(data.get("message") or ""),
            scores=_ensure_scores(data.get("scores")),
            timer_duration=timer_duration,
            time_left=time_left,
            winning_line=[_int(i, 0) for i in line],
            session_number=_int(data.get("session_number"), 0),
            round_number=_int(data.get("round_number"), 0),
            turn_number=_int(data.get("turn_number"), 0),
        )

    def to_json(self, indent: int = 2) -> str:
        """Serialize GameState to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> "GameState":
        """Deserialize GameState from a JSON string."""
        return cls.from_dict(json.loads(json_str))
