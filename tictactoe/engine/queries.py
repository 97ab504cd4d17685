"""
Query functions for UI integration.
These functions help the UI understand what actions are available
without mutating game state.
"""

from dataclasses import dataclass
from typing import Any

from tictactoe.engine.state import GameState
from tictactoe.engine.actions import (
    Action,
    ACTION_TYPES,
    CHOOSE_BOARD_SIZE,
    CLICK_CELL,
    TICK_TIMER,
    RESET_ROUND,
    NEXT_ROUND,
    NEW_GAME,
)
from tictactoe.engine.board import empty_cells
from tictactoe.engine import EMPTY, PLAYERS, BOARD_SIZES


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


# ===== Action Validation =====

def validate_action(state: GameState, action: Action) -> ValidationResult:
    """
    Validate an action without applying it.
    The reducer ignores invalid intents silently; this explains why one would be ignored.
    """
    if action.type not in ACTION_TYPES:
        return ValidationResult(False, f"Unknown action type: {action.type}")

    if action.type == CHOOSE_BOARD_SIZE:
        size = action.payload.get("size")
        if isinstance(size, bool) or size not in BOARD_SIZES:
            return ValidationResult(
                False,
                f"Board size must be one of {', '.join(str(s) for s in BOARD_SIZES)}, got {size!r}"
            )
        return ValidationResult(True)

    if action.type == NEW_GAME:
        return ValidationResult(True)

    if not state.has_session:
        return ValidationResult(False, "No active session. Choose a board size first.")

    if action.type in (RESET_ROUND, NEXT_ROUND):
        return ValidationResult(True)

    if state.is_finished:
        return ValidationResult(False, f"Round is over: {state.message}")

    if action.type == TICK_TIMER:
        return ValidationResult(True)

    # click_cell
    index = action.payload.get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        return ValidationResult(False, f"Cell index must be an integer, got {index!r}")
    if not 0 <= index < len(state.cells):
        return ValidationResult(
            False,
            f"Cell index {index} is outside the board (0-{len(state.cells) - 1})"
        )
    if state.cells[index] != EMPTY:
        return ValidationResult(False, f"Cell {index} is already taken by {state.cells[index]}")
    return ValidationResult(True)


# ===== Available Actions =====

def get_available_controls(state: GameState) -> list[str]:
    """
    Buttons the UI should offer.
    Before a session only the board size choice is available; during a session
    the round control reads "reset round" while playing and "next round" once it ends.
    """
    if not state.has_session:
        return [CHOOSE_BOARD_SIZE]
    if state.is_finished:
        return [NEXT_ROUND, NEW_GAME]
    return [RESET_ROUND, NEW_GAME]


def get_available_action_types(state: GameState) -> list[str]:
    """Action types that would change state right now (cells and timer included)."""
    if not state.has_session:
        return [CHOOSE_BOARD_SIZE, NEW_GAME]
    if state.is_finished:
        return [CHOOSE_BOARD_SIZE, NEXT_ROUND, RESET_ROUND, NEW_GAME]
    return [CHOOSE_BOARD_SIZE, CLICK_CELL, TICK_TIMER, RESET_ROUND, NEXT_ROUND, NEW_GAME]


def get_open_cells(state: GameState) -> list[int]:
    """Cell indices the current player may click (empty while the round is over)."""
    if not state.has_session or state.is_finished:
        return []
    return empty_cells(state.cells)


# ===== Display Helpers =====

def get_turn_label(state: GameState) -> str:
    return f"Player {state.current_player}'s turn: {state.time_left} s"


def get_timer_progress(state: GameState) -> float:
    """Fraction of the turn's countdown remaining, 0.0 to 1.0."""
    if state.timer_duration <= 0:
        return 0.0
    return max(0.0, min(1.0, state.time_left / state.timer_duration))


def get_score_labels(state: GameState) -> list[str]:
    return [f"Player {p}: {state.scores.get(p, 0)}" for p in PLAYERS]


def get_board_rows(state: GameState) -> list[list[str]]:
    """Cells grouped into rows for grid rendering."""
    size = state.board_size
    return [state.cells[row * size:(row + 1) * size] for row in range(size)]


def get_game_summary(state: GameState) -> dict[str, Any]:
    """Everything a renderer needs besides the raw state."""
    return {
        "has_session": state.has_session,
        "board_sizes": list(BOARD_SIZES),
        "rows": get_board_rows(state),
        "open_cells": get_open_cells(state),
        "controls": get_available_controls(state),
        "turn_label": get_turn_label(state) if state.has_session else "",
        "timer_progress": get_timer_progress(state),
        "score_labels": get_score_labels(state),
        "result_message": state.message if state.is_finished else "",
    }
