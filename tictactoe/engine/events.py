"""
Game events for UI hooks and logging.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

# Session events
SESSION_STARTED = "session_started"
SESSION_ENDED = "session_ended"
ROUND_RESET = "round_reset"

# Move events
MARK_PLACED = "mark_placed"
TURN_CHANGED = "turn_changed"

# Timer events
TIMER_TICKED = "timer_ticked"
TURN_TIMED_OUT = "turn_timed_out"

# Outcome events
ROUND_WON = "round_won"
ROUND_DRAWN = "round_drawn"
SCORE_CHANGED = "score_changed"


# ===== Event Factory Functions =====

def session_started(board_size: int, session_number: int) -> GameEvent:
    return GameEvent(SESSION_STARTED, {
        "board_size": board_size,
        "session_number": session_number,
    })


def session_ended(board_size: int, scores: dict[str, int]) -> GameEvent:
    """Emitted on new game. Carries the final scores of the session being torn down."""
    return GameEvent(SESSION_ENDED, {
        "board_size": board_size,
        "final_scores": dict(scores),
    })


def round_reset(round_number: int, reason: str) -> GameEvent:
    return GameEvent(ROUND_RESET, {
        "round_number": round_number,
        "reason": reason,  # "reset_round" or "next_round"
    })


def mark_placed(player: str, index: int, row: int, col: int) -> GameEvent:
    return GameEvent(MARK_PLACED, {
        "player": player,
        "index": index,
        "row": row,
        "col": col,
    })


def turn_changed(old_player: str, new_player: str, turn_number: int, reason: str) -> GameEvent:
    return GameEvent(TURN_CHANGED, {
        "old_player": old_player,
        "new_player": new_player,
        "turn_number": turn_number,
        "reason": reason,  # "move" or "timeout"
    })


def timer_ticked(player: str, time_left: int) -> GameEvent:
    return GameEvent(TIMER_TICKED, {
        "player": player,
        "time_left": time_left,
    })


def turn_timed_out(player: str) -> GameEvent:
    """Emitted when a player's countdown reaches zero and the turn is forfeited."""
    return GameEvent(TURN_TIMED_OUT, {"player": player})


def round_won(player: str, winning_line: list[int], message: str) -> GameEvent:
    return GameEvent(ROUND_WON, {
        "player": player,
        "winning_line": list(winning_line),
        "message": message,
    })


def round_drawn(message: str) -> GameEvent:
    return GameEvent(ROUND_DRAWN, {"message": message})


def score_changed(player: str, old_value: int, new_value: int) -> GameEvent:
    return GameEvent(SCORE_CHANGED, {
        "player": player,
        "old_value": old_value,
        "new_value": new_value,
        "change": new_value - old_value,
    })
