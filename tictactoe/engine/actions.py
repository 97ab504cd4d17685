"""
Action definitions for the game.
Actions are immutable, deterministic instructions (the player intents
forwarded by the presentation layer, plus the timer tick).
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Action:
    """Base action class. All actions have a type and payload."""
    type: str  # e.g., "choose_board_size", "click_cell", "tick_timer", "reset_round"
    payload: dict = field(default_factory=dict)  # Action-specific data


CHOOSE_BOARD_SIZE = "choose_board_size"
CLICK_CELL = "click_cell"
TICK_TIMER = "tick_timer"
RESET_ROUND = "reset_round"
NEXT_ROUND = "next_round"
NEW_GAME = "new_game"

ACTION_TYPES = (
    CHOOSE_BOARD_SIZE,
    CLICK_CELL,
    TICK_TIMER,
    RESET_ROUND,
    NEXT_ROUND,
    NEW_GAME,
)


def choose_board_size(size: int) -> Action:
    """
    Start a session on a size x size board.
    Scores start at zero and X moves first.
    Example: choose_board_size(4)
    """
    return Action(type=CHOOSE_BOARD_SIZE, payload={"size": size})


def click_cell(index: int) -> Action:
    """
    Place the current player's mark at a row-major cell index (row * size + col).
    Ignored if the cell is taken or the round is over.
    """
    return Action(type=CLICK_CELL, payload={"index": index})


def tick_timer() -> Action:
    """One elapsed second of the current player's countdown."""
    return Action(type=TICK_TIMER)


def reset_round() -> Action:
    """Clear the board and restart the round. Scores are kept."""
    return Action(type=RESET_ROUND)


def next_round() -> Action:
    """Start the next round after a win or draw. Same effect as reset_round."""
    return Action(type=NEXT_ROUND)


def new_game() -> Action:
    """End the session: back to board size selection with scores zeroed."""
    return Action(type=NEW_GAME)
