"""
Utility functions for the game engine.
"""

from tictactoe.engine.state import GameState
from tictactoe.engine.queries import get_turn_label, get_score_labels
from tictactoe.engine import PLAYER_X, PLAYERS, IN_PROGRESS, TIMER_DURATION


def initialize_game_state(timer_duration: int = TIMER_DURATION) -> GameState:
    """
    Create the initial game state: no active session, waiting for a board size.

    Args:
        timer_duration: Seconds per turn (at least 1)
    """
    if timer_duration < 1:
        raise ValueError(f"timer_duration must be at least 1, got {timer_duration}")
    return GameState(
        board_size=0,
        cells=[],
        current_player=PLAYER_X,
        outcome=IN_PROGRESS,
        scores={p: 0 for p in PLAYERS},
        timer_duration=timer_duration,
        time_left=timer_duration,
    )


def format_board(state: GameState) -> str:
    """
    Render the board as text. Empty cells show their index so players can pick them.

     0 | X | 2
    ---+---+---
     O | 4 | 5
    """
    size = state.board_size
    if size == 0:
        return ""
    width = len(str(size * size - 1))
    rows = []
    for row in range(size):
        cells = []
        for col in range(size):
            index = row * size + col
            value = state.cells[index]
            text = value if value in PLAYERS else str(index)
            cells.append(f" {text:>{width}} ")
        rows.append("|".join(cells))
    separator = "+".join("-" * (width + 2) for _ in range(size))
    return f"\n{separator}\n".join(rows)


def print_game_state(state: GameState) -> None:
    """Print a readable summary of game state."""
    print(f"\n{'='*40}")
    if not state.has_session:
        print("No active session. Choose a board size.")
        print(f"{'='*40}")
        return
    print(f"{state.board_size}x{state.board_size} | Round {state.round_number} | "
          + " | ".join(get_score_labels(state)))
    print(f"{'='*40}")
    print(format_board(state))
    print()
    if state.is_finished:
        print(state.message)
    else:
        print(get_turn_label(state))
