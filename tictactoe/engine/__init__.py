"""
Timed Tic-Tac-Toe Game Engine
Core engine without web framework or UI
"""

EMPTY = "_"
PLAYER_X = "X"
PLAYER_O = "O"
PLAYERS = (PLAYER_X, PLAYER_O)

BOARD_SIZES = (3, 4, 5)

# Seconds a player has to move before the turn passes to the opponent.
TIMER_DURATION = 10

# Round outcomes
IN_PROGRESS = "in_progress"
WIN = "win"
DRAW = "draw"


def other_player(player: str) -> str:
    return PLAYER_O if player == PLAYER_X else PLAYER_X
