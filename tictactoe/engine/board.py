"""
Board helpers.
The board is a flat row-major list of cells: index = row * size + col.
All functions are pure and never mutate their input.
"""

from tictactoe.engine import EMPTY


def empty_board(size: int) -> list[str]:
    """Return size * size empty cells (an empty list for size 0)."""
    return [EMPTY] * (size * size)


def cell_index(row: int, col: int, size: int) -> int:
    return row * size + col


def cell_position(index: int, size: int) -> tuple[int, int]:
    """Return (row, col) for a row-major index."""
    return divmod(index, size)


def winning_lines(size: int) -> list[list[int]]:
    """
    All lines that win the round on a size x size board, in check order:
    every row, then every column, then the main diagonal, then the anti-diagonal.
    """
    lines = []
    for row in range(size):
        lines.append([cell_index(row, col, size) for col in range(size)])
    for col in range(size):
        lines.append([cell_index(row, col, size) for row in range(size)])
    lines.append([cell_index(i, i, size) for i in range(size)])
    lines.append([cell_index(i, size - 1 - i, size) for i in range(size)])
    return lines


def find_winning_line(cells: list[str], size: int, player: str) -> list[int] | None:
    """Return the first line fully occupied by player, or None."""
    if size <= 0:
        return None
    for line in winning_lines(size):
        if all(cells[i] == player for i in line):
            return line
    return None


def check_for_winner(cells: list[str], size: int, player: str) -> bool:
    return find_winning_line(cells, size, player) is not None


def check_for_draw(cells: list[str]) -> bool:
    """True when no empty cell is left. Callers check for a win first."""
    return all(c != EMPTY for c in cells)


def empty_cells(cells: list[str]) -> list[int]:
    return [i for i, c in enumerate(cells) if c == EMPTY]
