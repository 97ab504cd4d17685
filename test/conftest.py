import os
import sys

import pytest

# Ensure the repo root (containing the `tictactoe` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from tictactoe.engine.actions import choose_board_size, click_cell
from tictactoe.engine.reducer import apply_action
from tictactoe.engine.utils import initialize_game_state


@pytest.fixture()
def empty_state():
    return initialize_game_state(timer_duration=10)


@pytest.fixture()
def start_session(empty_state):
    """Return a function that starts a session of the given size."""
    def _start(size=3):
        state, _ = apply_action(empty_state, choose_board_size(size))
        return state
    return _start


@pytest.fixture()
def play():
    """Return a function that clicks a sequence of cells, alternating players as the engine does."""
    def _play(state, indices):
        events = []
        for index in indices:
            state, evts = apply_action(state, click_cell(index))
            events.extend(evts)
        return state, events
    return _play
