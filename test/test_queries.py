import pytest

from tictactoe.engine.actions import (
    Action,
    choose_board_size,
    click_cell,
    tick_timer,
    reset_round,
    next_round,
    new_game,
)
from tictactoe.engine.reducer import apply_action
from tictactoe.engine.queries import (
    validate_action,
    get_available_controls,
    get_available_action_types,
    get_open_cells,
    get_turn_label,
    get_timer_progress,
    get_score_labels,
    get_board_rows,
    get_game_summary,
)


def test_controls_follow_the_session(empty_state, start_session, play):
    assert get_available_controls(empty_state) == ["choose_board_size"]

    state = start_session(3)
    assert get_available_controls(state) == ["reset_round", "new_game"]

    state, _ = play(state, [0, 3, 1, 4, 2])
    assert get_available_controls(state) == ["next_round", "new_game"]


def test_validate_matches_what_the_reducer_ignores(empty_state, start_session, play):
    state, _ = play(start_session(3), [0])
    cases = [
        (empty_state, click_cell(0), False),
        (empty_state, reset_round(), False),
        (empty_state, tick_timer(), False),
        (empty_state, choose_board_size(6), False),
        (empty_state, choose_board_size(3), True),
        (empty_state, new_game(), True),
        (state, click_cell(0), False),
        (state, click_cell(9), False),
        (state, click_cell(1), True),
        (state, tick_timer(), True),
        (state, next_round(), True),
    ]
    for s, action, expected in cases:
        result = validate_action(s, action)
        assert result.valid is expected, (action, result)
        new_state, events = apply_action(s, action)
        if not expected:
            assert new_state == s
            assert events == []
            assert result.error


def test_validate_reports_taken_cell(start_session, play):
    state, _ = play(start_session(3), [4])
    result = validate_action(state, click_cell(4))
    assert result.to_dict() == {"valid": False, "error": "Cell 4 is already taken by X"}


def test_validate_rejects_moves_after_round_end(start_session, play):
    state, _ = play(start_session(3), [0, 3, 1, 4, 2])
    result = validate_action(state, click_cell(8))
    assert not result.valid
    assert "Player X wins!" in result.error


def test_validate_unknown_action(start_session):
    assert not validate_action(start_session(3), Action(type="undo")).valid


def test_available_action_types(empty_state, start_session, play):
    assert "click_cell" not in get_available_action_types(empty_state)
    assert "click_cell" in get_available_action_types(start_session(3))
    state, _ = play(start_session(3), [0, 3, 1, 4, 2])
    assert "click_cell" not in get_available_action_types(state)
    assert "tick_timer" not in get_available_action_types(state)


def test_open_cells(empty_state, start_session, play):
    assert get_open_cells(empty_state) == []
    state, _ = play(start_session(3), [0, 4])
    assert get_open_cells(state) == [1, 2, 3, 5, 6, 7, 8]
    state, _ = play(state, [3, 1, 6])
    assert state.is_finished
    assert get_open_cells(state) == []


def test_turn_label_and_progress(start_session):
    state = start_session(3)
    assert get_turn_label(state) == "Player X's turn: 10 s"
    assert get_timer_progress(state) == 1.0
    for _ in range(4):
        state, _ = apply_action(state, tick_timer())
    assert get_turn_label(state) == "Player X's turn: 6 s"
    assert get_timer_progress(state) == pytest.approx(0.6)


def test_score_labels(start_session, play):
    state, _ = play(start_session(3), [0, 3, 1, 4, 2])
    assert get_score_labels(state) == ["Player X: 1", "Player O: 0"]


def test_board_rows(start_session, play):
    state, _ = play(start_session(3), [0, 4])
    assert get_board_rows(state) == [["X", "_", "_"], ["_", "O", "_"], ["_", "_", "_"]]


def test_game_summary(empty_state, start_session, play):
    summary = get_game_summary(empty_state)
    assert summary["has_session"] is False
    assert summary["rows"] == []
    assert summary["turn_label"] == ""
    assert summary["board_sizes"] == [3, 4, 5]

    state, _ = play(start_session(3), [0, 1, 2, 4, 3, 5, 7, 6, 8])
    summary = get_game_summary(state)
    assert summary["result_message"] == "It's a draw!"
    assert summary["controls"] == ["next_round", "new_game"]
    assert summary["open_cells"] == []
