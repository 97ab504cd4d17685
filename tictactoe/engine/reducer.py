"""
Main game reducer.
Applies actions to state, enforcing rules and producing new state.
Returns (new_state, events) where events describe what happened.

Player intents that the rules do not allow (a taken cell, a move after the
round ended, an unsupported board size) are ignored: the state comes back
unchanged and no events are emitted.
"""

from tictactoe.engine.state import GameState
from tictactoe.engine.actions import (
    Action,
    CHOOSE_BOARD_SIZE,
    CLICK_CELL,
    TICK_TIMER,
    RESET_ROUND,
    NEXT_ROUND,
    NEW_GAME,
)
from tictactoe.engine.board import (
    empty_board,
    cell_position,
    find_winning_line,
    check_for_draw,
)
from tictactoe.engine.events import (
    GameEvent,
    session_started,
    session_ended,
    round_reset,
    mark_placed,
    turn_changed,
    timer_ticked,
    turn_timed_out,
    round_won,
    round_drawn,
    score_changed,
)
from tictactoe.engine import (
    EMPTY,
    PLAYERS,
    PLAYER_X,
    BOARD_SIZES,
    IN_PROGRESS,
    WIN,
    DRAW,
    other_player,
)


def win_message(player: str) -> str:
    return f"Player {player} wins!"


DRAW_MESSAGE = "It's a draw!"


def apply_action(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single action to the current state, returning new state and events.

    The input state is never mutated. Ignored intents return a copy of the
    input state and an empty event list.

    Raises:
        ValueError: if the action type is unknown
    """
    new_state = state.copy()

    if action.type == CHOOSE_BOARD_SIZE:
        return _handle_choose_board_size(new_state, action)

    elif action.type == CLICK_CELL:
        return _handle_click_cell(new_state, action)

    elif action.type == TICK_TIMER:
        return _handle_tick_timer(new_state)

    elif action.type in (RESET_ROUND, NEXT_ROUND):
        return _handle_reset_round(new_state, action)

    elif action.type == NEW_GAME:
        return _handle_new_game(new_state)

    raise ValueError(f"Unknown action type: {action.type}")


def _handle_choose_board_size(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """
    Start a new session on the chosen board.
    Sizes other than 3, 4 or 5 are ignored; callers are expected to reject them first.
    """
    size = action.payload.get("size")
    if isinstance(size, bool) or size not in BOARD_SIZES:
        return state, []

    state.board_size = size
    state.cells = empty_board(size)
    state.current_player = PLAYER_X
    state.outcome = IN_PROGRESS
    state.winner = None
    state.message = ""
    state.winning_line = []
    state.scores = {p: 0 for p in PLAYERS}
    state.time_left = state.timer_duration
    state.session_number += 1
    state.round_number = 1
    state.turn_number = 1

    return state, [session_started(size, state.session_number)]


def _handle_click_cell(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """
    Place the current player's mark, then resolve win, draw or turn change.
    The countdown restarts whatever the result.
    """
    index = action.payload.get("index")
    if not state.has_session or state.is_finished:
        return state, []
    if isinstance(index, bool) or not isinstance(index, int):
        return state, []
    if not 0 <= index < len(state.cells) or state.cells[index] != EMPTY:
        return state, []

    player = state.current_player
    events: list[GameEvent] = []

    state.cells[index] = player
    row, col = cell_position(index, state.board_size)
    events.append(mark_placed(player, index, row, col))

    line = find_winning_line(state.cells, state.board_size, player)
    if line is not None:
        state.outcome = WIN
        state.winner = player
        state.winning_line = line
        state.message = win_message(player)
        old_score = state.scores[player]
        state.scores[player] = old_score + 1
        events.append(round_won(player, line, state.message))
        events.append(score_changed(player, old_score, state.scores[player]))
    elif check_for_draw(state.cells):
        state.outcome = DRAW
        state.message = DRAW_MESSAGE
        events.append(round_drawn(state.message))
    else:
        events.append(_switch_player(state, reason="move"))

    state.time_left = state.timer_duration
    return state, events


def _handle_tick_timer(state: GameState) -> tuple[GameState, list[GameEvent]]:
    """
    Count down one second of the current turn.
    At zero the turn is forfeited: the opponent moves next and the countdown restarts.
    """
    if not state.has_session or state.is_finished:
        return state, []

    state.time_left = max(0, state.time_left - 1)
    events = [timer_ticked(state.current_player, state.time_left)]

    if state.time_left == 0:
        events.append(turn_timed_out(state.current_player))
        events.append(_switch_player(state, reason="timeout"))
        state.time_left = state.timer_duration

    return state, events


def _handle_reset_round(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """Clear the board for a new round in the same session. Scores are kept."""
    if not state.has_session:
        return state, []

    state.cells = empty_board(state.board_size)
    state.current_player = PLAYER_X
    state.outcome = IN_PROGRESS
    state.winner = None
    state.message = ""
    state.winning_line = []
    state.time_left = state.timer_duration
    state.round_number += 1
    state.turn_number = 1

    return state, [round_reset(state.round_number, action.type)]


def _handle_new_game(state: GameState) -> tuple[GameState, list[GameEvent]]:
    """Tear down the session and go back to board size selection."""
    events: list[GameEvent] = []
    if state.has_session:
        events.append(session_ended(state.board_size, state.scores))

    state.board_size = 0
    state.cells = []
    state.current_player = PLAYER_X
    state.outcome = IN_PROGRESS
    state.winner = None
    state.message = ""
    state.winning_line = []
    state.scores = {p: 0 for p in PLAYERS}
    state.time_left = state.timer_duration
    state.round_number = 0
    state.turn_number = 0

    return state, events


def _switch_player(state: GameState, reason: str) -> GameEvent:
    """Hand the turn to the other player. Starts a new timer identity."""
    old_player = state.current_player
    state.current_player = other_player(old_player)
    state.turn_number += 1
    return turn_changed(old_player, state.current_player, state.turn_number, reason)


def replay_from_actions(
    initial_state: GameState,
    actions: list[Action],
) -> tuple[GameState, list[GameEvent]]:
    """
    Replay a series of actions from an initial state.
    Event sourcing: state is derived from action log.

    Returns:
        Tuple of (final_state, all_events) after all actions applied
    """
    current_state = initial_state.copy()
    all_events: list[GameEvent] = []

    for action in actions:
        current_state, events = apply_action(current_state, action)
        all_events.extend(events)

    return current_state, all_events
