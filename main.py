"""
Main entry point for the Timed Tic-Tac-Toe Game Engine.
Demonstrates core functionality with a few scripted scenarios.
"""

from tictactoe.engine.actions import (
    choose_board_size,
    click_cell,
    tick_timer,
    next_round,
    reset_round,
    new_game,
)
from tictactoe.engine.reducer import apply_action, replay_from_actions
from tictactoe.engine.utils import initialize_game_state, print_game_state


def main():
    print("Timed Tic-Tac-Toe Game Engine")
    print("=" * 60)

    state = initialize_game_state()
    print("\n[INITIAL STATE]")
    print_game_state(state)

    # ===== SCENARIO 1: X takes the top row =====
    print("\n[SCENARIO 1: Row Win on 3x3]")
    state, events = apply_action(state, choose_board_size(3))
    print(f"  Events: {[e.type for e in events]}")

    # X: 0, 1, 2  O: 3, 4
    for index in (0, 3, 1, 4, 2):
        state, events = apply_action(state, click_cell(index))
        print(f"  click {index}: {[e.type for e in events]}")
    print_game_state(state)

    print("\nClicking cell 8 after the round ended (ignored)...")
    state, events = apply_action(state, click_cell(8))
    print(f"  Events: {events} | cell 8 = {state.cells[8]!r}")

    # ===== SCENARIO 2: Draw, score carried over =====
    print("\n[SCENARIO 2: Draw in the Next Round]")
    state, events = apply_action(state, next_round())
    print(f"  Events: {[e.type for e in events]}")

    # X O X / X O O / O X X
    for index in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        state, _ = apply_action(state, click_cell(index))
    print_game_state(state)
    print(f"Scores kept across rounds: {state.scores}")

    # ===== SCENARIO 3: Timeout forfeit =====
    print("\n[SCENARIO 3: Turn Timeout]")
    state, _ = apply_action(state, reset_round())
    print(f"Player {state.current_player} has {state.time_left}s")
    for _ in range(state.timer_duration):
        state, events = apply_action(state, tick_timer())
    print(f"  Last tick events: {[e.type for e in events]}")
    print(f"Now Player {state.current_player} has {state.time_left}s; board untouched: "
          f"{all(c == '_' for c in state.cells)}")

    # ===== SCENARIO 4: Replay on a 5x5 board =====
    print("\n[SCENARIO 4: Anti-diagonal on 5x5 via replay]")
    actions = [choose_board_size(5)]
    # X: 4, 8, 12, 16, 20 (anti-diagonal)  O: 0, 1, 2, 3
    for x, o in zip((4, 8, 12, 16), (0, 1, 2, 3)):
        actions.extend([click_cell(x), click_cell(o)])
    actions.append(click_cell(20))
    state, events = replay_from_actions(state, actions)
    print(f"  {len(events)} events, winning line {state.winning_line}")
    print_game_state(state)

    # ===== SCENARIO 5: New game =====
    print("\n[SCENARIO 5: New Game]")
    state, events = apply_action(state, new_game())
    print(f"  Events: {[e.to_dict() for e in events]}")
    print_game_state(state)

    print("\n" + "=" * 60)
    print("✓ Demonstrated: row win, draw, score carry-over, timeout forfeit, replay, new game")
    print("=" * 60)


if __name__ == "__main__":
    main()
