import asyncio

from tictactoe.engine.actions import choose_board_size, click_cell, tick_timer
from tictactoe.engine.reducer import apply_action
from tictactoe.engine.utils import initialize_game_state
from tictactoe.timer import TurnTimerScheduler


class Table:
    """Minimal stand-in for the API's in-memory game table."""

    def __init__(self, interval=0.01):
        self.games = {}
        self.ticks = 0
        self.scheduler = TurnTimerScheduler(self.on_tick, interval=interval)

    def on_tick(self, game_id, key):
        state = self.games.get(game_id)
        if state is None or state.timer_key != key:
            return None
        self.ticks += 1
        self.games[game_id], _ = apply_action(state, tick_timer())
        return self.games[game_id]

    def dispatch(self, game_id, action):
        self.games[game_id], _ = apply_action(self.games[game_id], action)
        self.scheduler.sync(game_id, self.games[game_id])
        return self.games[game_id]


async def wait_until(predicate, timeout=2.0):
    async def _poll():
        while not predicate():
            await asyncio.sleep(0.005)
    await asyncio.wait_for(_poll(), timeout)


def new_table(duration=3, interval=0.01):
    table = Table(interval=interval)
    table.games["g"] = initialize_game_state(timer_duration=duration)
    return table


def test_countdown_forfeits_and_restarts():
    async def scenario():
        table = new_table(duration=3)
        state = table.dispatch("g", choose_board_size(3))
        assert table.scheduler.running_key("g") == state.timer_key

        await wait_until(lambda: table.games["g"].current_player == "O")
        state = table.games["g"]
        assert state.cells == ["_"] * 9
        # A fresh countdown is running for O's turn.
        await wait_until(lambda: table.scheduler.running_key("g") == table.games["g"].timer_key)
        await table.scheduler.shutdown()
        assert table.scheduler.running_key("g") is None

    asyncio.run(scenario())


def test_no_timer_without_session():
    async def scenario():
        table = new_table()
        table.scheduler.sync("g", table.games["g"])
        assert table.scheduler.running_key("g") is None

    asyncio.run(scenario())


def test_round_end_cancels_countdown():
    async def scenario():
        table = new_table(duration=10, interval=5)
        table.dispatch("g", choose_board_size(3))
        for index in (0, 3, 1, 4, 2):
            table.dispatch("g", click_cell(index))
        assert table.games["g"].outcome == "win"
        assert table.scheduler.running_key("g") is None
        await table.scheduler.shutdown()

    asyncio.run(scenario())


def test_move_replaces_countdown():
    async def scenario():
        table = new_table(duration=10, interval=5)
        first = table.dispatch("g", choose_board_size(3))
        second = table.dispatch("g", click_cell(0))
        assert first.timer_key != second.timer_key
        assert table.scheduler.running_key("g") == second.timer_key
        await table.scheduler.shutdown()

    asyncio.run(scenario())


def test_same_turn_keeps_countdown():
    async def scenario():
        table = new_table(duration=10, interval=5)
        table.dispatch("g", choose_board_size(3))
        task = table.scheduler._tasks["g"][1]
        # Ignored intent: nothing changed, the running countdown is kept.
        table.dispatch("g", click_cell(99))
        assert table.scheduler._tasks["g"][1] is task
        await table.scheduler.shutdown()
        assert task.cancelled()

    asyncio.run(scenario())


def test_stale_countdown_never_ticks_new_turn():
    async def scenario():
        table = new_table(duration=10)
        table.dispatch("g", choose_board_size(3))
        # Change the turn behind the scheduler's back.
        table.games["g"], _ = apply_action(table.games["g"], click_cell(4))
        await wait_until(lambda: table.scheduler.running_key("g") is None)
        assert table.ticks == 0
        assert table.games["g"].time_left == 10
        assert table.games["g"].current_player == "O"

    asyncio.run(scenario())


def test_deleted_game_stops_countdown():
    async def scenario():
        table = new_table(duration=10)
        table.dispatch("g", choose_board_size(3))
        del table.games["g"]
        await wait_until(lambda: table.scheduler.running_key("g") is None)

    asyncio.run(scenario())
