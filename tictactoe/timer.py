"""
Turn countdown scheduler.
The engine only knows how to count down one second (tick_timer); this module
supplies the wall clock. One repeating asyncio task per game ticks the current
turn and is replaced whenever the turn's identity (session, round, turn)
changes, so a countdown from a previous turn never ticks into the next one.
"""

import asyncio
from typing import Callable

from tictactoe.config import TICK_INTERVAL_SECONDS
from tictactoe.engine.state import GameState

TimerKey = tuple[int, int, int]

# on_tick(game_id, key) applies one tick if the game still has this key and
# returns the new state; returns None when the game is gone or the key is stale.
TickCallback = Callable[[str, TimerKey], GameState | None]


def timer_should_run(state: GameState) -> bool:
    return state.has_session and not state.is_finished


class TurnTimerScheduler:
    """Keeps at most one countdown task per game id."""

    def __init__(self, on_tick: TickCallback, interval: float = TICK_INTERVAL_SECONDS):
        self.on_tick = on_tick
        self.interval = interval
        # game_id -> (timer key, task)
        self._tasks: dict[str, tuple[TimerKey, asyncio.Task]] = {}

    def running_key(self, game_id: str) -> TimerKey | None:
        entry = self._tasks.get(game_id)
        return entry[0] if entry else None

    def sync(self, game_id: str, state: GameState) -> None:
        """
        Make the running countdown match state. Call after every mutation.

        - Round over or no session: cancel.
        - Turn identity changed: cancel and start fresh.
        - Same identity already running: leave it alone.

        Must be called from inside a running event loop.
        """
        entry = self._tasks.get(game_id)
        should_run = timer_should_run(state)
        if entry is not None and (not should_run or entry[0] != state.timer_key):
            self.cancel(game_id)
            entry = None
        if should_run and entry is None:
            key = state.timer_key
            task = asyncio.get_running_loop().create_task(self._run(game_id, key))
            self._tasks[game_id] = (key, task)
            print(f"[timer-start] game={game_id} key={key} time_left={state.time_left}s", flush=True)

    def cancel(self, game_id: str) -> None:
        entry = self._tasks.pop(game_id, None)
        if entry is None:
            return
        key, task = entry
        task.cancel()
        print(f"[timer-cancel] game={game_id} key={key}", flush=True)

    async def shutdown(self) -> None:
        """Cancel every countdown and wait for the tasks to finish."""
        tasks = [task for _, task in self._tasks.values()]
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, game_id: str, key: TimerKey) -> None:
        state = None
        try:
            while True:
                await asyncio.sleep(self.interval)
                state = self.on_tick(game_id, key)
                if state is None:
                    print(f"[timer-stale] game={game_id} key={key}", flush=True)
                    break
                if state.timer_key != key or not timer_should_run(state):
                    break
        finally:
            entry = self._tasks.get(game_id)
            if entry is not None and entry[1] is asyncio.current_task():
                del self._tasks[game_id]
        # The tick itself changed the turn (timeout forfeit): start the next countdown.
        if state is not None:
            self.sync(game_id, state)
