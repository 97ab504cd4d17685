"""
FastAPI presentation adapter for Timed Tic-Tac-Toe.
Forwards UI intents to the engine and returns state snapshots to render.
Games live in memory only and are lost when the process stops.

Endpoints are async so every intent and every timer tick runs on the event
loop one at a time.
"""

import traceback
import uuid
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from tictactoe.config import API_HOST, API_PORT, BOARD_SIZES, CORS_ORIGINS, TIMER_DURATION
from tictactoe.engine.state import GameState
from tictactoe.engine.actions import (
    Action,
    choose_board_size,
    click_cell,
    tick_timer,
    reset_round,
    next_round,
    new_game,
)
from tictactoe.engine.events import GameEvent
from tictactoe.engine.reducer import apply_action
from tictactoe.engine.queries import (
    get_available_action_types,
    get_available_controls,
    get_game_summary,
    get_open_cells,
)
from tictactoe.engine.utils import initialize_game_state
from tictactoe.timer import TimerKey, TurnTimerScheduler

app = FastAPI(
    title="Timed Tic-Tac-Toe API",
    description="Local API for a two-player tic-tac-toe with a per-turn countdown",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    """Log method and path so 500s can be traced to the failing endpoint."""
    method = getattr(request, "method", "?")
    url = getattr(request, "url", None)
    path = url.path if url else "?"
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            print(f"[500] {method} {path}", flush=True)
        return response
    except Exception:
        print(f"[500] {method} {path} (exception)", flush=True)
        raise


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    """Return 500 with the error detail so the frontend can show it."""
    traceback.print_exc()
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# In-memory game table: game_id -> current state
games: dict[str, GameState] = {}


def _apply_scheduled_tick(game_id: str, key: TimerKey) -> GameState | None:
    """Tick callback for the scheduler. Ignores ticks from a countdown that no longer matches the game."""
    state = games.get(game_id)
    if state is None or state.timer_key != key:
        return None
    new_state, _ = apply_action(state, tick_timer())
    games[game_id] = new_state
    return new_state


scheduler = TurnTimerScheduler(_apply_scheduled_tick)


# ===== Pydantic Models =====

class CreateGameRequest(BaseModel):
    """Optionally start a session right away."""
    board_size: Literal[3, 4, 5] | None = None


class BoardSizeRequest(BaseModel):
    size: Literal[3, 4, 5]


# ===== Helpers =====

def get_game(game_id: str) -> GameState:
    state = games.get(game_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return state


def state_for_response(game_id: str, state: GameState, events: list[GameEvent] | None = None) -> dict[str, Any]:
    return {
        "game_id": game_id,
        "state": state.to_dict(),
        "summary": get_game_summary(state),
        "events": [e.to_dict() for e in (events or [])],
    }


def dispatch(game_id: str, action: Action) -> dict[str, Any]:
    """Apply an action to a stored game, store the result and resync its countdown."""
    state = get_game(game_id)
    new_state, events = apply_action(state, action)
    games[game_id] = new_state
    scheduler.sync(game_id, new_state)
    return state_for_response(game_id, new_state, events)


@app.on_event("shutdown")
async def on_shutdown():
    await scheduler.shutdown()


# ===== API Endpoints =====

@app.get("/")
async def root():
    return {"message": "Timed Tic-Tac-Toe API", "version": "1.0.0"}


@app.get("/config")
async def get_config():
    return {
        "timer_duration": TIMER_DURATION,
        "board_sizes": list(BOARD_SIZES),
        "tick_interval": scheduler.interval,
    }


@app.post("/games")
async def create_game(request: CreateGameRequest | None = None):
    """Create a game. Without board_size the game waits for a size choice."""
    game_id = str(uuid.uuid4())
    games[game_id] = initialize_game_state(timer_duration=TIMER_DURATION)
    if request is not None and request.board_size is not None:
        return dispatch(game_id, choose_board_size(request.board_size))
    return state_for_response(game_id, games[game_id])


@app.get("/games")
async def list_games():
    return {
        "games": [
            {
                "game_id": game_id,
                "board_size": state.board_size,
                "round_number": state.round_number,
                "scores": dict(state.scores),
            }
            for game_id, state in games.items()
        ]
    }


@app.get("/games/{game_id}")
async def get_game_state(game_id: str):
    return state_for_response(game_id, get_game(game_id))


@app.get("/games/{game_id}/available-actions")
async def get_available_actions(game_id: str):
    state = get_game(game_id)
    return {
        "controls": get_available_controls(state),
        "action_types": get_available_action_types(state),
        "open_cells": get_open_cells(state),
    }


@app.post("/games/{game_id}/board-size")
async def do_choose_board_size(game_id: str, request: BoardSizeRequest):
    return dispatch(game_id, choose_board_size(request.size))


@app.post("/games/{game_id}/cells/{index}")
async def do_click_cell(game_id: str, index: int):
    """Play the current player's mark. Taken cells and finished rounds are ignored."""
    return dispatch(game_id, click_cell(index))


@app.post("/games/{game_id}/reset-round")
async def do_reset_round(game_id: str):
    return dispatch(game_id, reset_round())


@app.post("/games/{game_id}/next-round")
async def do_next_round(game_id: str):
    return dispatch(game_id, next_round())


@app.post("/games/{game_id}/new-game")
async def do_new_game(game_id: str):
    return dispatch(game_id, new_game())


@app.post("/games/{game_id}/tick")
async def do_tick(game_id: str):
    """Count down one second by hand, for clients that drive their own clock."""
    return dispatch(game_id, tick_timer())


@app.delete("/games/{game_id}")
async def delete_game(game_id: str):
    get_game(game_id)
    scheduler.cancel(game_id)
    del games[game_id]
    return {"deleted": game_id}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
