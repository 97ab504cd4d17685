"""
Single place for default game/server configuration.
Values can be overridden with environment variables (TICTACTOE_*).
"""

import os

from tictactoe.engine import BOARD_SIZES as ENGINE_BOARD_SIZES, TIMER_DURATION as ENGINE_TIMER_DURATION

# Seconds per turn. The turn passes to the opponent when it runs out.
TIMER_DURATION = int(os.environ.get("TICTACTOE_TIMER_DURATION", str(ENGINE_TIMER_DURATION)))

# Wall-clock seconds between timer ticks in the API scheduler.
TICK_INTERVAL_SECONDS = float(os.environ.get("TICTACTOE_TICK_INTERVAL", "1.0"))

BOARD_SIZES = ENGINE_BOARD_SIZES

API_HOST = os.environ.get("TICTACTOE_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("TICTACTOE_PORT", "8000"))

# CORS configuration for a local frontend
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "TICTACTOE_CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000",
    ).split(",")
    if o.strip()
]
