"""Game-wide constants and data directory resolution."""

from __future__ import annotations

import os
from pathlib import Path

# -- board --------------------------------------------------------------------

MIN_SIZE = 3
MAX_SIZE = 10
DEFAULT_SIZE = 3

# Fisher-Yates rounds before falling back to a fixed scramble.
SHUFFLE_MAX_ATTEMPTS = 10_000

# -- timing (milliseconds) ----------------------------------------------------

TICK_INTERVAL_MS = 100
STATUS_CLEAR_DELAY_MS = 3000

# -- leaderboard / players ----------------------------------------------------

TOP_N = 10
DEFAULT_PLAYER = "Player 1"

# -- storage keys -------------------------------------------------------------

ACTIVE_PLAYER_KEY = "activePlayer"
PLAYERS_KEY = "players"
LEADERBOARD_KEY = "leaderboard"

DATA_DIR_ENV = "SLIDEPUZZLE_DATA_DIR"


def data_dir() -> Path:
    """Directory holding the persisted roster and leaderboard."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".slidepuzzle"
