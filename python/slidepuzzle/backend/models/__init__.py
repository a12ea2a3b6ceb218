from slidepuzzle.backend.models.board import Board, Direction
from slidepuzzle.backend.models.leaderboard import (
    Leaderboard,
    LeaderboardRecord,
    RankedRecord,
    RecordFlags,
)
from slidepuzzle.backend.models.players import NameEditMode, PlayerRegistry

__all__ = [
    "Board",
    "Direction",
    "Leaderboard",
    "LeaderboardRecord",
    "NameEditMode",
    "PlayerRegistry",
    "RankedRecord",
    "RecordFlags",
]
