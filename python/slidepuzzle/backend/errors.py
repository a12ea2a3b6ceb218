"""Error kinds raised by the puzzle backend.

None of these are fatal: the game session either ignores them or turns them
into a transient status message.
"""

from __future__ import annotations

from slidepuzzle.config import MAX_SIZE, MIN_SIZE


class PuzzleError(Exception):
    """Base class for every backend error."""


class InvalidSize(PuzzleError, ValueError):
    def __init__(self, size: int) -> None:
        super().__init__(f"Board size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}.")
        self.size = size


class IllegalMove(PuzzleError, ValueError):
    def __init__(self, index: int, reason: str) -> None:
        super().__init__(f"Cannot move tile at index {index}: {reason}.")
        self.index = index
        self.reason = reason


class DuplicateName(PuzzleError, ValueError):
    def __init__(self, name: str) -> None:
        if name:
            message = f'Player "{name}" already exists.'
        else:
            message = "Player name cannot be empty."
        super().__init__(message)
        self.name = name


class LastPlayerProtected(PuzzleError):
    def __init__(self, name: str) -> None:
        super().__init__(f'Cannot remove "{name}": at least one player is required.')
        self.name = name


class UnknownPlayer(PuzzleError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f'Unknown player "{self.name}".'


class CorruptPersistedState(PuzzleError, ValueError):
    def __init__(self, key: str, detail: str) -> None:
        super().__init__(f"Stored {key!r} is malformed: {detail}")
        self.key = key
