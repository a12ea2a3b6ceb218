"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

from slidepuzzle.backend.engine.gameclock import GameClock
from slidepuzzle.backend.models.board import Board


class GameState:
    """Holds the current board, move counter, and clock."""

    def __init__(self, board: Board, clock: GameClock) -> None:
        self.board = board
        self.clock = clock
        self.moves: int = 0
        self.has_started: bool = False

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> int:
        return self.clock.elapsed

    def pause(self) -> bool:
        return self.clock.pause()

    def resume(self) -> bool:
        if self.is_solved:
            return False
        return self.clock.resume()

    # -- moves ----------------------------------------------------------------

    def apply_move(self, index: int) -> bool:
        """Slide the tile at *index*; the first legal move starts the clock."""
        if not self.board.apply_move(index):
            return False
        self.clock.start()
        self.has_started = True
        self.moves += 1
        return True

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()

    @property
    def is_paused(self) -> bool:
        return (
            self.has_started
            and self.clock.started
            and not self.clock.running
            and not self.is_solved
        )
