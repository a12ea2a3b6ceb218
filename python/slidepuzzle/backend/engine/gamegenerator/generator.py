"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random

from slidepuzzle.backend.models.board import Board
from slidepuzzle.config import SHUFFLE_MAX_ATTEMPTS

logger = logging.getLogger(__name__)


class GameGenerator:
    """Creates solvable puzzles by uniformly permuting the tiles."""

    @staticmethod
    def shuffle_to_solvable(
        board: Board,
        rng: random.Random | None = None,
        max_attempts: int = SHUFFLE_MAX_ATTEMPTS,
    ) -> None:
        """Shuffle *board* in-place until it is solvable and not solved.

        Each attempt is a Fisher-Yates pass over the current tiles. Half of
        all permutations are solvable, so a handful of attempts is typical;
        after *max_attempts* the board falls back to :meth:`fallback`.
        """
        rng = rng or random.Random()
        tiles = board.tiles
        n = len(tiles)

        for _ in range(max_attempts):
            for i in range(n - 1, 0, -1):
                j = rng.randint(0, i)
                tiles[i], tiles[j] = tiles[j], tiles[i]
            if board.is_solvable() and not board.is_solved():
                return

        logger.warning(
            "No solvable shuffle after %d attempts on %dx%d; using fallback",
            max_attempts, board.size, board.size,
        )
        GameGenerator.fallback(board)

    @staticmethod
    def fallback(board: Board) -> None:
        """Solved arrangement with the last tile slid right into the corner.

        One legal move away from the goal, so always solvable.
        """
        n = board.size * board.size
        board.tiles[:] = [*range(1, n - 1), 0, n - 1]

    @staticmethod
    def generate(size: int, rng: random.Random | None = None) -> Board:
        """Return a random *solvable*, unsolved board of the given size."""
        board = Board.solved(size)
        GameGenerator.shuffle_to_solvable(board, rng)
        return board
