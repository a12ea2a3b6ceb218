"""Board model for the sliding puzzle game."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from slidepuzzle.backend.errors import IllegalMove, InvalidSize
from slidepuzzle.config import MAX_SIZE, MIN_SIZE

logger = logging.getLogger(__name__)


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


def validate_size(size: int) -> int:
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise InvalidSize(size)
    return size


@dataclass
class Board:
    """Represents the sliding puzzle board.

    Tiles are stored as a flat row-major list of ints. 0 represents the
    blank space.
    """

    size: int
    tiles: list[int]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, size: int) -> Board:
        """Return the goal-state board: ``[1 .. size²-1, 0]``.

        Raises :class:`InvalidSize` outside the supported range.
        """
        validate_size(size)
        tiles = list(range(1, size * size))
        tiles.append(0)
        return cls(size=size, tiles=tiles)

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        validate_size(size)
        if sorted(flat) != list(range(size * size)):
            raise ValueError(
                f"Expected a permutation of 0..{size * size - 1} for a "
                f"{size}×{size} board, got {flat}."
            )
        return cls(size=size, tiles=list(flat))

    # -- queries --------------------------------------------------------------

    def get_tile(self, row: int, col: int) -> int:
        return self.tiles[row * self.size + col]

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions."""
        last = len(self.tiles) - 1
        for i in range(last):
            if self.tiles[i] != i + 1:
                return False
        return self.tiles[last] == 0

    def is_tile_correct(self, index: int) -> bool:
        """Check if the tile at *index* sits in its goal position."""
        val = self.tiles[index]
        if val == 0:
            return index == len(self.tiles) - 1
        return val == index + 1

    def blank_index(self) -> int:
        return self.tiles.index(0)

    def is_adjacent(self, index: int) -> bool:
        """True if *index* is one row or one column away from the blank."""
        blank = self.blank_index()
        r1, c1 = divmod(index, self.size)
        r2, c2 = divmod(blank, self.size)
        return abs(r1 - r2) + abs(c1 - c2) == 1

    def neighbor_of_blank(self, direction: Direction) -> int | None:
        """Index of the tile that would slide into the blank in *direction*.

        E.g. ``Direction.UP`` names the tile **below** the blank. Returns
        ``None`` when that cell is off the board.
        """
        br, bc = divmod(self.blank_index(), self.size)

        # The offset points to the tile that will slide into the blank.
        offsets = {
            Direction.UP: (1, 0),
            Direction.DOWN: (-1, 0),
            Direction.LEFT: (0, 1),
            Direction.RIGHT: (0, -1),
        }
        dr, dc = offsets[direction]
        tr, tc = br + dr, bc + dc

        if not (0 <= tr < self.size and 0 <= tc < self.size):
            return None
        return tr * self.size + tc

    # -- solvability ----------------------------------------------------------

    @staticmethod
    def count_inversions(tiles: list[int]) -> int:
        """Pairs ``i < j`` with ``tiles[i] > tiles[j]``, ignoring the blank."""
        flat = [v for v in tiles if v != 0]
        inversions = 0
        for i in range(len(flat)):
            for j in range(i + 1, len(flat)):
                if flat[i] > flat[j]:
                    inversions += 1
        return inversions

    def is_solvable(self, tiles: list[int] | None = None) -> bool:
        """Return True if *tiles* (default: this board) can reach the goal.

        Odd widths need an even inversion count. Even widths also count the
        blank's row, numbered from 1 at the bottom.
        """
        if tiles is None:
            tiles = self.tiles
        inversions = self.count_inversions(tiles)
        if self.size % 2 == 1:
            return inversions % 2 == 0
        blank_row_from_bottom = self.size - tiles.index(0) // self.size
        return (inversions + blank_row_from_bottom) % 2 == 1

    # -- moves ----------------------------------------------------------------

    def check_move(self, index: int) -> None:
        """Raise :class:`IllegalMove` unless the tile at *index* can slide."""
        if not 0 <= index < len(self.tiles):
            raise IllegalMove(index, "off the board")
        if self.tiles[index] == 0:
            raise IllegalMove(index, "tile is the blank")
        if not self.is_adjacent(index):
            raise IllegalMove(index, "not adjacent to the blank")

    def apply_move(self, index: int) -> bool:
        """Slide the tile at *index* into the blank.

        Returns True if the move was legal and applied; illegal targets are
        ignored.
        """
        try:
            self.check_move(index)
        except IllegalMove as exc:
            logger.debug("Ignoring move: %s", exc)
            return False

        blank = self.blank_index()
        self.tiles[index], self.tiles[blank] = self.tiles[blank], self.tiles[index]
        return True

    def copy(self) -> Board:
        return Board(size=self.size, tiles=self.tiles[:])
