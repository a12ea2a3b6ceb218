"""Per-board-size, per-player best scores."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple

from slidepuzzle.backend.errors import CorruptPersistedState
from slidepuzzle.backend.storage import KeyValueStore, read_json, write_json
from slidepuzzle.config import LEADERBOARD_KEY, TOP_N

logger = logging.getLogger(__name__)


@dataclass
class LeaderboardRecord:
    player_name: str
    best_moves: int | None = None
    best_time: int | None = None  # milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerName": self.player_name,
            "bestMoves": self.best_moves,
            "bestTime": self.best_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LeaderboardRecord:
        name = data["playerName"]
        moves = data.get("bestMoves")
        elapsed = data.get("bestTime")
        if not isinstance(name, str) or not name:
            raise ValueError(f"bad player name {name!r}")
        for value in (moves, elapsed):
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                raise ValueError(f"bad score {value!r} for {name!r}")
        return cls(player_name=name, best_moves=moves, best_time=elapsed)


class RecordFlags(NamedTuple):
    """Which bests a single completion improved."""

    moves: bool
    time: bool


class RankedRecord(NamedTuple):
    rank: int
    record: LeaderboardRecord


# -- orderings ----------------------------------------------------------------

# Missing values sort after every real score.
_MISSING = float("inf")


def by_time_then_moves(record: LeaderboardRecord) -> tuple[float, float]:
    return (
        _MISSING if record.best_time is None else record.best_time,
        _MISSING if record.best_moves is None else record.best_moves,
    )


def by_moves_then_time(record: LeaderboardRecord) -> tuple[float, float]:
    return (
        _MISSING if record.best_moves is None else record.best_moves,
        _MISSING if record.best_time is None else record.best_time,
    )


ORDERINGS: dict[str, Callable[[LeaderboardRecord], Any]] = {
    "time": by_time_then_moves,
    "moves": by_moves_then_time,
}


class Leaderboard:
    """Loads, saves, and queries best scores from a key-value store.

    Records for a size keep first-achievement order; ranks are computed
    when read.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._records: dict[int, list[LeaderboardRecord]] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        try:
            data = read_json(self.store, LEADERBOARD_KEY)
            self._records = self._decode(data)
        except CorruptPersistedState as exc:
            logger.warning("%s Starting with an empty leaderboard.", exc)
            self._records = {}

    @staticmethod
    def _decode(data: Any) -> dict[int, list[LeaderboardRecord]]:
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CorruptPersistedState(LEADERBOARD_KEY, "expected an object")
        records: dict[int, list[LeaderboardRecord]] = {}
        try:
            for size_key, entries in data.items():
                records[int(size_key)] = [
                    LeaderboardRecord.from_dict(e) for e in entries
                ]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise CorruptPersistedState(LEADERBOARD_KEY, str(exc)) from exc
        return records

    def save(self) -> None:
        data: dict[str, list[dict[str, Any]]] = {}
        for size, entries in self._records.items():
            data[str(size)] = [e.to_dict() for e in entries]
        write_json(self.store, LEADERBOARD_KEY, data)

    # -- updates --------------------------------------------------------------

    def record_completion(
        self, size: int, player_name: str, moves: int, elapsed: int
    ) -> RecordFlags:
        """Merge a finished game into the player's bests for *size*.

        A best is replaced only by a strictly better result. The whole
        leaderboard is saved afterwards.
        """
        entries = self._records.setdefault(size, [])
        record = self._find(entries, player_name)
        if record is None:
            record = LeaderboardRecord(player_name=player_name)
            entries.append(record)

        new_moves = record.best_moves is None or moves < record.best_moves
        if new_moves:
            record.best_moves = moves

        new_time = record.best_time is None or elapsed < record.best_time
        if new_time:
            record.best_time = elapsed

        self.save()
        if new_moves or new_time:
            logger.info(
                "New %s record for %s on %dx%d: %d moves, %d ms",
                "/".join(k for k, v in (("moves", new_moves), ("time", new_time)) if v),
                player_name, size, size, moves, elapsed,
            )
        return RecordFlags(moves=new_moves, time=new_time)

    def remove_player(self, player_name: str) -> None:
        """Drop every record held by *player_name*, across all sizes."""
        for size in list(self._records):
            self._records[size] = [
                r for r in self._records[size] if r.player_name != player_name
            ]
        self.save()

    # -- queries --------------------------------------------------------------

    def get_records(self, size: int) -> list[LeaderboardRecord]:
        """Snapshot of the records for *size*, in first-achievement order."""
        return [
            LeaderboardRecord(r.player_name, r.best_moves, r.best_time)
            for r in self._records.get(size, [])
        ]

    def get_record(self, size: int, player_name: str) -> LeaderboardRecord | None:
        return self._find(self._records.get(size, []), player_name)

    def get_all_sizes(self) -> list[int]:
        return sorted(size for size, entries in self._records.items() if entries)

    def ranked(
        self, size: int, order: Callable[[LeaderboardRecord], Any] = by_time_then_moves
    ) -> list[RankedRecord]:
        ordered = sorted(self.get_records(size), key=order)
        return [RankedRecord(rank, r) for rank, r in enumerate(ordered, 1)]

    def top_ten_for(
        self,
        size: int,
        active_player: str,
        order: Callable[[LeaderboardRecord], Any] = by_time_then_moves,
    ) -> list[RankedRecord]:
        """First :data:`TOP_N` ranked records, plus the active player's own.

        The active player's record is appended only when it ranks below the
        cut.
        """
        ranked = self.ranked(size, order)
        top = ranked[:TOP_N]
        if any(entry.record.player_name == active_player for entry in top):
            return top
        for entry in ranked[TOP_N:]:
            if entry.record.player_name == active_player:
                return [*top, entry]
        return top

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _find(
        entries: list[LeaderboardRecord], player_name: str
    ) -> LeaderboardRecord | None:
        for record in entries:
            if record.player_name == player_name:
                return record
        return None
