"""Roster of known player names and the active identity."""

from __future__ import annotations

import logging
from enum import Enum

from slidepuzzle.backend.errors import (
    CorruptPersistedState,
    DuplicateName,
    LastPlayerProtected,
    UnknownPlayer,
)
from slidepuzzle.backend.models.leaderboard import Leaderboard
from slidepuzzle.backend.storage import KeyValueStore, read_json, write_json
from slidepuzzle.config import ACTIVE_PLAYER_KEY, DEFAULT_PLAYER, PLAYERS_KEY

logger = logging.getLogger(__name__)


class NameEditMode(Enum):
    """What the name field of the presentation layer is being used for."""

    IDLE = "idle"
    ADDING = "adding"
    EDITING = "editing"


class PlayerRegistry:
    """Sorted, case-sensitive set of player names plus the active one.

    The roster is never empty. Removing a player also removes their
    leaderboard records; renaming does not carry them over.
    """

    def __init__(self, store: KeyValueStore, leaderboard: Leaderboard) -> None:
        self.store = store
        self.leaderboard = leaderboard
        self._names: list[str] = []
        self._active: str = DEFAULT_PLAYER
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        try:
            self._names = self._decode_roster(read_json(self.store, PLAYERS_KEY))
        except CorruptPersistedState as exc:
            logger.warning("%s Resetting the player roster.", exc)
            self._names = []

        try:
            active = read_json(self.store, ACTIVE_PLAYER_KEY)
        except CorruptPersistedState as exc:
            logger.warning("%s Resetting the active player.", exc)
            active = None

        active = active.strip() if isinstance(active, str) else ""
        if not self._names:
            self._names = [active or DEFAULT_PLAYER]
        self._active = active if active in self._names else self._names[0]

    @staticmethod
    def _decode_roster(data: object) -> list[str]:
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(n, str) for n in data):
            raise CorruptPersistedState(PLAYERS_KEY, "expected a list of names")
        return sorted({n.strip() for n in data if n.strip()})

    def save(self) -> None:
        write_json(self.store, PLAYERS_KEY, self._names)
        write_json(self.store, ACTIVE_PLAYER_KEY, self._active)

    # -- queries --------------------------------------------------------------

    @property
    def names(self) -> list[str]:
        return list(self._names)

    @property
    def active(self) -> str:
        return self._active

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    # -- commands -------------------------------------------------------------

    def add_player(self, name: str) -> str:
        """Add *name* and make it the active player.

        Raises :class:`DuplicateName` if the trimmed name is empty or taken.
        """
        name = name.strip()
        if not name or name in self._names:
            raise DuplicateName(name)
        self._names.append(name)
        self._names.sort()
        self._active = name
        self.save()
        logger.info("Added player %s", name)
        return name

    def rename_player(self, old_name: str, new_name: str) -> str:
        old_name = old_name.strip()
        new_name = new_name.strip()
        if old_name not in self._names:
            raise UnknownPlayer(old_name)
        if new_name == old_name:
            return old_name
        if not new_name or new_name in self._names:
            raise DuplicateName(new_name)

        self._names[self._names.index(old_name)] = new_name
        self._names.sort()
        if self._active == old_name:
            self._active = new_name
        self.save()
        logger.info("Renamed player %s to %s", old_name, new_name)
        return new_name

    def remove_player(self, name: str) -> None:
        """Remove *name* and every leaderboard record it holds.

        Raises :class:`LastPlayerProtected` when *name* is the only player.
        """
        if name not in self._names:
            raise UnknownPlayer(name)
        if len(self._names) == 1:
            raise LastPlayerProtected(name)

        self._names.remove(name)
        self.leaderboard.remove_player(name)
        if self._active == name:
            self._active = self._names[0]
        self.save()
        logger.info("Removed player %s", name)

    def select_player(self, name: str) -> None:
        if name not in self._names:
            raise UnknownPlayer(name)
        self._active = name
        self.save()

    def submit_name(
        self, mode: NameEditMode, name: str, original: str | None = None
    ) -> str | None:
        """Apply the name field according to *mode*.

        ``ADDING`` adds *name*; ``EDITING`` renames *original* to *name*;
        ``IDLE`` does nothing.
        """
        if mode is NameEditMode.ADDING:
            return self.add_player(name)
        if mode is NameEditMode.EDITING:
            if original is None:
                raise UnknownPlayer("")
            return self.rename_player(original, name)
        return None
