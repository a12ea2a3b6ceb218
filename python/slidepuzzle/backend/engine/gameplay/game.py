"""Core gameplay logic: moves, lifecycle, and records."""

from __future__ import annotations

import logging
import random
from typing import Any, Callable

from slidepuzzle.backend.engine.gameclock import (
    CooperativeScheduler,
    GameClock,
    Task,
    format_elapsed,
    monotonic_ms,
)
from slidepuzzle.backend.engine.gamegenerator import GameGenerator
from slidepuzzle.backend.engine.gamestate import GameState
from slidepuzzle.backend.errors import InvalidSize, PuzzleError
from slidepuzzle.backend.models.board import Board, Direction, validate_size
from slidepuzzle.backend.models.leaderboard import (
    Leaderboard,
    LeaderboardRecord,
    RankedRecord,
    RecordFlags,
    by_time_then_moves,
)
from slidepuzzle.backend.models.players import NameEditMode, PlayerRegistry
from slidepuzzle.backend.storage import KeyValueStore
from slidepuzzle.config import DEFAULT_SIZE, STATUS_CLEAR_DELAY_MS

logger = logging.getLogger(__name__)


class GameSession:
    """Orchestrates one game at a time plus the persistent roster and scores.

    Every command is safe to call at any moment: illegal moves and
    unsupported sizes are ignored, and player-management failures become a
    status message that clears itself after a short delay.
    """

    def __init__(
        self,
        store: KeyValueStore,
        size: int = DEFAULT_SIZE,
        *,
        time_source: Callable[[], int] = monotonic_ms,
        scheduler: CooperativeScheduler | None = None,
        rng: random.Random | None = None,
        order: Callable[[LeaderboardRecord], Any] = by_time_then_moves,
        on_tick: Callable[[int], None] | None = None,
    ) -> None:
        self.scheduler = scheduler or CooperativeScheduler(time_source)
        self.rng = rng or random.Random()
        self.order = order
        self.leaderboard = Leaderboard(store)
        self.players = PlayerRegistry(store, self.leaderboard)
        self.clock = GameClock(self.scheduler, time_source, on_tick=on_tick)

        try:
            self.size = validate_size(size)
        except InvalidSize as exc:
            logger.debug("%s Using %d.", exc, DEFAULT_SIZE)
            self.size = DEFAULT_SIZE

        self.status_message = ""
        self.last_result: RecordFlags | None = None
        self._status_task: Task | None = None
        self.state = self._new_state()

    # -- lifecycle ------------------------------------------------------------

    def _new_state(self) -> GameState:
        board = GameGenerator.generate(self.size, self.rng)
        self.clock.reset()
        return GameState(board, self.clock)

    def reset(self) -> None:
        """Fresh shuffle, zero moves, zero time."""
        self.state = self._new_state()
        self.last_result = None

    def set_size(self, size: int) -> bool:
        """Switch to a *size*×*size* board; the current size reshuffles."""
        try:
            self.size = validate_size(size)
        except InvalidSize as exc:
            logger.debug("Ignoring size change: %s", exc)
            return False
        self.reset()
        return True

    def end(self) -> None:
        self.reset()
        self._set_status("Game ended. New game ready")

    def pause(self) -> bool:
        if not self.state.pause():
            return False
        self._set_status("Game paused")
        return True

    def resume(self) -> bool:
        if not self.state.resume():
            return False
        self._set_status("Game resumed")
        return True

    def toggle_pause(self) -> bool:
        if self.clock.running:
            return self.pause()
        return self.resume()

    def close(self) -> None:
        """Cancel every pending timer owned by this session."""
        self.clock.reset()
        self._cancel_status_clear()

    # -- movement -------------------------------------------------------------

    def move(self, index: int) -> bool:
        """Slide the tile at *index* into the blank.

        Returns True if the move was applied. Solving the board stops the
        clock and records the result for the active player.
        """
        if self.state.is_solved:
            return False
        if not self.state.apply_move(index):
            return False
        if self.state.is_solved:
            self._complete()
        return True

    def handle_direction(self, direction: Direction) -> bool:
        """Slide the neighbour of the blank that moves in *direction*."""
        target = self.state.board.neighbor_of_blank(direction)
        if target is None:
            return False
        return self.move(target)

    def handle_key(self, key: str) -> bool:
        """Translate a key press into a command. Returns True if handled.

        Arrow keys arrive as direction names (``"up"`` …), the space bar
        as ``"space"``.
        """
        key = key.lower()

        if self.state.is_solved:
            if key in ("p", "space"):
                self.reset()
                self._set_status("New game started")
                return True
            return False

        if key in tuple(Direction):
            self.handle_direction(Direction(key))
            return True
        if key == "space":
            return self.state.has_started and self.toggle_pause()
        if key == "r":
            return self.is_paused and self.resume()
        if key == "s":
            self.reset()
            self._set_status("New game shuffled")
            return True
        if key == "e":
            if not self.state.has_started:
                return False
            self.end()
            return True
        return False

    def _complete(self) -> None:
        self.clock.stop()
        moves = self.state.moves
        elapsed = self.clock.elapsed
        self.last_result = self.leaderboard.record_completion(
            self.size, self.players.active, moves, elapsed
        )
        message = f"Solved in {moves} moves ({format_elapsed(elapsed)})!"
        news = [k for k, v in self.last_result._asdict().items() if v]
        if news:
            message += f" New best {' and '.join(news)}."
        self._set_status(message)

    # -- players --------------------------------------------------------------

    def add_player(self, name: str) -> bool:
        return self._player_command(self.players.add_player, name)

    def rename_player(self, old_name: str, new_name: str) -> bool:
        return self._player_command(self.players.rename_player, old_name, new_name)

    def remove_player(self, name: str) -> bool:
        return self._player_command(self.players.remove_player, name)

    def select_player(self, name: str) -> bool:
        return self._player_command(self.players.select_player, name)

    def submit_name(
        self, mode: NameEditMode, name: str, original: str | None = None
    ) -> bool:
        return self._player_command(self.players.submit_name, mode, name, original)

    def _player_command(self, command: Callable[..., Any], *args: Any) -> bool:
        try:
            command(*args)
        except PuzzleError as exc:
            self._set_status(str(exc), transient=True)
            return False
        return True

    # -- status ---------------------------------------------------------------

    def _set_status(self, message: str, transient: bool = False) -> None:
        self._cancel_status_clear()
        self.status_message = message
        if transient:
            self._status_task = self.scheduler.call_later(
                STATUS_CLEAR_DELAY_MS, self._clear_status
            )

    def _clear_status(self) -> None:
        self.status_message = ""
        self._status_task = None

    def _cancel_status_clear(self) -> None:
        if self._status_task is not None:
            self._status_task.cancel()
            self._status_task = None

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def tiles(self) -> list[int]:
        return list(self.state.board.tiles)

    @property
    def move_count(self) -> int:
        return self.state.moves

    @property
    def elapsed(self) -> int:
        return self.clock.elapsed

    @property
    def formatted_elapsed(self) -> str:
        return self.clock.formatted

    @property
    def is_solved(self) -> bool:
        return self.state.is_solved

    @property
    def is_running(self) -> bool:
        return self.clock.running

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    @property
    def has_started(self) -> bool:
        return self.state.has_started

    @property
    def pause_label(self) -> str:
        if self.clock.running:
            return "Pause"
        return "Resume" if self.clock.started else "Pause"

    @property
    def player_names(self) -> list[str]:
        return self.players.names

    @property
    def active_player(self) -> str:
        return self.players.active

    def leaderboard_snapshot(self) -> list[LeaderboardRecord]:
        return self.leaderboard.get_records(self.size)

    def top_ten(self) -> list[RankedRecord]:
        return self.leaderboard.top_ten_for(self.size, self.players.active, self.order)
