"""Elapsed-time tracking with pause and resume."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable

from slidepuzzle.backend.engine.gameclock.scheduler import (
    CooperativeScheduler,
    Task,
    TimeSource,
)
from slidepuzzle.config import TICK_INTERVAL_MS

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def format_elapsed(ms: int) -> str:
    """Render milliseconds as ``MM:SS:mmm``."""
    total_seconds, millis = divmod(ms, 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}:{millis:03d}"


class ClockState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class GameClock:
    """Game timer that excludes paused intervals.

    While running, the authoritative elapsed time is ``now - start``. A
    sampler task refreshes the cached value every tick for the display;
    it is owned by the clock and cancelled on pause, stop and reset.
    """

    def __init__(
        self,
        scheduler: CooperativeScheduler,
        time_source: TimeSource = monotonic_ms,
        interval: int = TICK_INTERVAL_MS,
        on_tick: Callable[[int], None] | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.time_source = time_source
        self.interval = interval
        self.on_tick = on_tick
        self.state = ClockState.IDLE
        self._start: int | None = None
        self._elapsed: int = 0
        self._sampler: Task | None = None

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed(self) -> int:
        if self.state is ClockState.RUNNING:
            return self._now_elapsed()
        return self._elapsed

    @property
    def formatted(self) -> str:
        return format_elapsed(self.elapsed)

    @property
    def running(self) -> bool:
        return self.state is ClockState.RUNNING

    @property
    def started(self) -> bool:
        return self._start is not None

    def start(self) -> bool:
        if self.state is not ClockState.IDLE:
            return False
        self._start = self.time_source()
        self._elapsed = 0
        self.state = ClockState.RUNNING
        self._schedule()
        return True

    def pause(self) -> bool:
        if self.state is not ClockState.RUNNING:
            return False
        self._cancel()
        self._elapsed = self._now_elapsed()
        self.state = ClockState.PAUSED
        return True

    def resume(self) -> bool:
        if self.state is not ClockState.PAUSED:
            return False
        # Re-anchor so that now - start picks up where the pause left off.
        self._start = self.time_source() - self._elapsed
        self.state = ClockState.RUNNING
        self._schedule()
        return True

    def stop(self) -> bool:
        if self.state is ClockState.RUNNING:
            self._elapsed = self._now_elapsed()
        elif self.state is not ClockState.PAUSED:
            return False
        self._cancel()
        self.state = ClockState.STOPPED
        return True

    def reset(self) -> None:
        self._cancel()
        self.state = ClockState.IDLE
        self._start = None
        self._elapsed = 0

    # -- sampler --------------------------------------------------------------

    def _now_elapsed(self) -> int:
        assert self._start is not None
        return max(self._elapsed, self.time_source() - self._start)

    def _schedule(self) -> None:
        self._cancel()
        self._sampler = self.scheduler.call_every(self.interval, self._tick)

    def _cancel(self) -> None:
        if self._sampler is not None:
            self._sampler.cancel()
            self._sampler = None

    def _tick(self) -> None:
        if self.state is not ClockState.RUNNING:
            return
        self._elapsed = self._now_elapsed()
        if self.on_tick is not None:
            self.on_tick(self._elapsed)
