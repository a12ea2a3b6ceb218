"""Cooperative timers for a single-threaded game loop.

Nothing runs on its own: the host loop calls
:meth:`CooperativeScheduler.run_pending` between input events, and every
due callback fires there, one at a time.
"""

from __future__ import annotations

from typing import Callable

TimeSource = Callable[[], int]


class Task:
    """Handle for a scheduled callback. Cancelling is idempotent."""

    def __init__(
        self, callback: Callable[[], None], due: int, interval: int | None
    ) -> None:
        self.callback = callback
        self.due = due
        self.interval = interval
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled


class CooperativeScheduler:
    """Tracks one-shot and repeating callbacks against a millisecond clock."""

    def __init__(self, time_source: TimeSource) -> None:
        self.time_source = time_source
        self._tasks: list[Task] = []

    def call_later(self, delay: int, callback: Callable[[], None]) -> Task:
        task = Task(callback, self.time_source() + delay, None)
        self._tasks.append(task)
        return task

    def call_every(self, interval: int, callback: Callable[[], None]) -> Task:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        task = Task(callback, self.time_source() + interval, interval)
        self._tasks.append(task)
        return task

    def run_pending(self) -> int:
        """Fire every task that is due now. Returns how many fired.

        A repeating task fires at most once per call, however late the
        call is. A task cancelled by an earlier callback in the same pass
        is skipped.
        """
        now = self.time_source()
        fired = 0
        for task in list(self._tasks):
            if task.cancelled or task.due > now:
                continue
            if task.interval is None:
                task.cancelled = True
            else:
                task.due = now + task.interval
            task.callback()
            fired += 1
        self._tasks = [t for t in self._tasks if not t.cancelled]
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if not t.cancelled)
