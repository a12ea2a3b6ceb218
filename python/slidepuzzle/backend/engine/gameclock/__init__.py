from slidepuzzle.backend.engine.gameclock.clock import ClockState, GameClock, format_elapsed, monotonic_ms
from slidepuzzle.backend.engine.gameclock.scheduler import CooperativeScheduler, Task

__all__ = [
    "ClockState",
    "CooperativeScheduler",
    "GameClock",
    "Task",
    "format_elapsed",
    "monotonic_ms",
]
