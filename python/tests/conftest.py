"""Shared fixtures: a hand-driven millisecond clock and in-memory storage."""

from __future__ import annotations

import random

import pytest

from slidepuzzle.backend.engine.gameclock import CooperativeScheduler
from slidepuzzle.backend.engine.gameplay import GameSession
from slidepuzzle.backend.storage import MemoryStore


class FakeTime:
    """Millisecond time source that only moves when told to."""

    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture()
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture()
def scheduler(fake_time: FakeTime) -> CooperativeScheduler:
    return CooperativeScheduler(fake_time)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def session(
    store: MemoryStore, fake_time: FakeTime, scheduler: CooperativeScheduler
) -> GameSession:
    return GameSession(
        store,
        3,
        time_source=fake_time,
        scheduler=scheduler,
        rng=random.Random(7),
    )
