"""Shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from timerbot.timers import TimerStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def store(tmp_path, clock) -> TimerStore:
    return TimerStore(tmp_path / "mcp-data" / "timers.json", clock=clock)
