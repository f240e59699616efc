"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from typing import Optional

import pytest

from fitness_insights.config import Settings
from fitness_insights.engine import generate_id
from fitness_insights.models import HealthSnapshot, WorkoutRecord, WorkoutType


NOW = datetime(2024, 6, 15, 12, 0, 0)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def settings():
    return Settings(max_workout_duration_minutes=300, weekly_summary_days=7)


@pytest.fixture
def make_workout():
    """Factory for workouts dated relative to NOW."""

    def _make(
        days_ago: float = 0,
        type: WorkoutType = WorkoutType.STRENGTH,
        duration: float = 45,
        calories_burned: Optional[float] = None,
    ) -> WorkoutRecord:
        return WorkoutRecord(
            id=generate_id(),
            date=NOW - timedelta(days=days_ago),
            type=type,
            duration=duration,
            calories_burned=calories_burned,
        )

    return _make


@pytest.fixture
def make_snapshot():
    """Factory for today's health snapshot."""

    def _make(sleep_hours: Optional[float] = 7.5, steps: int = 5000) -> HealthSnapshot:
        return HealthSnapshot(
            steps=steps,
            active_energy=200.0,
            date=NOW,
            heart_rate=72.0,
            resting_heart_rate=58.0,
            sleep_hours=sleep_hours,
        )

    return _make
