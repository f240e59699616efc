"""Data models for daily health metrics."""

from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from .workouts import WorkoutRecord, WorkoutType


@dataclass
class HealthSnapshot:
    """Today's health metrics as reported by the health data source."""
    steps: int
    active_energy: float  # kcal
    date: datetime
    heart_rate: Optional[float] = None  # bpm
    resting_heart_rate: Optional[float] = None  # bpm
    sleep_hours: Optional[float] = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["date"] = self.date.isoformat()
        return d


@dataclass
class DailyHealthSummary:
    """One day of aggregated health metrics."""
    date: datetime
    steps: int = 0
    calories: float = 0.0
    workouts: int = 0
    sleep_hours: float = 0.0
    heart_rate: Optional[float] = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["date"] = self.date.isoformat()
        return d


@dataclass
class WeeklyHealthSummary:
    """Totals and averages over a run of daily summaries."""
    week_start: datetime
    week_end: datetime
    total_steps: int
    total_calories: float
    total_workouts: int
    avg_sleep_hours: float
    avg_heart_rate: Optional[float] = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["week_start"] = self.week_start.isoformat()
        d["week_end"] = self.week_end.isoformat()
        return d


class HealthPermissionStatus(str, Enum):
    """Whether the health data source has granted access."""
    NOT_DETERMINED = "not-determined"
    AUTHORIZED = "authorized"


# Platform activity names for each workout type
WORKOUT_ACTIVITY_TYPES = {
    WorkoutType.STRENGTH: "TraditionalStrengthTraining",
    WorkoutType.CARDIO: "Running",
    WorkoutType.FLEXIBILITY: "Yoga",
    WorkoutType.SPORTS: "AmericanFootball",
    WorkoutType.OTHER: "Other",
}


@dataclass
class HealthWorkoutExport:
    """A logged workout in the shape a health platform stores it."""
    activity_type: str
    start_date: datetime
    end_date: datetime
    energy_burned: float  # kcal
    energy_burned_unit: str = "kilocalorie"

    @classmethod
    def from_workout(cls, workout: WorkoutRecord) -> "HealthWorkoutExport":
        return cls(
            activity_type=WORKOUT_ACTIVITY_TYPES.get(workout.type, "Other"),
            start_date=workout.date,
            end_date=workout.date + timedelta(minutes=workout.duration),
            energy_burned=workout.calories_burned or 0.0,
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["start_date"] = self.start_date.isoformat()
        d["end_date"] = self.end_date.isoformat()
        return d
