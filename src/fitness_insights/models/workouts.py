"""Workout data models for the workout log."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class WorkoutType(str, Enum):
    """Categories a logged workout can belong to."""
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    SPORTS = "sports"
    OTHER = "other"


class WeightUnit(str, Enum):
    """Units for exercise load."""
    KG = "kg"
    LBS = "lbs"


@dataclass
class Exercise:
    """A single exercise performed within a workout."""
    id: str
    name: str
    sets: int
    reps: int
    weight: Optional[float] = None
    unit: WeightUnit = WeightUnit.KG
    notes: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.unit, str):
            self.unit = WeightUnit(self.unit)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "unit": self.unit.value,
            "notes": self.notes,
        }


@dataclass
class WorkoutRecord:
    """
    A logged workout.

    Only ``date``, ``type``, ``duration`` and ``calories_burned`` feed the
    recovery engine; the remaining fields belong to the log itself.
    """
    id: str
    date: datetime
    type: WorkoutType
    duration: float  # minutes
    calories_burned: Optional[float] = None
    exercises: List[Exercise] = field(default_factory=list)
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    synced_to_health_kit: bool = False

    def __post_init__(self):
        """Coerce enum fields passed as plain strings."""
        if isinstance(self.type, str):
            self.type = WorkoutType(self.type)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "type": self.type.value,
            "duration": self.duration,
            "calories_burned": self.calories_burned,
            "exercises": [e.to_dict() for e in self.exercises],
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "synced_to_health_kit": self.synced_to_health_kit,
        }


@dataclass
class WorkoutStats:
    """Aggregate statistics over the workout log."""
    total_workouts: int
    weekly_workouts: int
    total_duration: float
    total_calories: float
    most_frequent_type: WorkoutType

    def to_dict(self) -> dict:
        return {
            "total_workouts": self.total_workouts,
            "weekly_workouts": self.weekly_workouts,
            "total_duration": self.total_duration,
            "total_calories": self.total_calories,
            "most_frequent_type": self.most_frequent_type.value,
        }


class ExerciseCreate(BaseModel):
    """Exercise entry submitted with a new workout."""

    name: str = Field(..., min_length=1, max_length=200)
    sets: int = Field(..., ge=0)
    reps: int = Field(..., ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    unit: WeightUnit = WeightUnit.KG
    notes: Optional[str] = None


class WorkoutCreate(BaseModel):
    """Request to log a new workout."""

    type: WorkoutType
    duration: float = Field(..., ge=0)
    calories_burned: Optional[float] = Field(default=None, ge=0)
    exercises: List[ExerciseCreate] = Field(default_factory=list)
    notes: Optional[str] = None
    date: Optional[datetime] = None  # Defaults to now
