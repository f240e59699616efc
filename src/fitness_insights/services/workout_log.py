"""
Workout log service.

Handles:
- Admitting new workouts (validation, id assignment, timestamps)
- Partial updates and deletion
- Lookup and ordered listing (newest first)
- Aggregate statistics
- Syncing workouts to the health platform
"""

from collections import Counter
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
import logging

import pydantic

from .base import BaseService, Clock
from .health_provider import HealthDataProvider
from ..config import Settings, get_settings
from ..engine import count_weekly_workouts, generate_id
from ..exceptions import WorkoutNotFoundError, WorkoutValidationError
from ..models.workouts import (
    Exercise,
    ExerciseCreate,
    WorkoutCreate,
    WorkoutRecord,
    WorkoutStats,
    WorkoutType,
)


# Fields a caller may change through update()
_UPDATABLE_FIELDS = {
    "date",
    "type",
    "duration",
    "calories_burned",
    "exercises",
    "notes",
    "synced_to_health_kit",
}


class WorkoutLog(BaseService):
    """
    In-memory log of workouts, kept sorted by date descending.

    The recovery engine only reads ``get_all()``; everything else exists to
    populate and maintain the log.
    """

    def __init__(
        self,
        workouts: Optional[List[WorkoutRecord]] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(clock=clock, logger=logger)
        self._settings = settings or get_settings()
        self._workouts: List[WorkoutRecord] = list(workouts or [])
        self._sort()

    def __len__(self) -> int:
        return len(self._workouts)

    def _sort(self) -> None:
        self._workouts.sort(key=lambda w: w.date, reverse=True)

    def _validate_form(self, form: Union[WorkoutCreate, Dict[str, Any]]) -> WorkoutCreate:
        if isinstance(form, WorkoutCreate):
            data = form.model_dump()
        else:
            data = dict(form)
        try:
            validated = WorkoutCreate.model_validate(data)
        except pydantic.ValidationError as e:
            raise WorkoutValidationError(
                "Invalid workout data",
                details={"errors": e.errors(include_url=False)},
            ) from e
        self._check_duration(validated.duration)
        return validated

    def _build_exercises(self, entries: List[Union[Exercise, Dict[str, Any]]]) -> List[Exercise]:
        """Validate exercise entries, keeping ids the caller already has."""
        exercises = []
        for entry in entries:
            data = entry.to_dict() if isinstance(entry, Exercise) else dict(entry)
            exercise_id = data.pop("id", None) or generate_id()
            try:
                validated = ExerciseCreate.model_validate(data)
            except pydantic.ValidationError as e:
                raise WorkoutValidationError(
                    "Invalid exercise data",
                    field="exercises",
                    details={"errors": e.errors(include_url=False)},
                ) from e
            exercises.append(Exercise(id=exercise_id, **validated.model_dump()))
        return exercises

    def _check_duration(self, duration: float) -> None:
        max_duration = self._settings.max_workout_duration_minutes
        if duration > max_duration:
            raise WorkoutValidationError(
                f"Duration {duration} exceeds maximum of {max_duration} minutes",
                field="duration",
            )

    def add(self, form: Union[WorkoutCreate, Dict[str, Any]]) -> WorkoutRecord:
        """
        Log a new workout.

        Args:
            form: WorkoutCreate or an equivalent dict

        Returns:
            The stored WorkoutRecord

        Raises:
            WorkoutValidationError: If the form is rejected
        """
        validated = self._validate_form(form)
        now = self._now()

        workout = WorkoutRecord(
            id=generate_id(),
            date=validated.date or now,
            type=validated.type,
            duration=validated.duration,
            calories_burned=validated.calories_burned,
            exercises=[
                Exercise(id=generate_id(), **ex.model_dump())
                for ex in validated.exercises
            ],
            notes=validated.notes,
            created_at=now,
            updated_at=now,
            synced_to_health_kit=False,
        )

        self._workouts.append(workout)
        self._sort()

        self.logger.info(f"Logged {workout.type.value} workout {workout.id} ({workout.duration} min)")
        return workout

    def update(self, workout_id: str, updates: Dict[str, Any]) -> WorkoutRecord:
        """
        Apply a partial update to a workout.

        Raises:
            WorkoutNotFoundError: If no workout has this id
            WorkoutValidationError: If an update field or value is rejected
        """
        index = self._index_of(workout_id)
        if index is None:
            raise WorkoutNotFoundError(workout_id)

        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise WorkoutValidationError(
                f"Cannot update fields: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )

        current = self._workouts[index]
        merged = {
            "type": current.type,
            "duration": current.duration,
            "calories_burned": current.calories_burned,
            "notes": current.notes,
            "date": current.date,
        }
        merged.update({k: v for k, v in updates.items() if k in merged})
        validated = self._validate_form(merged)

        changes: Dict[str, Any] = {
            "type": validated.type,
            "duration": validated.duration,
            "calories_burned": validated.calories_burned,
            "notes": validated.notes,
            "date": validated.date or current.date,
            "updated_at": self._now(),
        }
        if "exercises" in updates:
            changes["exercises"] = self._build_exercises(updates["exercises"])
        if "synced_to_health_kit" in updates:
            changes["synced_to_health_kit"] = bool(updates["synced_to_health_kit"])

        workout = replace(current, **changes)
        self._workouts[index] = workout
        self._sort()

        self.logger.info(f"Updated workout {workout_id}")
        return workout

    def delete(self, workout_id: str) -> bool:
        """Delete a workout. Returns False if it did not exist."""
        index = self._index_of(workout_id)
        if index is None:
            return False
        del self._workouts[index]
        self.logger.info(f"Deleted workout {workout_id}")
        return True

    def sync_to_health(self, workout_id: str, health_provider: HealthDataProvider) -> WorkoutRecord:
        """
        Push a workout to the health platform and mark it synced on success.

        A failed push leaves the workout unsynced; the provider logs the
        failure and keeps it in its ``error``.

        Raises:
            WorkoutNotFoundError: If no workout has this id
        """
        workout = self.get_by_id(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(workout_id)
        if workout.synced_to_health_kit:
            return workout
        if not health_provider.save_workout(workout):
            return workout
        return self.update(workout_id, {"synced_to_health_kit": True})

    def get_by_id(self, workout_id: str) -> Optional[WorkoutRecord]:
        index = self._index_of(workout_id)
        return self._workouts[index] if index is not None else None

    def get_all(self) -> List[WorkoutRecord]:
        """All workouts, newest first. The list is a copy."""
        return list(self._workouts)

    def get_stats(self, now: Optional[datetime] = None) -> WorkoutStats:
        """Aggregate totals over the whole log plus the weekly count."""
        now = now or self._now()
        type_counts = Counter(w.type for w in self._workouts)
        if type_counts:
            most_frequent = type_counts.most_common(1)[0][0]
        else:
            most_frequent = WorkoutType.STRENGTH

        return WorkoutStats(
            total_workouts=len(self._workouts),
            weekly_workouts=count_weekly_workouts(self._workouts, now),
            total_duration=sum(w.duration for w in self._workouts),
            total_calories=sum(w.calories_burned or 0 for w in self._workouts),
            most_frequent_type=most_frequent,
        )

    def _index_of(self, workout_id: str) -> Optional[int]:
        for i, workout in enumerate(self._workouts):
            if workout.id == workout_id:
                return i
        return None
