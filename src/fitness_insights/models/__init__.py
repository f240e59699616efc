"""Domain models for health metrics, workouts and insights."""

from .health import (
    HealthSnapshot,
    DailyHealthSummary,
    WeeklyHealthSummary,
    HealthPermissionStatus,
    HealthWorkoutExport,
    WORKOUT_ACTIVITY_TYPES,
)
from .workouts import (
    WorkoutType,
    WeightUnit,
    Exercise,
    WorkoutRecord,
    WorkoutStats,
    ExerciseCreate,
    WorkoutCreate,
)
from .insights import (
    Trend,
    RecommendationType,
    InsightType,
    InsightPriority,
    RecoveryFactors,
    RecoveryScore,
    WorkoutRecommendation,
    Insight,
)

__all__ = [
    # Health
    "HealthSnapshot",
    "DailyHealthSummary",
    "WeeklyHealthSummary",
    "HealthPermissionStatus",
    "HealthWorkoutExport",
    "WORKOUT_ACTIVITY_TYPES",
    # Workouts
    "WorkoutType",
    "WeightUnit",
    "Exercise",
    "WorkoutRecord",
    "WorkoutStats",
    "ExerciseCreate",
    "WorkoutCreate",
    # Insights
    "Trend",
    "RecommendationType",
    "InsightType",
    "InsightPriority",
    "RecoveryFactors",
    "RecoveryScore",
    "WorkoutRecommendation",
    "Insight",
]
