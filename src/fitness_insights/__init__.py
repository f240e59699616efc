"""Workout logging, health metrics and recovery insights."""

from fitness_insights.engine import (
    compute_recovery_score,
    recommend,
    recommend_for_score,
    generate_insights,
    derive_trend,
    INSIGHT_RULES,
)
from fitness_insights.models import (
    HealthSnapshot,
    DailyHealthSummary,
    WeeklyHealthSummary,
    HealthPermissionStatus,
    WorkoutType,
    WorkoutRecord,
    WorkoutCreate,
    WorkoutStats,
    Trend,
    RecommendationType,
    InsightType,
    InsightPriority,
    RecoveryScore,
    WorkoutRecommendation,
    Insight,
)
from fitness_insights.services import (
    WorkoutLog,
    HealthDataProvider,
    HealthDataSource,
    InsightsSession,
)

__version__ = "0.1.0"

__all__ = [
    # Engine
    "compute_recovery_score",
    "recommend",
    "recommend_for_score",
    "generate_insights",
    "derive_trend",
    "INSIGHT_RULES",
    # Models
    "HealthSnapshot",
    "DailyHealthSummary",
    "WeeklyHealthSummary",
    "HealthPermissionStatus",
    "WorkoutType",
    "WorkoutRecord",
    "WorkoutCreate",
    "WorkoutStats",
    "Trend",
    "RecommendationType",
    "InsightType",
    "InsightPriority",
    "RecoveryScore",
    "WorkoutRecommendation",
    "Insight",
    # Services
    "WorkoutLog",
    "HealthDataProvider",
    "HealthDataSource",
    "InsightsSession",
]
