"""Stateful services around the recovery engine."""

from .base import BaseService
from .workout_log import WorkoutLog
from .health_provider import HealthDataProvider, HealthDataSource
from .insights_session import InsightsSession

__all__ = [
    "BaseService",
    "WorkoutLog",
    "HealthDataProvider",
    "HealthDataSource",
    "InsightsSession",
]
