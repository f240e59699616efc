"""
Health data provider.

Holds today's health snapshot and recent daily summaries, pulled from a
pluggable HealthDataSource (a platform health bridge) or pushed in directly
by the caller.
"""

from datetime import datetime
from typing import List, Optional, Protocol, runtime_checkable
import logging

from .base import BaseService, Clock
from ..config import Settings, get_settings
from ..models.health import (
    DailyHealthSummary,
    HealthPermissionStatus,
    HealthSnapshot,
    HealthWorkoutExport,
    WeeklyHealthSummary,
)
from ..models.workouts import WorkoutRecord


@runtime_checkable
class HealthDataSource(Protocol):
    """Protocol for platform health data bridges."""

    def initialize(self) -> bool:
        """Request permissions. Returns False if the platform has no health data."""
        ...

    def get_today_metrics(self) -> HealthSnapshot:
        """Read today's metrics."""
        ...

    def get_daily_summaries(self, days: int) -> List[DailyHealthSummary]:
        """Read one summary per day for the last ``days`` days."""
        ...

    def save_workout(self, workout: HealthWorkoutExport) -> None:
        """Write a workout to the platform. Raises on failure."""
        ...


class HealthDataProvider(BaseService):
    """
    Caller-owned holder of today's health metrics.

    Source failures never propagate: they are logged and kept in ``error``
    while the previously fetched data stays in place.
    """

    def __init__(
        self,
        source: Optional[HealthDataSource] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(clock=clock, logger=logger)
        self._source = source
        self._settings = settings or get_settings()
        self.today_metrics: Optional[HealthSnapshot] = None
        self.weekly_data: List[DailyHealthSummary] = []
        self.is_loading = False
        self.error: Optional[str] = None
        self.last_sync: Optional[datetime] = None
        self.permission_status = HealthPermissionStatus.NOT_DETERMINED

    def _authorize(self) -> bool:
        """Ask the source for access and track the permission status."""
        self.is_loading = True
        self.error = None
        try:
            initialized = self._source.initialize()
        except Exception as e:
            self.logger.warning(f"Health data source initialization failed: {e}")
            self.error = str(e) or "Failed to initialize health data source"
            return False
        finally:
            self.is_loading = False

        if initialized:
            self.permission_status = HealthPermissionStatus.AUTHORIZED
        return initialized

    def initialize(self) -> bool:
        """Initialize the source and fetch today's metrics."""
        if self._source is None:
            self.logger.info("No health data source configured")
            return False

        initialized = self._authorize()
        if initialized:
            self.fetch_today_metrics()
        return initialized

    def fetch_today_metrics(self) -> Optional[HealthSnapshot]:
        """Pull today's metrics and recent daily summaries from the source."""
        if self._source is None:
            return self.today_metrics

        self.is_loading = True
        self.error = None
        try:
            metrics = self._source.get_today_metrics()
        except Exception as e:
            self.logger.warning(f"Failed to fetch health metrics: {e}")
            self.error = str(e) or "Failed to fetch health metrics"
            self.is_loading = False
            return self.today_metrics

        self.today_metrics = metrics
        self.last_sync = self._now()
        self.logger.info(f"Synced health metrics ({metrics.steps} steps)")

        # Summaries are optional; today's metrics stand on their own
        try:
            weekly = self._source.get_daily_summaries(self._settings.weekly_summary_days)
        except Exception as e:
            self.logger.warning(f"Failed to fetch daily health summaries: {e}")
            self.error = str(e) or "Failed to fetch daily health summaries"
        else:
            self.weekly_data = list(weekly)
        finally:
            self.is_loading = False

        return metrics

    def refresh(self) -> Optional[HealthSnapshot]:
        """Re-fetch today's metrics from the source."""
        return self.fetch_today_metrics()

    def save_workout(self, workout: WorkoutRecord) -> bool:
        """
        Push a logged workout to the health platform.

        Authorizes the source first if that has not happened yet.

        Returns:
            True if the platform accepted the workout
        """
        if self._source is None:
            self.logger.info(f"No health data source configured, workout {workout.id} not saved")
            return False

        if self.permission_status != HealthPermissionStatus.AUTHORIZED:
            if not self._authorize():
                self.logger.warning(f"Health data source not authorized, workout {workout.id} not saved")
                return False

        try:
            self._source.save_workout(HealthWorkoutExport.from_workout(workout))
        except Exception as e:
            self.logger.warning(f"Failed to save workout {workout.id} to health platform: {e}")
            self.error = str(e) or "Failed to save workout"
            return False

        self.logger.info(f"Saved workout {workout.id} to health platform")
        return True

    def set_snapshot(self, snapshot: Optional[HealthSnapshot]) -> None:
        """Replace today's snapshot directly, without a source."""
        self.today_metrics = snapshot
        self.last_sync = self._now()

    def get_current_snapshot(self) -> Optional[HealthSnapshot]:
        """Today's snapshot, or None if nothing has been fetched or set."""
        return self.today_metrics

    def summarize_week(self) -> Optional[WeeklyHealthSummary]:
        """
        Aggregate the held daily summaries.

        Returns:
            WeeklyHealthSummary, or None when no daily data is held
        """
        if not self.weekly_data:
            return None

        days = sorted(self.weekly_data, key=lambda d: d.date)
        heart_rates = [d.heart_rate for d in days if d.heart_rate is not None]

        return WeeklyHealthSummary(
            week_start=days[0].date,
            week_end=days[-1].date,
            total_steps=sum(d.steps for d in days),
            total_calories=sum(d.calories for d in days),
            total_workouts=sum(d.workouts for d in days),
            avg_sleep_hours=round(sum(d.sleep_hours for d in days) / len(days), 2),
            avg_heart_rate=(
                round(sum(heart_rates) / len(heart_rates), 1) if heart_rates else None
            ),
        )
