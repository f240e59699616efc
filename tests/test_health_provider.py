"""Tests for the health data provider."""

from datetime import timedelta

import pytest

from fitness_insights.exceptions import HealthDataError
from fitness_insights.models import (
    DailyHealthSummary,
    HealthSnapshot,
    HealthPermissionStatus,
    HealthWorkoutExport,
    WorkoutType,
)
from fitness_insights.services import HealthDataProvider, HealthDataSource


class FakeSource:
    """In-memory health data source."""

    def __init__(self, snapshot, summaries=None, available=True):
        self.snapshot = snapshot
        self.summaries = summaries or []
        self.available = available
        self.fail_with = None
        self.requested_days = None
        self.summaries_fail_with = None
        self.save_fail_with = None
        self.saved = []

    def initialize(self):
        if self.fail_with:
            raise self.fail_with
        return self.available

    def get_today_metrics(self):
        if self.fail_with:
            raise self.fail_with
        return self.snapshot

    def get_daily_summaries(self, days):
        self.requested_days = days
        if self.summaries_fail_with:
            raise self.summaries_fail_with
        return self.summaries

    def save_workout(self, workout):
        if self.save_fail_with:
            raise self.save_fail_with
        self.saved.append(workout)


@pytest.fixture
def snapshot(make_snapshot):
    return make_snapshot(sleep_hours=7.5, steps=8000)


@pytest.fixture
def summaries(now):
    return [
        DailyHealthSummary(date=now - timedelta(days=i), steps=1000 * (i + 1),
                           calories=100.0, workouts=i % 2, sleep_hours=6.0 + i * 0.5,
                           heart_rate=60.0 + i if i < 2 else None)
        for i in range(3)
    ]


class TestHealthDataSourceProtocol:
    def test_fake_source_satisfies_protocol(self, snapshot):
        assert isinstance(FakeSource(snapshot), HealthDataSource)


class TestInitialize:
    """Tests for source initialization."""

    def test_no_source(self, settings):
        provider = HealthDataProvider(settings=settings)
        assert provider.initialize() is False
        assert provider.get_current_snapshot() is None

    def test_initialize_fetches_metrics(self, snapshot, summaries, settings, clock, now):
        source = FakeSource(snapshot, summaries)
        provider = HealthDataProvider(source=source, settings=settings, clock=clock)
        assert provider.initialize() is True
        assert provider.get_current_snapshot() is snapshot
        assert provider.weekly_data == summaries
        assert provider.last_sync == now
        assert provider.is_loading is False
        assert source.requested_days == 7

    def test_unavailable_platform(self, snapshot, settings):
        provider = HealthDataProvider(source=FakeSource(snapshot, available=False), settings=settings)
        assert provider.initialize() is False
        assert provider.get_current_snapshot() is None
        assert provider.error is None

    def test_initialize_failure_is_recorded(self, snapshot, settings):
        source = FakeSource(snapshot)
        source.fail_with = HealthDataError("Permission denied")
        provider = HealthDataProvider(source=source, settings=settings)
        assert provider.initialize() is False
        assert provider.error == "Permission denied"
        assert provider.is_loading is False
        assert provider.permission_status == HealthPermissionStatus.NOT_DETERMINED

    def test_permission_status_tracks_initialize(self, snapshot, settings):
        provider = HealthDataProvider(source=FakeSource(snapshot), settings=settings)
        assert provider.permission_status == HealthPermissionStatus.NOT_DETERMINED
        provider.initialize()
        assert provider.permission_status == HealthPermissionStatus.AUTHORIZED

    def test_unavailable_platform_stays_not_determined(self, snapshot, settings):
        provider = HealthDataProvider(source=FakeSource(snapshot, available=False), settings=settings)
        provider.initialize()
        assert provider.permission_status == HealthPermissionStatus.NOT_DETERMINED


class TestFetchTodayMetrics:
    """Tests for fetching and refreshing metrics."""

    def test_failure_keeps_previous_data(self, snapshot, settings, clock, now):
        source = FakeSource(snapshot)
        provider = HealthDataProvider(source=source, settings=settings, clock=clock)
        provider.fetch_today_metrics()

        source.fail_with = HealthDataError("Bridge offline")
        clock.advance(hours=1)
        assert provider.refresh() is snapshot
        assert provider.error == "Bridge offline"
        assert provider.last_sync == now

    def test_success_clears_error(self, snapshot, settings):
        source = FakeSource(snapshot)
        provider = HealthDataProvider(source=source, settings=settings)
        source.fail_with = HealthDataError("Bridge offline")
        provider.fetch_today_metrics()
        source.fail_with = None
        provider.fetch_today_metrics()
        assert provider.error is None
        assert provider.get_current_snapshot() is snapshot

    def test_set_snapshot_without_source(self, snapshot, settings, clock, now):
        provider = HealthDataProvider(settings=settings, clock=clock)
        provider.set_snapshot(snapshot)
        assert provider.get_current_snapshot() is snapshot
        assert provider.last_sync == now
        assert provider.fetch_today_metrics() is snapshot

    def test_summary_failure_keeps_new_metrics(self, snapshot, summaries, settings, clock, now):
        source = FakeSource(snapshot, summaries)
        provider = HealthDataProvider(source=source, settings=settings, clock=clock)
        provider.fetch_today_metrics()

        fresh = HealthSnapshot(steps=12000, active_energy=500.0, date=now + timedelta(hours=1))
        source.snapshot = fresh
        source.summaries_fail_with = HealthDataError("Summaries unavailable")
        clock.advance(hours=1)

        assert provider.refresh() is fresh
        assert provider.get_current_snapshot() is fresh
        assert provider.last_sync == now + timedelta(hours=1)
        assert provider.error == "Summaries unavailable"
        assert provider.weekly_data == summaries
        assert provider.is_loading is False

    def test_snapshot_to_dict(self, snapshot, now):
        d = snapshot.to_dict()
        assert d["steps"] == 8000
        assert d["date"] == now.isoformat()


class TestSummarizeWeek:
    """Tests for weekly aggregation."""

    def test_no_data(self, settings):
        assert HealthDataProvider(settings=settings).summarize_week() is None

    def test_aggregates(self, snapshot, summaries, settings, now):
        provider = HealthDataProvider(source=FakeSource(snapshot, summaries), settings=settings)
        provider.fetch_today_metrics()
        summary = provider.summarize_week()
        assert summary.week_start == now - timedelta(days=2)
        assert summary.week_end == now
        assert summary.total_steps == 6000
        assert summary.total_calories == 300.0
        assert summary.total_workouts == 1
        assert summary.avg_sleep_hours == 6.5
        assert summary.avg_heart_rate == 60.5


class TestSaveWorkout:
    """Tests for pushing workouts to the health platform."""

    def test_export_mapping(self, make_workout, now):
        workout = make_workout(days_ago=0, type=WorkoutType.FLEXIBILITY, duration=45, calories_burned=None)
        export = HealthWorkoutExport.from_workout(workout)
        assert export.activity_type == "Yoga"
        assert export.start_date == now
        assert export.end_date == now + timedelta(minutes=45)
        assert export.energy_burned == 0.0
        assert export.energy_burned_unit == "kilocalorie"

    @pytest.mark.parametrize("workout_type,activity", [
        (WorkoutType.STRENGTH, "TraditionalStrengthTraining"),
        (WorkoutType.CARDIO, "Running"),
        (WorkoutType.SPORTS, "AmericanFootball"),
        (WorkoutType.OTHER, "Other"),
    ])
    def test_activity_types(self, make_workout, workout_type, activity):
        export = HealthWorkoutExport.from_workout(make_workout(days_ago=1, type=workout_type))
        assert export.activity_type == activity

    def test_save_authorizes_first(self, snapshot, settings, make_workout):
        source = FakeSource(snapshot)
        provider = HealthDataProvider(source=source, settings=settings)
        workout = make_workout(days_ago=0, type=WorkoutType.CARDIO, duration=30, calories_burned=250)

        assert provider.save_workout(workout) is True
        assert provider.permission_status == HealthPermissionStatus.AUTHORIZED
        assert len(source.saved) == 1
        assert source.saved[0].energy_burned == 250

    def test_save_failure_is_recorded(self, snapshot, settings, make_workout):
        source = FakeSource(snapshot)
        source.save_fail_with = HealthDataError("Write denied")
        provider = HealthDataProvider(source=source, settings=settings)
        assert provider.save_workout(make_workout(days_ago=0)) is False
        assert provider.error == "Write denied"
        assert source.saved == []

    def test_save_when_platform_unavailable(self, snapshot, settings, make_workout):
        source = FakeSource(snapshot, available=False)
        provider = HealthDataProvider(source=source, settings=settings)
        assert provider.save_workout(make_workout(days_ago=0)) is False
        assert source.saved == []

    def test_save_without_source(self, settings, make_workout):
        provider = HealthDataProvider(settings=settings)
        assert provider.save_workout(make_workout(days_ago=0)) is False
