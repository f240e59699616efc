"""Recovery and insight scoring engine.

Turns the workout history and today's health snapshot into three things:
- A recovery score (0-100) with its contributing factors and a trend label
- A workout intensity recommendation derived from that score
- A list of discrete insights, one per rule that fires

Everything here is a pure function of its inputs plus ``now``. Callers own
the resulting values; nothing is stored in this module.
"""

import logging
import uuid
from collections import Counter
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from .models.health import HealthSnapshot
from .models.insights import (
    Insight,
    InsightPriority,
    InsightType,
    RecommendationType,
    RecoveryFactors,
    RecoveryScore,
    Trend,
    WorkoutRecommendation,
)
from .models.workouts import WorkoutRecord

logger = logging.getLogger(__name__)

WEEKLY_WINDOW = timedelta(days=7)

BASE_SCORE = 70.0
DEFAULT_SLEEP_HOURS = 7.0
DEFAULT_REST_DAYS = 7.0

# Insight thresholds
HIGH_WEEKLY_LOAD = 5
LOW_SLEEP_HOURS = 7.0
DOMINANT_TYPE_SHARE = 0.7
CONSISTENCY_MIN_WORKOUTS = 3
CONSISTENCY_MIN_DAYS = 3

InsightRule = Callable[
    [Sequence[WorkoutRecord], Optional[HealthSnapshot], datetime],
    Optional[Insight],
]


def generate_id() -> str:
    """Return a fresh random identifier."""
    return uuid.uuid4().hex


def count_weekly_workouts(workouts: Sequence[WorkoutRecord], now: datetime) -> int:
    """Count workouts dated within the trailing 7 days (inclusive)."""
    week_ago = now - WEEKLY_WINDOW
    return sum(1 for w in workouts if w.date >= week_ago)


def get_last_workout(workouts: Sequence[WorkoutRecord]) -> Optional[WorkoutRecord]:
    """Return the most recent workout regardless of input order."""
    if not workouts:
        return None
    return max(workouts, key=lambda w: w.date)


def days_since_last_workout(
    workouts: Sequence[WorkoutRecord],
    now: datetime,
) -> Optional[float]:
    """Fractional days between the latest workout and ``now``, or None."""
    last = get_last_workout(workouts)
    if last is None:
        return None
    return (now - last.date).total_seconds() / timedelta(days=1).total_seconds()


def derive_trend(score: float) -> Trend:
    """Map a score to its trend label.

    Low scores read as "improving" and high scores as "stable". The mapping
    is kept exactly as the product defines it until the intent is settled.
    """
    if score >= 70:
        return Trend.STABLE
    elif score >= 50:
        return Trend.DECLINING
    else:
        return Trend.IMPROVING


def compute_recovery_score(
    workouts: Sequence[WorkoutRecord],
    health_snapshot: Optional[HealthSnapshot],
    now: Optional[datetime] = None,
) -> Optional[RecoveryScore]:
    """Calculate today's recovery score.

    Starts from a base of 70 and adjusts for:
    - Sleep: +15 at 8h or more, -20 under 6h (7h assumed when unknown or zero)
    - Weekly load: +15 with no workouts in the last 7 days, -15 at 6 or more
    - Rest: +10 when the last workout is 2+ days old, -5 when under 1 day

    A history with no workouts gets no rest adjustment; its rest factor is
    reported as 7 days.

    Args:
        workouts: Full workout history, any order
        health_snapshot: Today's metrics, or None when unavailable
        now: Evaluation time (defaults to the current time)

    Returns:
        RecoveryScore clamped to [0, 100], or None without a health snapshot
    """
    if health_snapshot is None:
        return None

    now = now or datetime.now()
    score = BASE_SCORE

    # A zero reading means the platform had no sleep data
    sleep_hours = health_snapshot.sleep_hours or DEFAULT_SLEEP_HOURS
    if sleep_hours >= 8:
        score += 15
    elif sleep_hours < 6:
        score -= 20

    weekly_count = count_weekly_workouts(workouts, now)
    if weekly_count == 0:
        score += 15  # Well rested
    elif weekly_count >= 6:
        score -= 15  # High load

    rest_days = days_since_last_workout(workouts, now)
    if rest_days is not None:
        if rest_days >= 2:
            score += 10
        elif rest_days < 1:
            score -= 5

    score = max(0.0, min(100.0, score))

    logger.debug(
        f"Recovery score {score:.0f} (sleep={sleep_hours}h, weekly={weekly_count}, "
        f"rest_days={rest_days})"
    )

    return RecoveryScore(
        score=score,
        factors=RecoveryFactors(
            sleep=sleep_hours,
            workout_load=weekly_count,
            rest_days=rest_days if rest_days is not None else DEFAULT_REST_DAYS,
        ),
        trend=derive_trend(score),
        last_calculated=now,
    )


# Score bands, checked from the top: (lower bound, recommendation)
_RECOMMENDATION_BANDS: Tuple[Tuple[float, WorkoutRecommendation], ...] = (
    (
        80,
        WorkoutRecommendation(
            type=RecommendationType.INTENSE,
            message="Great day for pushing limits!",
            suggested_activities=["Heavy lifting", "HIIT", "Max effort training"],
            reasoning="Excellent recovery score - your body is ready for intense work.",
        ),
    ),
    (
        60,
        WorkoutRecommendation(
            type=RecommendationType.MODERATE,
            message="Good for moderate intensity",
            suggested_activities=["Strength training", "Moderate cardio", "Sports"],
            reasoning="Good recovery score allows for moderate intensity workouts.",
        ),
    ),
    (
        40,
        WorkoutRecommendation(
            type=RecommendationType.LIGHT,
            message="Go for a light workout",
            suggested_activities=["Yoga", "Swimming", "Light cardio"],
            reasoning="Moderate recovery score suggests light activity is best today.",
        ),
    ),
)

_REST_RECOMMENDATION = WorkoutRecommendation(
    type=RecommendationType.REST,
    message="Your body needs recovery",
    suggested_activities=["Light stretching", "Walking", "Meditation"],
    reasoning="Low recovery score indicates you need rest to prevent overtraining.",
)


def _copy_recommendation(template: WorkoutRecommendation) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        type=template.type,
        message=template.message,
        suggested_activities=list(template.suggested_activities),
        reasoning=template.reasoning,
    )


def recommend_for_score(score: float) -> WorkoutRecommendation:
    """Get the workout recommendation for a raw score.

    Bands are half-open: 40 is light, 60 is moderate, 80 is intense.
    """
    for lower_bound, template in _RECOMMENDATION_BANDS:
        if score >= lower_bound:
            return _copy_recommendation(template)
    return _copy_recommendation(_REST_RECOMMENDATION)


def recommend(recovery_score: Optional[RecoveryScore]) -> Optional[WorkoutRecommendation]:
    """Get today's workout recommendation, or None without a score."""
    if recovery_score is None:
        return None
    return recommend_for_score(recovery_score.score)


# Insight rules

def no_weekly_workouts_rule(
    workouts: Sequence[WorkoutRecord],
    health_snapshot: Optional[HealthSnapshot],
    now: datetime,
) -> Optional[Insight]:
    if count_weekly_workouts(workouts, now) != 0:
        return None
    return Insight(
        id=generate_id(),
        type=InsightType.MOTIVATION,
        priority=InsightPriority.HIGH,
        title="Get Moving!",
        message="You haven't logged a workout this week. Let's get started!",
        actionable=True,
        action="Log your first workout",
        created_at=now,
    )


def high_weekly_load_rule(
    workouts: Sequence[WorkoutRecord],
    health_snapshot: Optional[HealthSnapshot],
    now: datetime,
) -> Optional[Insight]:
    weekly_count = count_weekly_workouts(workouts, now)
    if weekly_count < HIGH_WEEKLY_LOAD:
        return None
    return Insight(
        id=generate_id(),
        type=InsightType.WARNING,
        priority=InsightPriority.MEDIUM,
        title="Consider a Rest Day",
        message=f"You've worked out {weekly_count} times this week. Recovery is important!",
        actionable=True,
        action="Take a rest day",
        created_at=now,
    )


def low_sleep_rule(
    workouts: Sequence[WorkoutRecord],
    health_snapshot: Optional[HealthSnapshot],
    now: datetime,
) -> Optional[Insight]:
    if health_snapshot is None or not health_snapshot.sleep_hours:
        return None
    if health_snapshot.sleep_hours >= LOW_SLEEP_HOURS:
        return None
    return Insight(
        id=generate_id(),
        type=InsightType.SLEEP,
        priority=InsightPriority.HIGH,
        title="Improve Sleep",
        message=(
            f"You got {health_snapshot.sleep_hours:.1f} hours of sleep. "
            "Aim for 7-9 hours for optimal recovery."
        ),
        actionable=True,
        action="Set earlier bedtime",
        created_at=now,
    )


def workout_balance_rule(
    workouts: Sequence[WorkoutRecord],
    health_snapshot: Optional[HealthSnapshot],
    now: datetime,
) -> Optional[Insight]:
    if not workouts:
        return None
    # Ties resolve to the type seen first
    dominant_type, count = Counter(w.type for w in workouts).most_common(1)[0]
    if count <= len(workouts) * DOMINANT_TYPE_SHARE:
        return None
    return Insight(
        id=generate_id(),
        type=InsightType.BALANCE,
        priority=InsightPriority.LOW,
        title="Diversify Your Workouts",
        message=(
            f"Most of your workouts are {dominant_type.value}. "
            "Try mixing in other types for better balance."
        ),
        actionable=False,
        created_at=now,
    )


def consistency_rule(
    workouts: Sequence[WorkoutRecord],
    health_snapshot: Optional[HealthSnapshot],
    now: datetime,
) -> Optional[Insight]:
    if len(workouts) < CONSISTENCY_MIN_WORKOUTS:
        return None
    workout_days = {w.date.date() for w in workouts}
    if len(workout_days) < CONSISTENCY_MIN_DAYS:
        return None
    return Insight(
        id=generate_id(),
        type=InsightType.CONSISTENCY,
        priority=InsightPriority.LOW,
        title="Great Consistency!",
        message="You're building a solid workout habit. Keep it up!",
        actionable=False,
        created_at=now,
    )


# Evaluation order is display order
INSIGHT_RULES: Tuple[InsightRule, ...] = (
    no_weekly_workouts_rule,
    high_weekly_load_rule,
    low_sleep_rule,
    workout_balance_rule,
    consistency_rule,
)


def generate_insights(
    workouts: Sequence[WorkoutRecord],
    health_snapshot: Optional[HealthSnapshot],
    now: Optional[datetime] = None,
    rules: Sequence[InsightRule] = INSIGHT_RULES,
) -> List[Insight]:
    """Evaluate every insight rule against the current data.

    Args:
        workouts: Full workout history, any order
        health_snapshot: Today's metrics, or None
        now: Evaluation time (defaults to the current time)
        rules: Ordered rules to evaluate

    Returns:
        One Insight per rule that fired, in rule order
    """
    now = now or datetime.now()
    insights = []
    for rule in rules:
        insight = rule(workouts, health_snapshot, now)
        if insight is not None:
            logger.debug(f"Insight rule {rule.__name__} fired: {insight.title}")
            insights.append(insight)
    return insights
