"""
Insights session.

Keeps the latest recovery score, recommendation and insight list for one
caller, recomputed on demand from the workout log and health provider.
"""

from datetime import datetime
from typing import List, Optional
import logging

from .base import BaseService, Clock
from .health_provider import HealthDataProvider
from .workout_log import WorkoutLog
from .. import engine
from ..models.insights import Insight, RecoveryScore, WorkoutRecommendation


class InsightsSession(BaseService):
    """
    Caller-owned state for recovery and insight results.

    Each recompute reads fresh snapshots from the collaborators and replaces
    the held value; insight lists are never merged across regenerations.
    """

    def __init__(
        self,
        workout_log: WorkoutLog,
        health_provider: HealthDataProvider,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(clock=clock, logger=logger)
        self.workout_log = workout_log
        self.health_provider = health_provider
        self.insights: List[Insight] = []
        self.recovery_score: Optional[RecoveryScore] = None
        self.recommendation: Optional[WorkoutRecommendation] = None

    def calculate_recovery_score(self, now: Optional[datetime] = None) -> Optional[RecoveryScore]:
        """Recompute the recovery score from the log and today's snapshot."""
        self.recovery_score = engine.compute_recovery_score(
            self.workout_log.get_all(),
            self.health_provider.get_current_snapshot(),
            now=now or self._now(),
        )
        if self.recovery_score is None:
            self.logger.debug("No health snapshot; recovery score cleared")
        return self.recovery_score

    def get_recommendation(self) -> Optional[WorkoutRecommendation]:
        """Recommend from the last calculated score (None if there is none)."""
        self.recommendation = engine.recommend(self.recovery_score)
        return self.recommendation

    def generate_insights(self, now: Optional[datetime] = None) -> List[Insight]:
        """Replace the held insights with a fresh evaluation. Returns a copy."""
        self.insights = engine.generate_insights(
            self.workout_log.get_all(),
            self.health_provider.get_current_snapshot(),
            now=now or self._now(),
        )
        self.logger.info(f"Generated {len(self.insights)} insights")
        return list(self.insights)

    def dismiss_insight(self, insight_id: str) -> bool:
        """Remove one insight by id. Unknown ids are ignored."""
        remaining = [i for i in self.insights if i.id != insight_id]
        dismissed = len(remaining) != len(self.insights)
        self.insights = remaining
        return dismissed

    def refresh(self, now: Optional[datetime] = None) -> List[Insight]:
        """Recompute score, recommendation and insights at one instant."""
        now = now or self._now()
        self.calculate_recovery_score(now)
        self.get_recommendation()
        return self.generate_insights(now)
