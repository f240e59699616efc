"""Models produced by the recovery and insight engine."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Trend(str, Enum):
    """Recovery trend label."""
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class RecommendationType(str, Enum):
    """Workout intensity band."""
    REST = "rest"
    LIGHT = "light"
    MODERATE = "moderate"
    INTENSE = "intense"


class InsightType(str, Enum):
    """Category of a generated insight."""
    RECOVERY = "recovery"
    MOTIVATION = "motivation"
    BALANCE = "balance"
    SLEEP = "sleep"
    CONSISTENCY = "consistency"
    WARNING = "warning"


class InsightPriority(str, Enum):
    """Display priority of an insight."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class RecoveryFactors:
    """Inputs that contributed to a recovery score."""
    sleep: float  # hours used for scoring
    workout_load: int  # workouts in the weekly window
    rest_days: float  # days since the last workout

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RecoveryScore:
    """A recovery score (0-100) with its contributing factors."""
    score: float
    factors: RecoveryFactors
    trend: Trend
    last_calculated: datetime

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "factors": self.factors.to_dict(),
            "trend": self.trend.value,
            "last_calculated": self.last_calculated.isoformat(),
        }


@dataclass
class WorkoutRecommendation:
    """Suggested training intensity for today."""
    type: RecommendationType
    message: str
    reasoning: str
    suggested_activities: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "message": self.message,
            "suggested_activities": list(self.suggested_activities),
            "reasoning": self.reasoning,
        }


@dataclass
class Insight:
    """A rule-triggered, dismissible observation."""
    id: str
    type: InsightType
    priority: InsightPriority
    title: str
    message: str
    created_at: datetime
    actionable: bool = False
    action: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "priority": self.priority.value,
            "title": self.title,
            "message": self.message,
            "actionable": self.actionable,
            "action": self.action,
            "created_at": self.created_at.isoformat(),
        }
