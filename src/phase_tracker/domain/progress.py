"""Domain models for weekly progress evaluation."""

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum

from phase_tracker.domain.profile import UserProfile


class GoalStatus(IntEnum):
    """Classification of a week's weight change in the phase's direction."""

    TOO_LITTLE = -1
    WITHIN_RANGE = 0
    TOO_MUCH = 1


@dataclass(frozen=True)
class Week:
    """Seven-day window, both ends inclusive."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class WeekChange:
    """Summed day-over-day weight change within a week."""

    total: float
    last_day: date


@dataclass(frozen=True)
class WeeklyGoalResult:
    """Outcome of the consecutive-week goal check.

    ``total`` is the weight change accumulated across the ``weeks`` that
    missed the target in the same direction; ``through`` is the last day of
    the final scored week, or ``None`` when nothing persisted.
    """

    status: GoalStatus
    total: float = 0.0
    weeks: int = 0
    through: date | None = None


@dataclass
class EvaluationResult:
    """Updated profile and user-facing messages from one evaluation."""

    profile: UserProfile
    messages: list[str] = field(default_factory=list)
