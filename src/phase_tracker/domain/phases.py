"""Domain models for diet phases."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class PhaseKind(Enum):
    """Direction of a diet phase."""

    CUT = "cut"
    MAINTAIN = "maintain"
    BULK = "bulk"


class PhaseStatus(Enum):
    """Lifecycle state of a diet phase."""

    SCHEDULED = "scheduled"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    STOPPED = "stopped"


@dataclass(frozen=True)
class PhaseRecord:
    """Persisted state of the user's current diet phase.

    ``last_checked_date`` is the first day of the next week window to
    evaluate. It never moves backwards and never precedes ``start_date``.
    Durations are expressed in weeks; ``max_duration`` is ``None`` when the
    phase kind has no upper limit.
    """

    kind: PhaseKind
    status: PhaseStatus
    start_date: date
    end_date: date
    last_checked_date: date
    start_weight: float
    goal_weight: float
    weekly_change: float
    goal_calories: float
    duration: float
    min_duration: float
    max_duration: float | None


@dataclass(frozen=True)
class PhaseRequest:
    """User choice for a new phase.

    Leaving ``end_date`` or ``goal_weight`` empty selects the recommended
    values for the phase kind.
    """

    kind: PhaseKind
    start_date: date
    end_date: date | None = None
    goal_weight: float | None = None
