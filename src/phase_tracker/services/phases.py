"""Diet phase planning, validation and lifecycle helpers."""

import logging
from datetime import date, timedelta

from phase_tracker.domain.errors import PhaseValidationError
from phase_tracker.domain.phases import (
    PhaseKind,
    PhaseRecord,
    PhaseRequest,
    PhaseStatus,
)

GOAL_WEIGHT_LIMIT = 0.10
CALORIES_PER_WEEKLY_LB = 500.0

DURATION_LIMITS: dict[PhaseKind, tuple[float, float | None]] = {
    PhaseKind.CUT: (6, 12),
    PhaseKind.MAINTAIN: (4, None),
    PhaseKind.BULK: (6, 16),
}
RECOMMENDED_WEEKS = {
    PhaseKind.CUT: 8,
    PhaseKind.MAINTAIN: 5,
    PhaseKind.BULK: 10,
}
# Weekly change as a fraction of bodyweight.
RECOMMENDED_WEEKLY_PCT = {
    PhaseKind.CUT: -0.005,
    PhaseKind.MAINTAIN: 0.0,
    PhaseKind.BULK: 0.0025,
}
TRANSITION_SUGGESTIONS = {
    PhaseKind.CUT: (
        "After a fully completed cut phase, a maintenance phase of the same "
        "duration as your completed cut is recommended."
    ),
    PhaseKind.MAINTAIN: (
        "After a fully completed maintenance phase, you are primed for a bulk or "
        "a cut. Extending maintenance is fine but trades away time for building "
        "muscle or losing fat."
    ),
    PhaseKind.BULK: (
        "After a fully completed bulk phase, a maintenance phase of at least a "
        "month is recommended."
    ),
}

_logger = logging.getLogger(__name__)


def duration_limits(kind: PhaseKind) -> tuple[float, float | None]:
    """Return the minimum and maximum duration in weeks for a phase kind."""
    return DURATION_LIMITS[kind]


def calculate_end_date(start: date, weeks: float) -> date:
    """Return the end date ``weeks`` after ``start``, truncated to whole days."""
    return start + timedelta(days=int(weeks * 7))


def calculate_duration(start: date, end: date) -> float:
    """Return the number of weeks between two dates."""
    return (end - start).days / 7


def calculate_weekly_change(
    current_weight: float, goal_weight: float, weeks: float
) -> float:
    """Return the signed weekly change needed to reach the goal weight."""
    return (goal_weight - current_weight) / weeks


def calculate_goal_weight(weight: float, weeks: float, weekly_pct: float) -> float:
    """Return the weight reached by compounding ``weekly_pct`` for ``weeks``."""
    return round(weight * (1 + weekly_pct) ** weeks, 2)


def goal_calories_for(tdee: float, weekly_change: float) -> float:
    """Return daily calories for a weekly weight change relative to TDEE."""
    return round(tdee + weekly_change * CALORIES_PER_WEEKLY_LB, 2)


def validate_goal_weight(
    kind: PhaseKind, start_weight: float, goal_weight: float
) -> float:
    """Check a goal weight against the phase direction and the 10% limit."""
    if goal_weight <= 0:
        raise PhaseValidationError("Invalid goal weight. Goal weight must be positive.")
    if kind is PhaseKind.CUT:
        if goal_weight >= start_weight:
            raise PhaseValidationError(
                "Invalid goal weight. For a cut, goal weight must be below the "
                "starting body weight."
            )
        if goal_weight < start_weight * (1 - GOAL_WEIGHT_LIMIT):
            raise PhaseValidationError(
                "Invalid goal weight. For a cut, goal weight cannot be more than "
                "10% below the starting body weight."
            )
    elif kind is PhaseKind.BULK:
        if goal_weight <= start_weight:
            raise PhaseValidationError(
                "Invalid goal weight. For a bulk, goal weight must be above the "
                "starting body weight."
            )
        if goal_weight > start_weight * (1 + GOAL_WEIGHT_LIMIT):
            raise PhaseValidationError(
                "Invalid goal weight. For a bulk, goal weight cannot exceed the "
                "starting body weight by more than 10%."
            )
    return goal_weight


def validate_phase_dates(kind: PhaseKind, start: date, end: date) -> float:
    """Validate phase dates and return the duration in weeks."""
    if end <= start:
        raise PhaseValidationError(
            "Invalid diet phase end date. End date must be after the start date."
        )
    weeks = calculate_duration(start, end)
    min_weeks, max_weeks = duration_limits(kind)
    if max_weeks is not None and weeks > max_weeks:
        raise PhaseValidationError(
            f"Invalid diet phase end date. Diet duration of {weeks:.2f} weeks "
            f"exceeds the maximum duration of {max_weeks:.2f}."
        )
    if weeks < min_weeks:
        raise PhaseValidationError(
            f"Invalid diet phase end date. Diet duration of {weeks:.2f} weeks "
            f"is below the minimum duration of {min_weeks:.2f}."
        )
    return weeks


def plan_phase(
    request: PhaseRequest, weight: float, tdee: float, today: date
) -> PhaseRecord:
    """Build a validated phase from a user request.

    Missing end dates and goal weights fall back to the recommended values
    for the phase kind. Maintenance always targets the current weight.
    """
    if request.start_date < today:
        raise PhaseValidationError(
            "Invalid start date. Start date cannot be in the past."
        )

    kind = request.kind
    if request.end_date is None:
        end_date = calculate_end_date(request.start_date, RECOMMENDED_WEEKS[kind])
    else:
        end_date = request.end_date
    weeks = validate_phase_dates(kind, request.start_date, end_date)

    if kind is PhaseKind.MAINTAIN:
        goal_weight = weight
    elif request.goal_weight is None:
        goal_weight = calculate_goal_weight(weight, weeks, RECOMMENDED_WEEKLY_PCT[kind])
    else:
        goal_weight = request.goal_weight
    validate_goal_weight(kind, weight, goal_weight)

    weekly_change = calculate_weekly_change(weight, goal_weight, weeks)
    min_weeks, max_weeks = duration_limits(kind)
    status = PhaseStatus.SCHEDULED if request.start_date > today else PhaseStatus.ACTIVE
    _logger.info(
        "Planned %s phase %s..%s goal_weight=%.2f",
        kind.value,
        request.start_date,
        end_date,
        goal_weight,
    )
    return PhaseRecord(
        kind=kind,
        status=status,
        start_date=request.start_date,
        end_date=end_date,
        last_checked_date=request.start_date,
        start_weight=weight,
        goal_weight=goal_weight,
        weekly_change=weekly_change,
        goal_calories=goal_calories_for(tdee, weekly_change),
        duration=weeks,
        min_duration=min_weeks,
        max_duration=max_weeks,
    )


def goal_surpassed(phase: PhaseRecord, current_weight: float) -> bool:
    """Return whether the current weight already meets the phase's goal."""
    if phase.kind is PhaseKind.CUT:
        return current_weight <= phase.goal_weight
    if phase.kind is PhaseKind.BULK:
        return current_weight >= phase.goal_weight
    return False


def transition_suggestion(kind: PhaseKind) -> str:
    """Return the recommended next step after a phase completes."""
    return TRANSITION_SUGGESTIONS[kind]
