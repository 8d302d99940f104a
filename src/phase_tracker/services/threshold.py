"""Maximum weight change monitor for cut and bulk phases."""

from dataclasses import replace
from datetime import date

from phase_tracker.domain.phases import PhaseKind, PhaseRecord, PhaseStatus
from phase_tracker.services.phases import calculate_duration, duration_limits

THRESHOLD_FRACTION = 0.10


def exceeds_threshold(phase: PhaseRecord, current_weight: float) -> bool:
    """Return whether the phase moved more than 10% from its start weight.

    Cuts are checked for weight lost and bulks for weight gained.
    Maintenance phases are never flagged.
    """
    limit = phase.start_weight * THRESHOLD_FRACTION
    if phase.kind is PhaseKind.CUT:
        return phase.start_weight - current_weight > limit
    if phase.kind is PhaseKind.BULK:
        return current_weight - phase.start_weight > limit
    return False


def threshold_message(phase: PhaseRecord) -> str:
    """Return the warning shown when a cut or bulk crosses the threshold."""
    if phase.kind is PhaseKind.CUT:
        return (
            "Warning: you have lost more than 10% of your starting weight in a "
            "single cutting phase."
        )
    return (
        "Warning: you have gained more than 10% of your starting weight in a "
        "single bulking phase."
    )


def start_maintenance(phase: PhaseRecord, today: date, tdee: float) -> PhaseRecord:
    """Replace the phase with maintenance effective today.

    Maintenance keeps the remaining time of the interrupted phase and
    holds the interrupted phase's starting weight.
    """
    min_weeks, max_weeks = duration_limits(PhaseKind.MAINTAIN)
    return replace(
        phase,
        kind=PhaseKind.MAINTAIN,
        status=PhaseStatus.ACTIVE,
        start_date=today,
        last_checked_date=today,
        goal_weight=phase.start_weight,
        weekly_change=0.0,
        goal_calories=round(tdee, 2),
        duration=calculate_duration(today, phase.end_date),
        min_duration=min_weeks,
        max_duration=max_weeks,
    )
