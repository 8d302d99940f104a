"""Weekly goal evaluation for cut, maintenance and bulk phases."""

import logging
from collections.abc import Callable, Sequence
from datetime import date

from phase_tracker.domain.entries import DailyEntry
from phase_tracker.domain.phases import PhaseKind, PhaseRecord
from phase_tracker.domain.progress import GoalStatus, WeeklyGoalResult
from phase_tracker.services.trend import total_weight_change_week
from phase_tracker.services.weeks import (
    count_entries_in_week,
    is_valid_week,
    iter_weeks,
)

CONSECUTIVE_WEEKS = 2
MAINTENANCE_TOLERANCE = 0.20

_logger = logging.getLogger(__name__)


def cut_status(target: float, observed: float) -> GoalStatus:
    """Classify weekly weight loss against a cut target.

    The band is asymmetric: losing up to 20% faster than the target is
    accepted, while losing more than 10% slower than it is flagged.
    """
    lower_tolerance = target * 0.20
    upper_tolerance = abs(target) * 0.10
    if observed > target + upper_tolerance:
        return GoalStatus.TOO_LITTLE
    if observed < target + lower_tolerance:
        return GoalStatus.TOO_MUCH
    return GoalStatus.WITHIN_RANGE


def maintenance_status(target: float, observed: float) -> GoalStatus:
    """Classify weekly weight change against a maintenance target.

    Gaining beyond the band is ``TOO_MUCH`` and losing beyond it is
    ``TOO_LITTLE``.
    """
    if observed > target + MAINTENANCE_TOLERANCE:
        return GoalStatus.TOO_MUCH
    if observed < target - MAINTENANCE_TOLERANCE:
        return GoalStatus.TOO_LITTLE
    return GoalStatus.WITHIN_RANGE


def bulk_status(target: float, observed: float) -> GoalStatus:
    """Classify weekly weight gain against a bulk target."""
    lower_tolerance = target * 0.10
    upper_tolerance = target * 0.20
    if observed < target - lower_tolerance:
        return GoalStatus.TOO_LITTLE
    if observed > target + upper_tolerance:
        return GoalStatus.TOO_MUCH
    return GoalStatus.WITHIN_RANGE


_CLASSIFIERS: dict[PhaseKind, Callable[[float, float], GoalStatus]] = {
    PhaseKind.CUT: cut_status,
    PhaseKind.MAINTAIN: maintenance_status,
    PhaseKind.BULK: bulk_status,
}


def classify_week(kind: PhaseKind, target: float, observed: float) -> GoalStatus:
    """Classify one week's weight change for the given phase kind."""
    return _CLASSIFIERS[kind](target, observed)


def check_weekly_goal(
    phase: PhaseRecord, entries: Sequence[DailyEntry], as_of: date
) -> WeeklyGoalResult:
    """Look for two consecutive weeks missing the target in the same direction.

    Weeks are scanned from ``phase.last_checked_date`` to ``phase.end_date``,
    with the final week cut short at the end date. A week with too few
    entries, an unobserved week, or a week within range breaks the streak.
    The first streak that reaches two weeks is returned with the summed
    weight change of those weeks.
    """
    streaks = {GoalStatus.TOO_LITTLE: 0, GoalStatus.TOO_MUCH: 0}
    totals = {GoalStatus.TOO_LITTLE: 0.0, GoalStatus.TOO_MUCH: 0.0}

    def reset() -> None:
        for status in streaks:
            streaks[status] = 0
            totals[status] = 0.0

    for week in iter_weeks(phase.last_checked_date, phase.end_date):
        if not is_valid_week(count_entries_in_week(entries, week)):
            reset()
            continue
        change = total_weight_change_week(
            entries, week, phase.start_date, as_of, phase.end_date
        )
        if change is None:
            reset()
            continue

        status = classify_week(phase.kind, phase.weekly_change, change.total)
        _logger.debug(
            "Week %s..%s change=%.2f status=%s",
            week.start,
            week.end,
            change.total,
            status.name,
        )
        if status is GoalStatus.WITHIN_RANGE:
            reset()
            continue

        opposite = GoalStatus(-status)
        streaks[opposite] = 0
        totals[opposite] = 0.0
        streaks[status] += 1
        totals[status] += change.total
        if streaks[status] >= CONSECUTIVE_WEEKS:
            return WeeklyGoalResult(
                status=status,
                total=totals[status],
                weeks=streaks[status],
                through=min(week.end, phase.end_date),
            )

    return WeeklyGoalResult(status=GoalStatus.WITHIN_RANGE)
