"""Week-over-week bodyweight trend calculation."""

from collections.abc import Sequence
from datetime import date

from phase_tracker.domain.entries import DailyEntry
from phase_tracker.domain.progress import Week, WeekChange
from phase_tracker.services.weeks import find_entry_index


def preceding_weight(
    entries: Sequence[DailyEntry], index: int, phase_start: date
) -> float:
    """Return the weight to diff ``entries[index]`` against.

    The previous logged entry is used when it belongs to the phase. For the
    first in-phase entry the entry's own weight is returned, so history
    logged before the phase never leaks into the first delta.
    """
    if index > 0 and entries[index - 1].day >= phase_start:
        return entries[index - 1].bodyweight
    return entries[index].bodyweight


def total_weight_change_week(
    entries: Sequence[DailyEntry],
    week: Week,
    phase_start: date,
    as_of: date,
    phase_end: date | None = None,
) -> WeekChange | None:
    """Sum day-over-day weight changes for the entries inside ``week``.

    A window running past ``phase_end`` is cut short at that day. Returns
    ``None`` when the window has no entries or has not been fully observed
    yet. A week is fully observed once ``as_of`` is past its last day or an
    entry has been logged on or after that day. A window ending on
    ``phase_end`` is also observed on that day, the last one the phase is
    evaluated.
    """
    last_window_day = week.end if phase_end is None else min(week.end, phase_end)
    start_index = find_entry_index(entries, week.start)
    if start_index is None or entries[start_index].day > last_window_day:
        return None
    if last_window_day == phase_end:
        reached = as_of >= last_window_day
    else:
        reached = as_of > last_window_day
    if not reached and entries[-1].day < last_window_day:
        return None

    total = 0.0
    last_day = entries[start_index].day
    for index in range(start_index, len(entries)):
        entry = entries[index]
        if entry.day > last_window_day:
            break
        total += entry.bodyweight - preceding_weight(entries, index, phase_start)
        last_day = entry.day
    return WeekChange(total=total, last_day=last_day)
