"""Week windowing over sparse daily entries."""

from bisect import bisect_left
from collections.abc import Iterator, Sequence
from datetime import date, timedelta

from phase_tracker.domain.entries import DailyEntry
from phase_tracker.domain.progress import Week

DAYS_PER_WEEK = 7
MIN_ENTRIES_PER_WEEK = 3


def iter_weeks(start: date, end: date) -> Iterator[Week]:
    """Yield seven-day windows from ``start`` while a window starts before ``end``."""
    week_start = start
    while week_start < end:
        yield Week(
            start=week_start, end=week_start + timedelta(days=DAYS_PER_WEEK - 1)
        )
        week_start += timedelta(days=DAYS_PER_WEEK)


def find_entry_index(entries: Sequence[DailyEntry], day: date) -> int | None:
    """Return the index of the first entry dated on or after ``day``."""
    index = bisect_left([entry.day for entry in entries], day)
    if index == len(entries):
        return None
    return index


def count_entries_in_week(entries: Sequence[DailyEntry], week: Week) -> int:
    """Return how many entries fall inside the window."""
    return sum(1 for entry in entries if week.contains(entry.day))


def count_entries_per_week(
    entries: Sequence[DailyEntry], anchor: date, end: date
) -> list[int]:
    """Count entries per Monday-based calendar week.

    Week 0 is the calendar week containing ``anchor``. Only entries dated
    within ``[anchor, end]`` are counted. The result is indexed by week
    number, so iterating it always walks weeks in ascending order.
    """
    if end < anchor:
        return []
    first_monday = _monday(anchor)
    counts = [0] * ((_monday(end) - first_monday).days // DAYS_PER_WEEK + 1)
    for entry in entries:
        if anchor <= entry.day <= end:
            counts[(_monday(entry.day) - first_monday).days // DAYS_PER_WEEK] += 1
    return counts


def is_valid_week(count: int) -> bool:
    """Return whether a week holds enough entries to score."""
    return count >= MIN_ENTRIES_PER_WEEK


def count_valid_weeks(counts: Sequence[int]) -> int:
    """Return the number of weeks with enough entries to score."""
    return sum(1 for count in counts if is_valid_week(count))


def _monday(day: date) -> date:
    return day - timedelta(days=day.weekday())
