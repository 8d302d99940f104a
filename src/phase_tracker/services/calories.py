"""Calorie goal adjustment after a persisted trend miss."""

import logging
from dataclasses import dataclass, field

from phase_tracker.domain.macros import MacroProfile
from phase_tracker.domain.phases import PhaseRecord
from phase_tracker.domain.progress import WeeklyGoalResult
from phase_tracker.services.macros import (
    MacroLimits,
    apply_calorie_change,
    with_fat_limit,
)

CALORIES_PER_LB = 3500.0
DAYS_PER_WEEK = 7

_logger = logging.getLogger(__name__)


@dataclass
class CalorieAdjustment:
    """New calorie goal and macros after an adjustment."""

    goal_calories: float
    macros: MacroProfile
    requested_change: float
    applied_change: float
    messages: list[str] = field(default_factory=list)


def daily_calorie_change(
    average_weekly_change: float, target_weekly_change: float
) -> float:
    """Return the daily calorie change that closes the gap to the target rate.

    Negative values remove calories: gaining 0.25 lb/week more than the
    target translates to 125 fewer calories a day.
    """
    diff = average_weekly_change - target_weekly_change
    return -diff * CALORIES_PER_LB / DAYS_PER_WEEK


def adjust_goal_calories(
    phase: PhaseRecord,
    macros: MacroProfile,
    result: WeeklyGoalResult,
    limits: MacroLimits | None = None,
) -> CalorieAdjustment:
    """Recompute the daily calorie goal from the accumulated weight change.

    The change summed over the missed weeks is averaged per week before it
    is compared with the target rate. The calorie difference is moved
    through the macros; whatever the macro bounds cannot absorb is dropped
    and the goal reflects only the absorbed part. Fat's upper bound follows
    the requested goal, as it does for a fresh allocation.
    """
    weeks = max(result.weeks, 1)
    requested = daily_calorie_change(result.total / weeks, phase.weekly_change)
    bounded = with_fat_limit(macros, phase.goal_calories + requested, limits)
    new_macros, residual = apply_calorie_change(bounded, requested)
    applied = requested - residual

    messages = [_change_message(requested)]
    if residual:
        message = (
            f"Macro limits reached; only {abs(applied):.2f} of "
            f"{abs(requested):.2f} calories could be "
            f"{'added' if requested > 0 else 'removed'}."
        )
        _logger.warning(message)
        messages.append(message)

    goal = round(phase.goal_calories + applied, 2)
    messages.append(f"New calorie goal: {goal:.2f}.")
    _logger.info(
        "Adjusted goal calories from %.2f to %.2f", phase.goal_calories, goal
    )
    return CalorieAdjustment(
        goal_calories=goal,
        macros=new_macros,
        requested_change=requested,
        applied_change=applied,
        messages=messages,
    )


def _change_message(change: float) -> str:
    if change > 0:
        return f"Adding {change:.2f} calories to your daily goal."
    return f"Reducing your daily goal by {abs(change):.2f} calories."
