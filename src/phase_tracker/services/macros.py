"""Macro allocation under per-macro gram bounds."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from phase_tracker.domain.macros import Macro, MacroProfile

PROTEIN_PER_LB = 1.0
CARBS_PER_LB = 1.5
CALORIE_EPSILON = 1e-6

# Calories leave fat first and return to carbs first.
REMOVE_ORDER = (Macro.FAT, Macro.CARBS, Macro.PROTEIN)
ADD_ORDER = (Macro.CARBS, Macro.FAT, Macro.PROTEIN)
FAT_OVERFLOW_ORDER = (Macro.CARBS, Macro.PROTEIN)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MacroLimits:
    """Per-pound gram limits and the fat share of goal calories."""

    min_protein_per_lb: float = 0.3
    max_protein_per_lb: float = 2.0
    min_carbs_per_lb: float = 0.3
    max_carbs_per_lb: float = 4.0
    min_fat_per_lb: float = 0.3
    max_fat_calorie_share: float = 0.40


@dataclass
class MacroAllocation:
    """Result of an initial macro split."""

    macros: MacroProfile
    goal_calories: float
    messages: list[str] = field(default_factory=list)

    @property
    def goal_overridden(self) -> bool:
        return bool(self.messages)


def macro_bounds(
    weight: float, goal_calories: float, limits: MacroLimits | None = None
) -> MacroProfile:
    """Return a profile holding only the gram bounds, targets set to zero.

    Fat's upper bound is a share of goal calories and is never allowed to
    fall below its per-pound minimum.
    """
    resolved = limits or MacroLimits()
    min_fat = resolved.min_fat_per_lb * weight
    max_fat = _fat_maximum(min_fat, goal_calories, resolved)
    return MacroProfile(
        protein_g=0.0,
        carbs_g=0.0,
        fat_g=0.0,
        min_protein_g=resolved.min_protein_per_lb * weight,
        max_protein_g=resolved.max_protein_per_lb * weight,
        min_carbs_g=resolved.min_carbs_per_lb * weight,
        max_carbs_g=resolved.max_carbs_per_lb * weight,
        min_fat_g=min_fat,
        max_fat_g=max_fat,
    )


def with_fat_limit(
    macros: MacroProfile, goal_calories: float, limits: MacroLimits | None = None
) -> MacroProfile:
    """Return ``macros`` with fat's upper bound derived from a new calorie goal."""
    resolved = limits or MacroLimits()
    return replace(
        macros, max_fat_g=_fat_maximum(macros.min_fat_g, goal_calories, resolved)
    )


def cascade_calories(
    grams: dict[Macro, float],
    calories: float,
    order: Sequence[Macro],
    bounds: MacroProfile,
) -> float:
    """Spend (positive) or reclaim (negative) calories across macros in order.

    Each macro absorbs as much as its headroom toward the relevant bound
    allows and the remainder carries to the next macro. ``grams`` is
    updated in place. Returns the calories that could not be absorbed,
    with the same sign as ``calories``.
    """
    remaining = calories
    for macro in order:
        if abs(remaining) < CALORIE_EPSILON:
            return 0.0
        per_gram = macro.calories_per_gram
        if remaining > 0:
            headroom = max(0.0, (bounds.maximum(macro) - grams[macro]) * per_gram)
            moved = min(remaining, headroom)
        else:
            headroom = min(0.0, (bounds.minimum(macro) - grams[macro]) * per_gram)
            moved = max(remaining, headroom)
        grams[macro] += moved / per_gram
        remaining -= moved
    if abs(remaining) < CALORIE_EPSILON:
        return 0.0
    return remaining


def allocate_macros(
    weight: float, goal_calories: float, limits: MacroLimits | None = None
) -> MacroAllocation:
    """Split goal calories into protein, carbs and fat for a bodyweight.

    Protein starts at 1 g/lb and carbs at 1.5 g/lb with fat taking the
    remainder. When fat falls outside its bounds the difference is moved
    through carbs and then protein. Goals that cannot be met within the
    bounds are overridden and reported in ``messages``.
    """
    bounds = macro_bounds(weight, goal_calories, limits)
    min_total = sum(bounds.minimum(m) * m.calories_per_gram for m in Macro)
    max_total = sum(bounds.maximum(m) * m.calories_per_gram for m in Macro)

    if min_total > goal_calories:
        message = (
            f"Calorie goal {goal_calories:.2f} is below the minimum macro "
            f"requirement; using {min_total:.2f} calories."
        )
        _logger.warning(message)
        grams = {m: bounds.minimum(m) for m in Macro}
        return MacroAllocation(
            _with_grams(bounds, grams), round(min_total, 2), [message]
        )
    if max_total < goal_calories:
        message = (
            f"Calorie goal {goal_calories:.2f} exceeds the maximum macro "
            f"allowance; using {max_total:.2f} calories."
        )
        _logger.warning(message)
        grams = {m: bounds.maximum(m) for m in Macro}
        return MacroAllocation(
            _with_grams(bounds, grams), round(max_total, 2), [message]
        )

    protein = PROTEIN_PER_LB * weight
    carbs = CARBS_PER_LB * weight
    grams = {
        Macro.PROTEIN: protein,
        Macro.CARBS: carbs,
        Macro.FAT: (goal_calories - protein * 4 - carbs * 4) / 9,
    }
    messages: list[str] = []
    resolved_goal = goal_calories

    fat_gap = 0.0
    if grams[Macro.FAT] < bounds.min_fat_g:
        fat_gap = (grams[Macro.FAT] - bounds.min_fat_g) * 9
        grams[Macro.FAT] = bounds.min_fat_g
    elif grams[Macro.FAT] > bounds.max_fat_g:
        fat_gap = (grams[Macro.FAT] - bounds.max_fat_g) * 9
        grams[Macro.FAT] = bounds.max_fat_g
    if fat_gap:
        residual = cascade_calories(grams, fat_gap, FAT_OVERFLOW_ORDER, bounds)
        if residual:
            resolved_goal = goal_calories - residual
            message = (
                f"Could not balance fat within its limits; calorie goal set to "
                f"{resolved_goal:.2f}."
            )
            _logger.warning(message)
            messages.append(message)

    return MacroAllocation(
        _with_grams(bounds, grams), round(resolved_goal, 2), messages
    )


def apply_calorie_change(
    macros: MacroProfile, calories: float
) -> tuple[MacroProfile, float]:
    """Move a calorie change through macros using their stored bounds.

    Removing calories walks fat, carbs, then protein down to their minimums.
    Adding calories walks carbs, fat, then protein up to their maximums.
    Returns the updated profile and the unabsorbed calories.
    """
    grams = {m: macros.grams(m) for m in Macro}
    order = ADD_ORDER if calories > 0 else REMOVE_ORDER
    residual = cascade_calories(grams, calories, order, macros)
    if residual:
        _logger.info(
            "Macro bounds absorbed %.2f of %.2f calories", calories - residual, calories
        )
    return _with_grams(macros, grams), residual


def _fat_maximum(min_fat: float, goal_calories: float, limits: MacroLimits) -> float:
    return max(min_fat, limits.max_fat_calorie_share * goal_calories / 9)


def _with_grams(bounds: MacroProfile, grams: dict[Macro, float]) -> MacroProfile:
    rounded = {
        m: _round_within(grams[m], bounds.minimum(m), bounds.maximum(m)) for m in Macro
    }
    return replace(
        bounds,
        protein_g=rounded[Macro.PROTEIN],
        carbs_g=rounded[Macro.CARBS],
        fat_g=rounded[Macro.FAT],
    )


def _round_within(grams: float, low: float, high: float) -> float:
    """Round to two decimals without leaving ``[low, high]``."""
    value = round(grams, 2)
    if value < low:
        value = math.ceil(low * 100) / 100
    elif value > high:
        value = math.floor(high * 100) / 100
    return min(max(value, low), high)
