"""Progress orchestration for the active diet phase."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, timedelta

from phase_tracker.domain.entries import DailyEntry
from phase_tracker.domain.errors import DataError
from phase_tracker.domain.phases import PhaseRecord, PhaseRequest, PhaseStatus
from phase_tracker.domain.profile import UserProfile
from phase_tracker.domain.progress import EvaluationResult, GoalStatus
from phase_tracker.services.calories import adjust_goal_calories
from phase_tracker.services.decisions import (
    DecisionProvider,
    GoalSurpassedAction,
    ThresholdAction,
)
from phase_tracker.services.goals import CONSECUTIVE_WEEKS, check_weekly_goal
from phase_tracker.services.macros import MacroLimits, allocate_macros
from phase_tracker.services.phases import (
    calculate_weekly_change,
    goal_calories_for,
    goal_surpassed,
    plan_phase,
    transition_suggestion,
    validate_goal_weight,
)
from phase_tracker.services.threshold import (
    exceeds_threshold,
    start_maintenance,
    threshold_message,
)
from phase_tracker.services.weeks import count_entries_per_week, count_valid_weeks

_logger = logging.getLogger(__name__)


def validate_entries(entries: Sequence[DailyEntry]) -> None:
    """Raise ``DataError`` unless entries are sorted, unique and positive."""
    previous: date | None = None
    for entry in entries:
        if previous is not None and entry.day <= previous:
            raise DataError(
                f"Entries must be sorted by day without duplicates: {entry.day} "
                f"follows {previous}"
            )
        if entry.bodyweight <= 0:
            raise DataError(f"Bodyweight must be positive on {entry.day}")
        if min(entry.calories, entry.protein_g, entry.carbs_g, entry.fat_g) < 0:
            raise DataError(f"Logged macros must not be negative on {entry.day}")
        previous = entry.day


@dataclass
class ProgressService:
    """Evaluates logged progress and returns an updated profile.

    The incoming profile is never mutated. Forced decisions are delegated to
    the injected ``DecisionProvider``.
    """

    decisions: DecisionProvider
    limits: MacroLimits = field(default_factory=MacroLimits)
    clock: Callable[[], date] = date.today

    def evaluate(
        self, profile: UserProfile, entries: Sequence[DailyEntry]
    ) -> EvaluationResult:
        """Run lifecycle, threshold and weekly goal checks for one session."""
        validate_entries(entries)
        today = self.clock()
        current_weight = entries[-1].bodyweight if entries else profile.weight
        result = EvaluationResult(profile=profile)

        self._update_status(result, current_weight, today)
        phase = result.profile.phase
        if phase.status is not PhaseStatus.ACTIVE:
            return result

        counts = count_entries_per_week(
            entries, phase.last_checked_date, phase.end_date
        )
        if count_valid_weeks(counts) < CONSECUTIVE_WEEKS:
            _logger.info("Insufficient data: week counts=%s", counts)
            result.messages.append(
                "Not enough entries to evaluate progress yet. Log at least three "
                "days a week for two weeks."
            )
            return result

        if exceeds_threshold(phase, current_weight) and self._handle_threshold(
            result, current_weight, today
        ):
            return result

        self._check_weekly_goal(result, entries, today)
        return result

    def _update_status(
        self, result: EvaluationResult, current_weight: float, today: date
    ) -> None:
        phase = result.profile.phase
        if phase.status is PhaseStatus.SCHEDULED:
            if today < phase.start_date:
                result.messages.append(
                    f"Your {phase.kind.value} phase starts on {phase.start_date}."
                )
                return
            self._activate(result, current_weight, today)
            phase = result.profile.phase

        if phase.status is PhaseStatus.ACTIVE and today > phase.end_date:
            _logger.info("Phase %s completed on %s", phase.kind.value, phase.end_date)
            result.profile = replace(
                result.profile, phase=replace(phase, status=PhaseStatus.COMPLETED)
            )
            result.messages.append(
                f"Your {phase.kind.value} phase is complete. "
                f"{transition_suggestion(phase.kind)}"
            )

    def _activate(
        self, result: EvaluationResult, current_weight: float, today: date
    ) -> None:
        profile = result.profile
        phase = replace(
            profile.phase, status=PhaseStatus.ACTIVE, start_weight=current_weight
        )
        result.profile = replace(profile, phase=phase)
        _logger.info("Activated %s phase at %.2f", phase.kind.value, current_weight)
        if not goal_surpassed(phase, current_weight):
            return

        action = self.decisions.on_goal_surpassed(result.profile, current_weight)
        _logger.info("Goal already surpassed, action=%s", action.value)
        if action is GoalSurpassedAction.ADJUST_GOAL:
            goal_weight = validate_goal_weight(
                phase.kind,
                current_weight,
                self.decisions.choose_goal_weight(result.profile, current_weight),
            )
            weekly_change = calculate_weekly_change(
                current_weight, goal_weight, phase.duration
            )
            self._apply_phase(
                result,
                replace(
                    phase,
                    goal_weight=goal_weight,
                    weekly_change=weekly_change,
                    goal_calories=goal_calories_for(profile.tdee, weekly_change),
                ),
                current_weight,
            )
            result.messages.append(f"Goal weight updated to {goal_weight:.2f}.")
        elif action is GoalSurpassedAction.CHOOSE_NEW_PHASE:
            request = self.decisions.choose_new_phase(result.profile, current_weight)
            self._switch_phase(result, request, current_weight, today)

    def _handle_threshold(
        self, result: EvaluationResult, current_weight: float, today: date
    ) -> bool:
        """Resolve a threshold breach; return whether the phase was replaced."""
        phase = result.profile.phase
        result.messages.append(threshold_message(phase))
        action = self.decisions.on_threshold_exceeded(result.profile, current_weight)
        _logger.warning(
            "Threshold exceeded: start=%.2f current=%.2f action=%s",
            phase.start_weight,
            current_weight,
            action.value,
        )
        if action is ThresholdAction.START_MAINTENANCE:
            maintenance = start_maintenance(phase, today, result.profile.tdee)
            self._apply_phase(result, maintenance, current_weight)
            result.messages.append(
                f"Started a maintenance phase running until {maintenance.end_date}."
            )
            return True
        if action is ThresholdAction.CHOOSE_NEW_PHASE:
            request = self.decisions.choose_new_phase(result.profile, current_weight)
            self._switch_phase(result, request, current_weight, today)
            return True
        return False

    def _check_weekly_goal(
        self, result: EvaluationResult, entries: Sequence[DailyEntry], today: date
    ) -> None:
        phase = result.profile.phase
        weekly = check_weekly_goal(phase, entries, today)
        if weekly.status is GoalStatus.WITHIN_RANGE or weekly.through is None:
            result.messages.append("Your weekly progress is on track.")
            return

        adjustment = adjust_goal_calories(
            phase, result.profile.macros, weekly, self.limits
        )
        next_check = max(phase.last_checked_date, weekly.through + timedelta(days=1))
        result.profile = replace(
            result.profile,
            macros=adjustment.macros,
            phase=replace(
                phase,
                goal_calories=adjustment.goal_calories,
                last_checked_date=next_check,
            ),
        )
        result.messages.extend(adjustment.messages)

    def _switch_phase(
        self,
        result: EvaluationResult,
        request: PhaseRequest,
        current_weight: float,
        today: date,
    ) -> None:
        phase = plan_phase(request, current_weight, result.profile.tdee, today)
        self._apply_phase(result, phase, current_weight)
        result.messages.append(
            f"Switched to a {phase.kind.value} phase from {phase.start_date} "
            f"to {phase.end_date}."
        )

    def _apply_phase(
        self, result: EvaluationResult, phase: PhaseRecord, current_weight: float
    ) -> None:
        allocation = allocate_macros(current_weight, phase.goal_calories, self.limits)
        result.profile = replace(
            result.profile,
            macros=allocation.macros,
            phase=replace(phase, goal_calories=allocation.goal_calories),
        )
        result.messages.extend(allocation.messages)
