"""Terminal implementation of the decision provider."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

from phase_tracker.domain.errors import PhaseValidationError
from phase_tracker.domain.phases import PhaseKind, PhaseRequest
from phase_tracker.domain.profile import UserProfile
from phase_tracker.services.decisions import (
    DecisionProvider,
    GoalSurpassedAction,
    ThresholdAction,
)
from phase_tracker.services.phases import plan_phase, validate_goal_weight

OptionT = TypeVar("OptionT")

_THRESHOLD_OPTIONS = {
    "1": ThresholdAction.START_MAINTENANCE,
    "2": ThresholdAction.CHOOSE_NEW_PHASE,
    "3": ThresholdAction.CONTINUE,
}
_SURPASSED_OPTIONS = {
    "1": GoalSurpassedAction.ADJUST_GOAL,
    "2": GoalSurpassedAction.CHOOSE_NEW_PHASE,
    "3": GoalSurpassedAction.CONTINUE,
}
_PHASE_OPTIONS = {kind.value: kind for kind in PhaseKind}


@dataclass
class ConsoleDecisionProvider(DecisionProvider):
    """Prompts for decisions on stdin until a valid answer is given."""

    prompt: Callable[[str], str] = input
    output: Callable[[str], None] = print
    clock: Callable[[], date] = date.today

    def on_threshold_exceeded(
        self, profile: UserProfile, current_weight: float
    ) -> ThresholdAction:
        self.output("1. Stop this phase and start maintenance now")
        self.output("2. Choose a different diet phase")
        self.output("3. Continue the current phase")
        return self._choose("Enter action (1-3): ", _THRESHOLD_OPTIONS)

    def on_goal_surpassed(
        self, profile: UserProfile, current_weight: float
    ) -> GoalSurpassedAction:
        self.output(
            f"You already reached your {profile.phase.kind.value} goal of "
            f"{profile.phase.goal_weight:.2f} before the phase started."
        )
        self.output("1. Set a new goal weight")
        self.output("2. Choose a different diet phase")
        self.output("3. Continue the current phase")
        return self._choose("Enter action (1-3): ", _SURPASSED_OPTIONS)

    def choose_goal_weight(self, profile: UserProfile, current_weight: float) -> float:
        while True:
            raw = self.prompt("Enter goal weight: ").strip()
            try:
                return validate_goal_weight(
                    profile.phase.kind, current_weight, float(raw)
                )
            except ValueError as exc:
                message = (
                    str(exc)
                    if isinstance(exc, PhaseValidationError)
                    else "Invalid goal weight. Goal weight must be a number."
                )
                self.output(message)

    def choose_new_phase(
        self, profile: UserProfile, current_weight: float
    ) -> PhaseRequest:
        kind = self._choose("Enter diet phase (cut, maintain, bulk): ", _PHASE_OPTIONS)
        while True:
            raw = self.prompt("Start date (YYYY-MM-DD, blank for today): ").strip()
            today = self.clock()
            try:
                start_date = date.fromisoformat(raw) if raw else today
            except ValueError:
                self.output("Invalid date. Use the YYYY-MM-DD format.")
                continue
            request = PhaseRequest(kind=kind, start_date=start_date)
            try:
                plan_phase(request, current_weight, profile.tdee, today)
            except PhaseValidationError as exc:
                self.output(str(exc))
                continue
            return request

    def _choose(self, message: str, options: dict[str, OptionT]) -> OptionT:
        while True:
            answer = self.prompt(message).strip().lower()
            if answer in options:
                return options[answer]
            self.output("Invalid choice.")
