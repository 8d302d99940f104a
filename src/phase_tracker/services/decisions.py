"""Decision points surfaced to the caller during an evaluation."""

from enum import Enum
from typing import Protocol

from phase_tracker.domain.phases import PhaseRequest
from phase_tracker.domain.profile import UserProfile


class ThresholdAction(Enum):
    """Choices offered when a phase changes weight beyond its threshold."""

    START_MAINTENANCE = "start_maintenance"
    CHOOSE_NEW_PHASE = "choose_new_phase"
    CONTINUE = "continue"


class GoalSurpassedAction(Enum):
    """Choices offered when a phase starts with its goal already reached."""

    ADJUST_GOAL = "adjust_goal"
    CHOOSE_NEW_PHASE = "choose_new_phase"
    CONTINUE = "continue"


class DecisionProvider(Protocol):
    """Caller-side interface that answers forced decisions."""

    def on_threshold_exceeded(
        self, profile: UserProfile, current_weight: float
    ) -> ThresholdAction:
        """Return how to proceed after exceeding the weight change threshold."""

    def on_goal_surpassed(
        self, profile: UserProfile, current_weight: float
    ) -> GoalSurpassedAction:
        """Return how to proceed when the goal weight is already reached."""

    def choose_goal_weight(self, profile: UserProfile, current_weight: float) -> float:
        """Return a new goal weight for the current phase."""

    def choose_new_phase(
        self, profile: UserProfile, current_weight: float
    ) -> PhaseRequest:
        """Return the phase the user wants to switch to."""
