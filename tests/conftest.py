"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, timedelta

import pytest

from phase_tracker.config import Settings
from phase_tracker.domain.entries import DailyEntry
from phase_tracker.domain.macros import MacroProfile
from phase_tracker.domain.phases import (
    PhaseKind,
    PhaseRecord,
    PhaseRequest,
    PhaseStatus,
)
from phase_tracker.domain.profile import ActivityLevel, Sex, UserProfile
from phase_tracker.services.decisions import (
    DecisionProvider,
    GoalSurpassedAction,
    ThresholdAction,
)
from phase_tracker.services.macros import allocate_macros
from phase_tracker.services.tracking import EntryRepository, ProfileRepository

PHASE_START = date(2023, 1, 5)
PHASE_END = date(2023, 1, 25)

CUT_WITHIN_RANGE = [
    181.1, 181.2, 181.3, 181.4, 181.5, 181.5, 181.5,
    180.6, 180.5, 180.6, 180.7, 180.8, 180.0, 180.1,
    180.0, 180.1, 180.2, 180.3, 180.3, 180.4, 180.5,
]  # fmt: skip
CUT_TOO_LITTLE = [
    180.4, 180.3, 180.3, 180.5, 180.2, 180.1, 180.1,
    180.1, 180.0, 179.9, 179.9, 180.0, 179.8, 179.8,
    179.5, 179.4, 179.4, 179.3, 179.2, 179.2, 179.0,
]  # fmt: skip
CUT_TOO_MUCH = [
    171.8, 171.6, 171.4, 171.4, 171.4, 171.2, 171.0,
    171.0, 170.8, 170.6, 170.6, 170.4, 170.4, 170.2,
    170.0, 170.0, 170.0, 170.0, 170.0, 170.0, 170.0,
]  # fmt: skip
# Phase ending Sunday 2023-01-22: on target, then two slow weeks, the last cut short.
CUT_STALLS_BEFORE_END = [
    181.0, 180.9, 180.8, 180.7, 180.6, 180.5, 180.5,
    180.5, 180.5, 180.5, 180.4, 180.4, 180.4, 180.4,
    180.4, 180.4, 180.3, 180.3,
]  # fmt: skip
BULK_TOO_LITTLE = [180.0] * 7 + [175.0] * 7 + [170.0] * 7
BULK_TOO_MUCH = [
    170.0, 170.0, 170.0, 170.0, 170.0, 170.0, 170.0,
    170.2, 170.4, 170.4, 170.4, 170.6, 170.8, 170.8,
    171.0, 171.2, 171.2, 171.4, 171.4, 171.6, 171.8,
]  # fmt: skip


def make_entries(
    weights: list[float], start: date = PHASE_START, calories: float = 2400.0
) -> list[DailyEntry]:
    """Build consecutive daily entries starting at ``start``."""
    return [
        DailyEntry(
            day=start + timedelta(days=offset), bodyweight=weight, calories=calories
        )
        for offset, weight in enumerate(weights)
    ]


def make_phase(**overrides: object) -> PhaseRecord:
    phase = PhaseRecord(
        kind=PhaseKind.CUT,
        status=PhaseStatus.ACTIVE,
        start_date=PHASE_START,
        end_date=PHASE_END,
        last_checked_date=PHASE_START,
        start_weight=180.4,
        goal_weight=170.0,
        weekly_change=-0.5,
        goal_calories=2400.0,
        duration=20 / 7,
        min_duration=6,
        max_duration=12,
    )
    return replace(phase, **overrides)


def make_macros(weight: float = 180.0, goal_calories: float = 2400.0) -> MacroProfile:
    return allocate_macros(weight, goal_calories).macros


def make_profile(
    phase: PhaseRecord | None = None, macros: MacroProfile | None = None
) -> UserProfile:
    return UserProfile(
        sex=Sex.MALE,
        weight=180.0,
        height=70.0,
        age=30,
        activity_level=ActivityLevel.MODERATE,
        tdee=2600.0,
        macros=macros or make_macros(),
        phase=phase or make_phase(),
    )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[int, UserProfile] = field(default_factory=dict)
    saved: list[int] = field(default_factory=list)

    def get_profile(self, user_id: int) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, user_id: int, profile: UserProfile) -> None:
        self.profiles[user_id] = profile
        self.saved.append(user_id)


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: dict[int, list[DailyEntry]] = field(default_factory=dict)

    def list_entries(self, user_id: int) -> list[DailyEntry]:
        return list(self.entries.get(user_id, []))


@dataclass
class ScriptedDecisionProvider(DecisionProvider):
    """Decision provider that returns preset answers and records calls."""

    threshold_action: ThresholdAction = ThresholdAction.CONTINUE
    surpassed_action: GoalSurpassedAction = GoalSurpassedAction.CONTINUE
    goal_weight: float = 0.0
    phase_request: PhaseRequest | None = None
    calls: list[str] = field(default_factory=list)

    def on_threshold_exceeded(
        self, profile: UserProfile, current_weight: float
    ) -> ThresholdAction:
        self.calls.append("threshold")
        return self.threshold_action

    def on_goal_surpassed(
        self, profile: UserProfile, current_weight: float
    ) -> GoalSurpassedAction:
        self.calls.append("surpassed")
        return self.surpassed_action

    def choose_goal_weight(self, profile: UserProfile, current_weight: float) -> float:
        self.calls.append("goal_weight")
        return self.goal_weight

    def choose_new_phase(
        self, profile: UserProfile, current_weight: float
    ) -> PhaseRequest:
        self.calls.append("new_phase")
        if self.phase_request is None:
            raise AssertionError("No phase request scripted")
        return self.phase_request


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
    )


@pytest.fixture
def decisions() -> ScriptedDecisionProvider:
    return ScriptedDecisionProvider()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()
