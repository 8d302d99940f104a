"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from phase_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from phase_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from phase_tracker.domain.errors import DataError
from phase_tracker.domain.phases import PhaseKind, PhaseStatus
from tests.conftest import make_profile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


PROFILE_ROW = {
    "user_id": 1,
    "sex": "male",
    "weight": 180.0,
    "height": 70.0,
    "age": 30,
    "activity_level": "moderate",
    "tdee": 2600.0,
    "system": "imperial",
}
MACROS_ROW = {
    "user_id": 1,
    "protein_g": 180.0,
    "carbs_g": 270.0,
    "fat_g": 66.67,
    "min_protein_g": 54.0,
    "max_protein_g": 360.0,
    "min_carbs_g": 54.0,
    "max_carbs_g": 720.0,
    "min_fat_g": 54.0,
    "max_fat_g": 106.67,
}
PHASE_ROW = {
    "user_id": 1,
    "kind": "cut",
    "status": "active",
    "start_date": "2023-01-05",
    "end_date": "2023-03-02",
    "last_checked_date": "2023-01-05",
    "start_weight": 180.0,
    "goal_weight": 172.0,
    "weekly_change": -1.0,
    "goal_calories": 2100.0,
    "duration": 8.0,
    "min_duration": 6.0,
    "max_duration": 12.0,
}


def _client_with_profile(phase_row: dict[str, object]) -> FakeSupabaseClient:
    client = FakeSupabaseClient()
    client.table("profiles").queue("select", [PROFILE_ROW])
    client.table("macros").queue("select", [MACROS_ROW])
    client.table("phase_info").queue("select", [phase_row])
    return client


def test_supabase_profile_repository_loads_profile() -> None:
    client = _client_with_profile(PHASE_ROW)

    profile = SupabaseProfileRepository(client).get_profile(1)

    assert profile is not None
    assert profile.tdee == 2600.0
    assert profile.macros.fat_g == 66.67
    assert profile.phase.kind is PhaseKind.CUT
    assert profile.phase.status is PhaseStatus.ACTIVE
    assert profile.phase.start_date == date(2023, 1, 5)
    assert client.table("phase_info").last_filters == [("user_id", 1)]


def test_supabase_profile_repository_missing_profile() -> None:
    assert SupabaseProfileRepository(FakeSupabaseClient()).get_profile(1) is None


def test_supabase_profile_repository_requires_phase() -> None:
    client = FakeSupabaseClient()
    client.table("profiles").queue("select", [PROFILE_ROW])
    client.table("macros").queue("select", [MACROS_ROW])

    with pytest.raises(DataError, match="no macros or phase"):
        SupabaseProfileRepository(client).get_profile(1)


def test_supabase_profile_repository_rejects_malformed_dates() -> None:
    client = _client_with_profile({**PHASE_ROW, "end_date": "2022-12-01"})

    with pytest.raises(DataError, match="PhaseRow"):
        SupabaseProfileRepository(client).get_profile(1)


def test_supabase_profile_repository_saves_all_tables() -> None:
    client = FakeSupabaseClient()
    for table in ("profiles", "macros", "phase_info"):
        client.table(table).queue("upsert", [{"user_id": 1}])

    SupabaseProfileRepository(client).save_profile(1, make_profile())

    phase_payload = client.table("phase_info").last_payload
    assert isinstance(phase_payload, dict)
    assert phase_payload["user_id"] == 1
    assert phase_payload["kind"] == "cut"
    assert phase_payload["last_checked_date"] == "2023-01-05"
    profile_payload = client.table("profiles").last_payload
    assert isinstance(profile_payload, dict)
    assert profile_payload["activity_level"] == "moderate"


def test_supabase_profile_repository_save_failure() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(RuntimeError, match="Failed to save profiles"):
        SupabaseProfileRepository(client).save_profile(1, make_profile())


def test_supabase_profile_repository_writes_phase_last() -> None:
    client = FakeSupabaseClient()
    client.table("profiles").queue("upsert", [{"user_id": 1}])

    with pytest.raises(RuntimeError, match="Failed to save macros"):
        SupabaseProfileRepository(client).save_profile(1, make_profile())

    assert client.table("profiles").last_payload is not None
    assert client.table("phase_info").last_payload is None


def test_supabase_profile_repository_estimates_missing_tdee() -> None:
    client = FakeSupabaseClient()
    client.table("profiles").queue("select", [{**PROFILE_ROW, "tdee": None}])
    client.table("macros").queue("select", [MACROS_ROW])
    client.table("phase_info").queue("select", [PHASE_ROW])

    profile = SupabaseProfileRepository(client).get_profile(1)

    assert profile is not None
    assert profile.tdee == pytest.approx(2763.2, abs=0.1)


def test_supabase_entry_repository_lists_entries() -> None:
    client = FakeSupabaseClient()
    client.table("daily_entries").queue(
        "select",
        [
            {
                "day": "2023-01-05",
                "bodyweight": 180.2,
                "calories": 2400,
                "protein_g": 180,
            },
            {"day": "2023-01-06", "bodyweight": 180.0},
        ],
    )

    entries = SupabaseEntryRepository(client).list_entries(1)

    assert [entry.day for entry in entries] == [date(2023, 1, 5), date(2023, 1, 6)]
    assert entries[0].protein_g == 180
    assert entries[1].fat_g == 0.0


def test_supabase_entry_repository_rejects_bad_weight() -> None:
    client = FakeSupabaseClient()
    client.table("daily_entries").queue(
        "select", [{"day": "2023-01-05", "bodyweight": -1}]
    )

    with pytest.raises(DataError, match="2023-01-05"):
        SupabaseEntryRepository(client).list_entries(1)
