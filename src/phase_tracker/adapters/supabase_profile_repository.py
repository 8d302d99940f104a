"""Supabase repository for user profiles, macros and phases."""

import logging
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel, ValidationError
from supabase import Client

from phase_tracker.adapters.supabase_models import MacrosRow, PhaseRow, ProfileRow
from phase_tracker.domain.errors import DataError
from phase_tracker.domain.profile import UserProfile
from phase_tracker.services.metabolism import estimate_tdee
from phase_tracker.services.tracking import ProfileRepository

RowT = TypeVar("RowT", bound=BaseModel)

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: int) -> UserProfile | None:
        """Return the profile with its macros and phase, if present."""
        profile_row = self._fetch_one("profiles", user_id)
        if profile_row is None:
            return None
        macros_row = self._fetch_one("macros", user_id)
        phase_row = self._fetch_one("phase_info", user_id)
        if macros_row is None or phase_row is None:
            raise DataError(f"Profile for user {user_id} has no macros or phase")

        profile = _parse(ProfileRow, profile_row)
        tdee = profile.tdee
        if tdee is None:
            tdee = estimate_tdee(
                profile.sex,
                profile.weight,
                profile.height,
                profile.age,
                profile.activity_level,
            )
            _logger.info("Estimated TDEE %.2f for user %s", tdee, user_id)
        return UserProfile(
            sex=profile.sex,
            weight=profile.weight,
            height=profile.height,
            age=profile.age,
            activity_level=profile.activity_level,
            tdee=tdee,
            system=profile.system,
            macros=_parse(MacrosRow, macros_row).to_domain(),
            phase=_parse(PhaseRow, phase_row).to_domain(),
        )

    def save_profile(self, user_id: int, profile: UserProfile) -> None:
        """Upsert profile, macros and phase rows, stopping at the first failure.

        Every row is validated before the first write. ``phase_info`` goes
        last, so its ``last_checked_date`` only advances once the profile and
        macros it refers to are stored.
        """
        rows = {
            "profiles": ProfileRow(
                sex=profile.sex,
                weight=profile.weight,
                height=profile.height,
                age=profile.age,
                activity_level=profile.activity_level,
                tdee=profile.tdee,
                system=profile.system,
            ),
            "macros": MacrosRow.from_domain(profile.macros),
            "phase_info": PhaseRow.from_domain(profile.phase),
        }
        for table, row in rows.items():
            payload = {"user_id": user_id, **row.model_dump(mode="json")}
            response = self.client.table(table).upsert(payload).execute()
            if not response.data:
                raise RuntimeError(f"Failed to save {table} for user {user_id}")

    def _fetch_one(self, table: str, user_id: int) -> dict[str, object] | None:
        response = (
            self.client.table(table)
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]


def _parse(model: type[RowT], row: dict[str, object]) -> RowT:
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        raise DataError(f"Malformed {model.__name__}: {exc}") from exc
