"""Supabase repository for daily entries."""

from dataclasses import dataclass

from pydantic import ValidationError
from supabase import Client

from phase_tracker.adapters.supabase_models import EntryRow
from phase_tracker.domain.entries import DailyEntry
from phase_tracker.domain.errors import DataError
from phase_tracker.services.tracking import EntryRepository


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for daily entry queries."""

    client: Client

    def list_entries(self, user_id: int) -> list[DailyEntry]:
        """Return all daily entries for a user ordered by day."""
        response = (
            self.client.table("daily_entries")
            .select("day, bodyweight, calories, protein_g, carbs_g, fat_g")
            .eq("user_id", user_id)
            .order("day", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> DailyEntry:
    try:
        return EntryRow.model_validate(row).to_domain()
    except ValidationError as exc:
        raise DataError(f"Malformed daily entry {row.get('day')}: {exc}") from exc
