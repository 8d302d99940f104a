"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from phase_tracker.adapters.console_decisions import ConsoleDecisionProvider
from phase_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from phase_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from phase_tracker.config import Settings
from phase_tracker.services.decisions import DecisionProvider
from phase_tracker.services.progress import ProgressService
from phase_tracker.services.tracking import TrackingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    progress_service: ProgressService
    tracking_service: TrackingService


def build_container(
    settings: Settings | None = None, decisions: DecisionProvider | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    progress_service = ProgressService(
        decisions=decisions or ConsoleDecisionProvider(),
        limits=resolved_settings.macro_limits(),
    )
    tracking_service = TrackingService(
        profiles=SupabaseProfileRepository(supabase_client),
        entries=SupabaseEntryRepository(supabase_client),
        progress=progress_service,
    )
    return AppContainer(
        settings=resolved_settings,
        progress_service=progress_service,
        tracking_service=tracking_service,
    )
