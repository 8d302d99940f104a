"""Session workflow: load state, evaluate progress, persist the result."""

import logging
from dataclasses import dataclass
from typing import Protocol

from phase_tracker.domain.entries import DailyEntry
from phase_tracker.domain.errors import DataError
from phase_tracker.domain.profile import UserProfile
from phase_tracker.domain.progress import EvaluationResult
from phase_tracker.services.progress import ProgressService

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: int) -> UserProfile | None:
        """Return the stored profile for a user."""

    def save_profile(self, user_id: int, profile: UserProfile) -> None:
        """Persist the profile, macros and phase for a user."""


class EntryRepository(Protocol):
    """Persistence interface for daily log entries."""

    def list_entries(self, user_id: int) -> list[DailyEntry]:
        """Return all daily entries for a user ordered by day."""


@dataclass
class TrackingService:
    """Runs one progress evaluation against stored state."""

    profiles: ProfileRepository
    entries: EntryRepository
    progress: ProgressService

    def run(self, user_id: int) -> EvaluationResult:
        """Evaluate progress for a user and save the profile when it changed."""
        profile = self.profiles.get_profile(user_id)
        if profile is None:
            raise DataError(f"No profile found for user {user_id}")
        entries = self.entries.list_entries(user_id)
        result = self.progress.evaluate(profile, entries)
        if result.profile != profile:
            self.profiles.save_profile(user_id, result.profile)
            _logger.info("Saved updated profile for user %s", user_id)
        return result
