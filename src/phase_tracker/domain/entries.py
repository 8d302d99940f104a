"""Domain models for daily log entries."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyEntry:
    """Bodyweight and macro totals logged for one calendar day."""

    day: date
    bodyweight: float
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
