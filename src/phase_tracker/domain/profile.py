"""User profile domain models."""

from dataclasses import dataclass
from enum import Enum

from phase_tracker.domain.macros import MacroProfile
from phase_tracker.domain.phases import PhaseRecord


class Sex(Enum):
    """Sex used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level used to scale BMR into TDEE."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY = "very"


class MeasurementSystem(Enum):
    """Unit system the user enters measurements in."""

    IMPERIAL = "imperial"
    METRIC = "metric"


@dataclass(frozen=True)
class UserProfile:
    """Snapshot of the user's body metrics, targets and current phase.

    Weight is stored in pounds and height in inches regardless of the
    measurement system the user prefers for display.
    """

    sex: Sex
    weight: float
    height: float
    age: int
    activity_level: ActivityLevel
    tdee: float
    macros: MacroProfile
    phase: PhaseRecord
    system: MeasurementSystem = MeasurementSystem.IMPERIAL
