"""Row models for Supabase tables."""

from datetime import date

from pydantic import BaseModel, Field, model_validator

from phase_tracker.domain.entries import DailyEntry
from phase_tracker.domain.macros import MacroProfile
from phase_tracker.domain.phases import PhaseKind, PhaseRecord, PhaseStatus
from phase_tracker.domain.profile import ActivityLevel, MeasurementSystem, Sex


class ProfileRow(BaseModel):
    """Body metrics stored in the ``profiles`` table.

    ``tdee`` may be left empty; it is then estimated from the body metrics.
    """

    sex: Sex
    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    age: int = Field(gt=0)
    activity_level: ActivityLevel
    tdee: float | None = Field(default=None, gt=0)
    system: MeasurementSystem = MeasurementSystem.IMPERIAL


class MacrosRow(BaseModel):
    """Macro targets and bounds stored in the ``macros`` table."""

    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    min_protein_g: float = Field(ge=0)
    max_protein_g: float = Field(ge=0)
    min_carbs_g: float = Field(ge=0)
    max_carbs_g: float = Field(ge=0)
    min_fat_g: float = Field(ge=0)
    max_fat_g: float = Field(ge=0)

    def to_domain(self) -> MacroProfile:
        return MacroProfile(**self.model_dump())

    @classmethod
    def from_domain(cls, macros: MacroProfile) -> "MacrosRow":
        return cls(**vars(macros))


class PhaseRow(BaseModel):
    """Current phase stored in the ``phase_info`` table."""

    kind: PhaseKind
    status: PhaseStatus
    start_date: date
    end_date: date
    last_checked_date: date
    start_weight: float = Field(gt=0)
    goal_weight: float = Field(gt=0)
    weekly_change: float
    goal_calories: float = Field(gt=0)
    duration: float = Field(ge=0)
    min_duration: float = Field(ge=0)
    max_duration: float | None = None

    @model_validator(mode="after")
    def _check_dates(self) -> "PhaseRow":
        if self.end_date < self.start_date:
            raise ValueError("end_date precedes start_date")
        if self.last_checked_date < self.start_date:
            raise ValueError("last_checked_date precedes start_date")
        return self

    def to_domain(self) -> PhaseRecord:
        return PhaseRecord(**dict(self))

    @classmethod
    def from_domain(cls, phase: PhaseRecord) -> "PhaseRow":
        return cls(**vars(phase))


class EntryRow(BaseModel):
    """Aggregated day stored in the ``daily_entries`` view."""

    day: date
    bodyweight: float = Field(gt=0)
    calories: float = Field(default=0.0, ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)

    def to_domain(self) -> DailyEntry:
        return DailyEntry(**self.model_dump())
