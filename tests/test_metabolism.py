"""Tests for metabolism calculations."""

import pytest

from phase_tracker.domain.profile import ActivityLevel, Sex
from phase_tracker.services.metabolism import (
    cm_to_inches,
    estimate_tdee,
    inches_to_cm,
    kg_to_lbs,
    lbs_to_kg,
    mifflin_st_jeor,
    total_daily_energy_expenditure,
)


def test_mifflin_male() -> None:
    assert mifflin_st_jeor(180, 65, 30, Sex.MALE) == pytest.approx(1703.34, abs=0.01)


def test_mifflin_female() -> None:
    assert mifflin_st_jeor(180, 65, 30, Sex.FEMALE) == pytest.approx(1537.34, abs=0.01)


def test_tdee_applies_activity_multiplier() -> None:
    active = total_daily_energy_expenditure(1780, ActivityLevel.ACTIVE)
    sedentary = total_daily_energy_expenditure(1000, ActivityLevel.SEDENTARY)
    assert active == pytest.approx(3070.5)
    assert sedentary == pytest.approx(1200)


def test_unit_conversions_roundtrip() -> None:
    assert lbs_to_kg(100) == pytest.approx(45.359237)
    assert kg_to_lbs(lbs_to_kg(180)) == pytest.approx(180)
    assert inches_to_cm(70) == pytest.approx(177.8)
    assert cm_to_inches(177.8) == pytest.approx(70)


def test_estimate_tdee_from_body_metrics() -> None:
    tdee = estimate_tdee(Sex.MALE, 180, 70, 30, ActivityLevel.MODERATE)

    assert tdee == 2763.21
