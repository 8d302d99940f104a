"""Energy expenditure and unit conversions."""

from phase_tracker.domain.profile import ActivityLevel, Sex

KG_PER_LB = 0.45359237
CM_PER_INCH = 2.54

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY: 1.9,
}


def lbs_to_kg(pounds: float) -> float:
    return pounds * KG_PER_LB


def kg_to_lbs(kilograms: float) -> float:
    return kilograms / KG_PER_LB


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def cm_to_inches(centimeters: float) -> float:
    return centimeters / CM_PER_INCH


def mifflin_st_jeor(weight_lbs: float, height_in: float, age: int, sex: Sex) -> float:
    """Return basal metabolic rate in kcal/day."""
    base = 10 * lbs_to_kg(weight_lbs) + 6.25 * inches_to_cm(height_in) - 5 * age
    if sex is Sex.FEMALE:
        return base - 161
    return base + 5


def total_daily_energy_expenditure(bmr: float, activity_level: ActivityLevel) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def estimate_tdee(
    sex: Sex, weight_lbs: float, height_in: float, age: int, activity: ActivityLevel
) -> float:
    """Estimate TDEE from body metrics, rounded to two decimals."""
    bmr = mifflin_st_jeor(weight_lbs, height_in, age, sex)
    return round(total_daily_energy_expenditure(bmr, activity), 2)
