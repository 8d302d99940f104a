"""Macronutrient domain models."""

from dataclasses import dataclass
from enum import Enum


class Macro(Enum):
    """Macronutrient tracked in a daily target."""

    PROTEIN = "protein"
    CARBS = "carbs"
    FAT = "fat"

    @property
    def calories_per_gram(self) -> float:
        """Energy density in kcal per gram."""
        return _CALORIES_PER_GRAM[self]


_CALORIES_PER_GRAM = {
    Macro.PROTEIN: 4.0,
    Macro.CARBS: 4.0,
    Macro.FAT: 9.0,
}


@dataclass(frozen=True)
class MacroProfile:
    """Daily macro targets in grams with their allowed ranges."""

    protein_g: float
    carbs_g: float
    fat_g: float
    min_protein_g: float
    max_protein_g: float
    min_carbs_g: float
    max_carbs_g: float
    min_fat_g: float
    max_fat_g: float

    def grams(self, macro: Macro) -> float:
        """Return the target grams for a macro."""
        return getattr(self, f"{macro.value}_g")

    def minimum(self, macro: Macro) -> float:
        """Return the lower bound in grams for a macro."""
        return getattr(self, f"min_{macro.value}_g")

    def maximum(self, macro: Macro) -> float:
        """Return the upper bound in grams for a macro."""
        return getattr(self, f"max_{macro.value}_g")

    @property
    def calories(self) -> float:
        """Total calories provided by the target grams."""
        return sum(self.grams(macro) * macro.calories_per_gram for macro in Macro)
