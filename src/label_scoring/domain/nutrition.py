"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient levels per 100 g (or 100 ml) of product."""

    energy_kj: float = 0.0
    sugar_g: float = 0.0
    saturated_fat_g: float = 0.0
    sodium_mg: float = 0.0
    fiber_g: float = 0.0
    protein_g: float = 0.0
    fruit_veg_nut_percent: float = 0.0


@dataclass(frozen=True)
class ServingMacros:
    """Macronutrients for a single serving."""

    carbs_g: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
