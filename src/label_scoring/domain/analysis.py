"""Final analysis record returned to callers."""

from dataclasses import dataclass, field
from enum import Enum

from label_scoring.domain.ingredients import Ingredient, MarketingClaim
from label_scoring.domain.nutrition import NutrientProfile, ServingMacros
from label_scoring.domain.scores import ScoreResult


class TeaspoonSource(str, Enum):
    """Where the sugar teaspoon figure came from."""

    EXTRACTED = "extracted"
    DERIVED = "derived"


@dataclass(frozen=True)
class AnalysisRecord:
    """Fully populated result of scoring one extraction record."""

    product_name: str
    serving_size: str
    sugar_per_serving_g: float
    sugar_teaspoons: float
    sugar_teaspoons_source: TeaspoonSource
    macros: ServingMacros
    scores: ScoreResult
    ingredients: list[Ingredient] = field(default_factory=list)
    claims: list[MarketingClaim] = field(default_factory=list)
    summary: str = ""
    nutrition_per_100g: NutrientProfile | None = None
