"""Proprietary 0-100 health score from serving sugar, ingredients and macros."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from label_scoring.domain.ingredients import Ingredient, RiskLevel
from label_scoring.domain.nutrition import ServingMacros
from label_scoring.domain.scores import HealthScoreResult, ScoreAdjustment

_logger = logging.getLogger(__name__)

BASE_SCORE = 100.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0

SUGAR_PENALTY_PER_GRAM = 3.5
PRIMARY_INGREDIENT_PENALTY = 30.0
AVOID_INGREDIENT_PENALTY = 20.0
PROCESSING_PENALTY = 10.0
MAX_INGREDIENTS_BEFORE_PENALTY = 10
PROTEIN_BONUS = 5.0
PROTEIN_BONUS_MIN_G = 5.0

HIGH_RISK_PRIMARY_INGREDIENTS = (
    "sugar",
    "syrup",
    "glucose",
    "maida",
    "refined wheat flour",
    "palm oil",
    "invert sugar",
    "maltodextrin",
)


def is_high_risk_primary(ingredient: Ingredient) -> bool:
    """Return True if the ingredient name contains a high-risk lead ingredient."""
    name = ingredient.original_name.lower()
    return any(marker in name for marker in HIGH_RISK_PRIMARY_INGREDIENTS)


@dataclass
class HealthScoreCalculator:
    """Apply the additive penalty/bonus rubric and clamp to [0, 100]."""

    def calculate(
        self,
        sugar_g_per_serving: float,
        ingredients: Sequence[Ingredient],
        macros: ServingMacros,
    ) -> HealthScoreResult:
        """Score a product. An empty ingredient list skips ingredient rules."""
        adjustments: list[ScoreAdjustment] = []

        sugar_penalty = sugar_g_per_serving * SUGAR_PENALTY_PER_GRAM
        if sugar_penalty:
            adjustments.append(ScoreAdjustment("sugar per serving", -sugar_penalty))

        if ingredients:
            if is_high_risk_primary(ingredients[0]):
                adjustments.append(
                    ScoreAdjustment(
                        "unhealthy primary ingredient", -PRIMARY_INGREDIENT_PENALTY
                    )
                )
            avoid_count = sum(
                1
                for ingredient in ingredients
                if ingredient.risk_level is RiskLevel.AVOID
            )
            if avoid_count:
                adjustments.append(
                    ScoreAdjustment(
                        f"{avoid_count} ingredient(s) to avoid",
                        -AVOID_INGREDIENT_PENALTY * avoid_count,
                    )
                )
            if len(ingredients) > MAX_INGREDIENTS_BEFORE_PENALTY:
                adjustments.append(
                    ScoreAdjustment("highly processed", -PROCESSING_PENALTY)
                )

        if macros.protein_g > PROTEIN_BONUS_MIN_G:
            adjustments.append(ScoreAdjustment("high protein", PROTEIN_BONUS))

        total = BASE_SCORE + sum(adjustment.points for adjustment in adjustments)
        score = _clamp_and_round(total)
        _logger.debug("Health score: raw=%s score=%s", total, score)
        return HealthScoreResult(score=score, adjustments=adjustments)


def _clamp_and_round(total: float) -> int:
    """Clamp to the score range, then round half up."""
    if math.isnan(total):
        return int(MIN_SCORE)
    clamped = max(MIN_SCORE, min(MAX_SCORE, total))
    return math.floor(clamped + 0.5)
