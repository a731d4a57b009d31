"""Scoring pipeline: sanitize an extraction record, score it, build the result."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from label_scoring.domain.analysis import AnalysisRecord, TeaspoonSource
from label_scoring.domain.extraction import (
    ExtractedClaim,
    ExtractedIngredient,
    ExtractedMacros,
    ExtractedNutrition,
    ExtractionRecord,
)
from label_scoring.domain.ingredients import (
    ClaimVerdict,
    Ingredient,
    MarketingClaim,
    RiskLevel,
)
from label_scoring.domain.nutrition import NutrientProfile, ServingMacros
from label_scoring.domain.scores import GradeResult, ScoreResult
from label_scoring.services.grading import MISSING_PROFILE_REASON, GradeCalculator
from label_scoring.services.health_score import HealthScoreCalculator

SUGAR_GRAMS_PER_TEASPOON = 4.2
TEASPOON_MISMATCH_TOLERANCE = 0.1

_logger = logging.getLogger(__name__)


@dataclass
class ScoringPipeline:
    """Turn a raw extraction record into a fully populated analysis record."""

    grade_calculator: GradeCalculator = field(default_factory=GradeCalculator)
    health_score_calculator: HealthScoreCalculator = field(
        default_factory=HealthScoreCalculator
    )
    teaspoon_grams: float = SUGAR_GRAMS_PER_TEASPOON

    def run(self, raw: ExtractionRecord | Mapping[str, object]) -> AnalysisRecord:
        """Score one extraction record.

        Missing collections become empty before any calculator runs. The
        grade is only computed when a per-100g panel was extracted.
        """
        record = (
            raw
            if isinstance(raw, ExtractionRecord)
            else ExtractionRecord.model_validate(raw)
        )
        ingredients = [_to_ingredient(item) for item in record.ingredients or []]
        claims = [_to_claim(item) for item in record.claims or []]
        macros = _to_macros(record.macros)
        sugar_g = record.sugar_per_serving_grams or 0.0
        profile = (
            _to_profile(record.nutrition_per_100g)
            if record.nutrition_per_100g is not None
            else None
        )

        if profile is not None:
            grade_result = self.grade_calculator.calculate(profile)
        else:
            grade_result = GradeResult(grade=None, reason=MISSING_PROFILE_REASON)
        health = self.health_score_calculator.calculate(sugar_g, ingredients, macros)
        teaspoons, source = self._sugar_teaspoons(sugar_g, record.sugar_teaspoons)

        if not ingredients:
            _logger.info("No ingredients extracted; health score may be unreliable")
        _logger.debug(
            "Scored record: grade=%s health_score=%s teaspoons_source=%s",
            grade_result.grade.value if grade_result.grade else None,
            health.score,
            source.value,
        )

        return AnalysisRecord(
            product_name=record.product_name or "",
            serving_size=record.serving_size or "",
            sugar_per_serving_g=sugar_g,
            sugar_teaspoons=teaspoons,
            sugar_teaspoons_source=source,
            macros=macros,
            scores=ScoreResult(
                grade=grade_result.grade,
                grade_reason=grade_result.reason,
                health_score=health.score,
                breakdown=list(health.adjustments),
            ),
            ingredients=ingredients,
            claims=claims,
            summary=record.summary or "",
            nutrition_per_100g=profile,
        )

    def _sugar_teaspoons(
        self, sugar_g: float, extracted: float | None
    ) -> tuple[float, TeaspoonSource]:
        """Prefer the extracted teaspoon value, else derive it from grams."""
        derived = sugar_g / self.teaspoon_grams
        if extracted is None:
            return derived, TeaspoonSource.DERIVED
        if abs(extracted - derived) > TEASPOON_MISMATCH_TOLERANCE:
            _logger.warning(
                "Extracted sugar teaspoons disagree with grams: "
                "extracted=%s derived=%.2f",
                extracted,
                derived,
            )
        return extracted, TeaspoonSource.EXTRACTED


def _to_profile(nutrition: ExtractedNutrition) -> NutrientProfile:
    """Build a profile, treating absent fields as zero."""
    return NutrientProfile(
        energy_kj=nutrition.energy_kj or 0.0,
        sugar_g=nutrition.sugar_grams or 0.0,
        saturated_fat_g=nutrition.sat_fat_grams or 0.0,
        sodium_mg=nutrition.sodium_mg or 0.0,
        fiber_g=nutrition.fiber_grams or 0.0,
        protein_g=nutrition.protein_grams or 0.0,
        fruit_veg_nut_percent=nutrition.fruit_veg_percent or 0.0,
    )


def _to_macros(macros: ExtractedMacros | None) -> ServingMacros:
    if macros is None:
        return ServingMacros()
    return ServingMacros(
        carbs_g=macros.carbs or 0.0,
        protein_g=macros.protein or 0.0,
        fat_g=macros.fat or 0.0,
    )


def _to_ingredient(item: ExtractedIngredient) -> Ingredient:
    original_name = item.original_name or ""
    return Ingredient(
        original_name=original_name,
        translated_name=item.translated_name or original_name,
        description=item.description or "",
        risk_level=item.risk_level or RiskLevel.SAFE,
        banned_in=list(item.banned_in or []),
    )


def _to_claim(item: ExtractedClaim) -> MarketingClaim:
    return MarketingClaim(
        claim=item.claim or "",
        reality=item.reality or "",
        verdict=item.verdict or ClaimVerdict.UNKNOWN,
    )
