"""Models for the raw, possibly partial, label extraction record."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from label_scoring.domain.ingredients import ClaimVerdict, RiskLevel


class Language(str, Enum):
    """Output language requested for translated ingredient names."""

    ENGLISH = "English"
    HINDI = "Hindi"
    TAMIL = "Tamil"
    TELUGU = "Telugu"
    KANNADA = "Kannada"
    MALAYALAM = "Malayalam"
    BENGALI = "Bengali"
    MARATHI = "Marathi"
    GUJARATI = "Gujarati"


class _ExtractionModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ExtractedMacros(_ExtractionModel):
    """Per-serving macros as read from the label."""

    carbs: float | None = None
    protein: float | None = None
    fat: float | None = None


class ExtractedNutrition(_ExtractionModel):
    """Per-100g nutrition panel as read from the label."""

    energy_kj: float | None = Field(default=None, alias="energyKJ")
    sugar_grams: float | None = None
    sat_fat_grams: float | None = None
    sodium_mg: float | None = None
    fiber_grams: float | None = None
    protein_grams: float | None = None
    fruit_veg_percent: float | None = None


class ExtractedIngredient(_ExtractionModel):
    """Ingredient entry from the extraction service."""

    original_name: str | None = None
    translated_name: str | None = None
    description: str | None = None
    risk_level: RiskLevel | None = None
    banned_in: list[str] | None = None

    @field_validator("risk_level", mode="before")
    @classmethod
    def _lower_risk_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ExtractedClaim(_ExtractionModel):
    """Marketing claim entry from the extraction service."""

    claim: str | None = None
    reality: str | None = None
    verdict: ClaimVerdict | None = None

    @field_validator("verdict", mode="before")
    @classmethod
    def _lower_verdict(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ExtractionRecord(_ExtractionModel):
    """Structured output of the label extraction service.

    Every field may be missing. Scores the extraction model may have guessed
    on its own are ignored.
    """

    product_name: str | None = None
    serving_size: str | None = None
    sugar_per_serving_grams: float | None = None
    sugar_teaspoons: float | None = None
    summary: str | None = None
    macros: ExtractedMacros | None = None
    nutrition_per_100g: ExtractedNutrition | None = Field(
        default=None, alias="nutritionPer100g"
    )
    ingredients: list[ExtractedIngredient] | None = None
    claims: list[ExtractedClaim] | None = None
