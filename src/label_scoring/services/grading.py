"""Nutri-Score style A-E grading from per-100g nutrient levels.

Score = negative points (energy, sugar, saturated fat, sodium, 0-10 each)
minus positive points (fruit/veg/nut share, fiber, protein, 0-5 each).
Every table uses exclusive lower bounds: a value exactly on a threshold
stays in the lower bucket.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from label_scoring.domain.nutrition import NutrientProfile
from label_scoring.domain.scores import Grade, GradeResult

_logger = logging.getLogger(__name__)

# (threshold, points) pairs in ascending order.
PointsTable = Sequence[tuple[float, int]]


def _linear_table(thresholds: Sequence[float]) -> PointsTable:
    return tuple((threshold, index + 1) for index, threshold in enumerate(thresholds))


ENERGY_KJ_TABLE = _linear_table(
    (335, 670, 1005, 1340, 1675, 2010, 2345, 2680, 3015, 3350)
)
SUGAR_G_TABLE = _linear_table((4.5, 9, 13.5, 18, 22.5, 27, 31, 36, 40, 45))
SATURATED_FAT_G_TABLE = _linear_table((1, 2, 3, 4, 5, 6, 7, 8, 9, 10))
SODIUM_MG_TABLE = _linear_table((90, 180, 270, 360, 450, 540, 630, 720, 810, 900))

FIBER_G_TABLE = _linear_table((0.9, 1.9, 2.8, 3.7, 4.7))
PROTEIN_G_TABLE = _linear_table((1.6, 3.2, 4.8, 6.4, 8.0))
FRUIT_VEG_NUT_TABLE: PointsTable = ((40, 1), (60, 2), (80, 5))

MAX_FRUIT_VEG_NUT_POINTS = 5
PROTEIN_EXCLUSION_THRESHOLD = 11

MISSING_PROFILE_REASON = "Nutrition information per 100g was not found on the label."

# Upper score bound (inclusive) for each grade, best first.
_GRADE_CUTOFFS: tuple[tuple[int, Grade], ...] = (
    (-1, Grade.A),
    (2, Grade.B),
    (10, Grade.C),
    (18, Grade.D),
)


def points_for(value: float, table: PointsTable) -> int:
    """Return the points of the highest bucket whose threshold ``value`` exceeds."""
    for threshold, points in reversed(table):
        if value > threshold:
            return points
    return 0


@dataclass(frozen=True)
class PositivePoints:
    """Positive point contributions kept apart for the protein rule."""

    fruit_veg_nut: int
    fiber: int
    protein: int


def negative_points(profile: NutrientProfile) -> int:
    """Sum energy, sugar, saturated fat and sodium points."""
    return (
        points_for(profile.energy_kj, ENERGY_KJ_TABLE)
        + points_for(profile.sugar_g, SUGAR_G_TABLE)
        + points_for(profile.saturated_fat_g, SATURATED_FAT_G_TABLE)
        + points_for(profile.sodium_mg, SODIUM_MG_TABLE)
    )


def positive_points(profile: NutrientProfile) -> PositivePoints:
    """Score fruit/veg/nut share, fiber and protein separately."""
    return PositivePoints(
        fruit_veg_nut=points_for(profile.fruit_veg_nut_percent, FRUIT_VEG_NUT_TABLE),
        fiber=points_for(profile.fiber_g, FIBER_G_TABLE),
        protein=points_for(profile.protein_g, PROTEIN_G_TABLE),
    )


def counted_positive_points(negative: int, positive: PositivePoints) -> int:
    """Apply the protein exclusion rule and total the positive points.

    Protein does not count once negative points reach 11, unless the
    fruit/veg/nut component already scored its maximum.
    """
    total = positive.fruit_veg_nut + positive.fiber
    if (
        negative >= PROTEIN_EXCLUSION_THRESHOLD
        and positive.fruit_veg_nut < MAX_FRUIT_VEG_NUT_POINTS
    ):
        return total
    return total + positive.protein


def grade_for_score(score: int) -> Grade:
    """Map a final N - P score to its letter."""
    for upper_bound, grade in _GRADE_CUTOFFS:
        if score <= upper_bound:
            return grade
    return Grade.E


@dataclass
class GradeCalculator:
    """Compute the A-E grade for a per-100g nutrient profile."""

    def calculate(self, profile: NutrientProfile | None) -> GradeResult:
        """Grade a profile, or explain why no grade can be given."""
        if profile is None:
            return GradeResult(grade=None, reason=MISSING_PROFILE_REASON)

        negative = negative_points(profile)
        positive = counted_positive_points(negative, positive_points(profile))
        final_score = negative - positive
        grade = grade_for_score(final_score)
        _logger.debug(
            "Graded profile: negative=%s positive=%s score=%s grade=%s",
            negative,
            positive,
            final_score,
            grade.value,
        )
        return GradeResult(
            grade=grade,
            negative_points=negative,
            positive_points=positive,
            final_score=final_score,
        )
