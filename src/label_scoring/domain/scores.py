"""Score models produced by the calculators."""

from dataclasses import dataclass, field
from enum import Enum


class Grade(str, Enum):
    """Five-letter nutritional quality grade."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


@dataclass(frozen=True)
class ScoreAdjustment:
    """A single penalty (negative points) or bonus applied to a score."""

    label: str
    points: float


@dataclass(frozen=True)
class GradeResult:
    """Grade with the point totals it was derived from.

    Exactly one of ``grade`` and ``reason`` is set.
    """

    grade: Grade | None
    reason: str | None = None
    negative_points: int | None = None
    positive_points: int | None = None
    final_score: int | None = None


@dataclass(frozen=True)
class HealthScoreResult:
    """Health score in [0, 100] and the adjustments that produced it."""

    score: int
    adjustments: list[ScoreAdjustment] = field(default_factory=list)


@dataclass(frozen=True)
class ScoreResult:
    """Combined grade and health score for a product."""

    grade: Grade | None
    health_score: int
    grade_reason: str | None = None
    breakdown: list[ScoreAdjustment] = field(default_factory=list)
