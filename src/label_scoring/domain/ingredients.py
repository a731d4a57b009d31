"""Ingredient and front-of-pack claim models."""

from dataclasses import dataclass, field
from enum import Enum


class RiskLevel(str, Enum):
    """Dietary concern level for a single ingredient."""

    SAFE = "safe"
    CAUTION = "caution"
    AVOID = "avoid"


class ClaimVerdict(str, Enum):
    """Outcome of checking a marketing claim against the label."""

    VERIFIED = "verified"
    MISLEADING = "misleading"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Ingredient:
    """Single ingredient as read from the label, in label order."""

    original_name: str
    translated_name: str = ""
    description: str = ""
    risk_level: RiskLevel = RiskLevel.SAFE
    banned_in: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MarketingClaim:
    """Front-of-pack claim compared with what the label actually says."""

    claim: str
    reality: str = ""
    verdict: ClaimVerdict = ClaimVerdict.UNKNOWN
