"""Result types for country resolution.

Confidence ladder (one value per tier, fuzzy is variable):

    exact       1.00   ISO2/ISO3 code
    alias       0.95   canonical name or alias
    pattern     0.90   "City, State, Country" hierarchy
    region      0.85   state / province / county
    historical  0.75   defunct state, year inside its window
    fuzzy       0.30 - 0.89
    none        0.00
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MatchMethod(str, Enum):
    """Strategy that produced a match; NONE means nothing matched."""

    EXACT = "exact"
    ALIAS = "alias"
    PATTERN = "pattern"
    REGION = "region"
    HISTORICAL = "historical"
    FUZZY = "fuzzy"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


EXACT_CONFIDENCE = 1.0
ALIAS_CONFIDENCE = 0.95
PATTERN_CONFIDENCE = 0.90
REGION_CONFIDENCE = 0.85
HISTORICAL_CONFIDENCE = 0.75

# Fuzzy scores always stay inside [FUZZY_FLOOR, FUZZY_CEILING]
FUZZY_FLOOR = 0.30
FUZZY_CEILING = 0.89


@dataclass(frozen=True)
class Alternative:
    """Runner-up fuzzy candidate."""

    iso2: str
    confidence: float
    reason: str

    def to_dict(self) -> dict:
        return {"iso2": self.iso2, "confidence": self.confidence, "reason": self.reason}


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one resolution attempt.

    Attributes:
        iso2: ISO 3166-1 alpha-2 code, None when no tier matched
        confidence: 0.0 - 1.0, see the ladder above
        method: Tier that produced the match
        matched_on: Code, alias, segment or window that triggered the match
        alternatives: Other fuzzy candidates, best first
        historical_year: Year that validated a historical match
    """

    iso2: Optional[str]
    confidence: float
    method: MatchMethod
    matched_on: Optional[str] = None
    alternatives: tuple[Alternative, ...] = field(default_factory=tuple)
    historical_year: Optional[int] = None

    @property
    def matched(self) -> bool:
        return self.iso2 is not None

    def to_dict(self) -> dict:
        """Plain dict for JSON output."""
        out = {
            "iso2": self.iso2,
            "confidence": self.confidence,
            "method": self.method.value,
            "matchedOn": self.matched_on,
        }
        if self.alternatives:
            out["alternatives"] = [a.to_dict() for a in self.alternatives]
        if self.historical_year is not None:
            out["historicalYear"] = self.historical_year
        return out


NO_MATCH = MatchResult(iso2=None, confidence=0.0, method=MatchMethod.NONE)


@dataclass(frozen=True)
class PlaceWithCountry:
    """A record's place string with its resolved country (None if unresolved)."""

    original: str
    individual_id: Optional[str] = None
    event_type: Optional[str] = None
    country: Optional[MatchResult] = None

    def to_dict(self) -> dict:
        out = {"original": self.original}
        if self.individual_id is not None:
            out["individualId"] = self.individual_id
        if self.event_type is not None:
            out["eventType"] = self.event_type
        if self.country is not None:
            out["country"] = self.country.to_dict()
        return out


__all__ = [
    "MatchMethod",
    "Alternative",
    "MatchResult",
    "PlaceWithCountry",
    "NO_MATCH",
    "EXACT_CONFIDENCE",
    "ALIAS_CONFIDENCE",
    "PATTERN_CONFIDENCE",
    "REGION_CONFIDENCE",
    "HISTORICAL_CONFIDENCE",
    "FUZZY_FLOOR",
    "FUZZY_CEILING",
]
