"""Statistics for country resolution runs.

Buckets (only for resolved places):

    high    confidence >= 0.9
    medium  0.7 <= confidence < 0.9
    low     0 < confidence < 0.7

Unresolved places go to the unresolved log instead, so that
high + medium + low + len(unresolved) == total_locations at all times.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from placecountry.countries.countryresult import MatchMethod, MatchResult

HIGH_CONFIDENCE = 0.9
MEDIUM_CONFIDENCE = 0.7

BUCKETS = ("high", "medium", "low")


def confidence_bucket(result: MatchResult) -> Optional[str]:
    """Bucket name for a result, None when it is unresolved.

    Examples:
        >>> confidence_bucket(MatchResult("US", 1.0, MatchMethod.EXACT))
        'high'
        >>> confidence_bucket(MatchResult("DE", 0.75, MatchMethod.HISTORICAL))
        'medium'
    """
    if result.iso2 is None or result.confidence <= 0:
        return None
    if result.confidence >= HIGH_CONFIDENCE:
        return "high"
    if result.confidence >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


@dataclass(frozen=True)
class UnresolvedLocation:
    original: str
    individual_id: Optional[str] = None
    event_type: Optional[str] = None
    year: Optional[int] = None

    def to_dict(self) -> dict:
        out = {"original": self.original}
        if self.individual_id is not None:
            out["individualId"] = self.individual_id
        if self.event_type is not None:
            out["eventType"] = self.event_type
        if self.year is not None:
            out["year"] = self.year
        return out


def _zero_methods() -> Dict[str, int]:
    return {m.value: 0 for m in MatchMethod}


def _zero_buckets() -> Dict[str, int]:
    return {b: 0 for b in BUCKETS}


@dataclass
class MatcherStatistics:
    total_locations: int = 0
    matched: Dict[str, int] = field(default_factory=_zero_buckets)
    methods: Dict[str, int] = field(default_factory=_zero_methods)
    unresolved: List[UnresolvedLocation] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Snapshot in the shape consumed by the metadata layer."""
        return {
            "totalLocations": self.total_locations,
            "matched": dict(self.matched),
            "methods": dict(self.methods),
            "unresolved": [u.to_dict() for u in self.unresolved],
        }


class StatisticsAggregator:
    """Thread-safe accumulator of resolution outcomes."""

    def __init__(self):
        self._lock = threading.Lock()
        self._stats = MatcherStatistics()

    def record(
        self,
        original: str,
        result: MatchResult,
        *,
        year: Optional[int] = None,
        individual_id: Optional[str] = None,
        event_type: Optional[str] = None,
    ) -> None:
        bucket = confidence_bucket(result)
        with self._lock:
            self._stats.total_locations += 1
            self._stats.methods[result.method.value] += 1
            if bucket is None:
                self._stats.unresolved.append(UnresolvedLocation(
                    original=original,
                    individual_id=individual_id,
                    event_type=event_type,
                    year=year,
                ))
            else:
                self._stats.matched[bucket] += 1

    def snapshot(self) -> MatcherStatistics:
        with self._lock:
            return copy.deepcopy(self._stats)

    def unresolved(self) -> List[UnresolvedLocation]:
        with self._lock:
            return list(self._stats.unresolved)

    def reset(self) -> None:
        with self._lock:
            self._stats = MatcherStatistics()


__all__ = [
    "HIGH_CONFIDENCE",
    "MEDIUM_CONFIDENCE",
    "confidence_bucket",
    "UnresolvedLocation",
    "MatcherStatistics",
    "StatisticsAggregator",
]
