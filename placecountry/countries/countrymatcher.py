"""
Country Resolution Pipeline
---------------------------

CountryMatcher runs the tier matchers in fixed priority order against one
immutable Catalog and keeps per-instance statistics:

  exact -> alias -> pattern -> region -> historical -> fuzzy -> none

Examples:
  >>> matcher = CountryMatcher(build_catalog())
  >>> matcher.match_country("USA").method
  <MatchMethod.EXACT: 'exact'>
  >>> matcher.match_country("Paris, France").iso2
  'FR'
  >>> matcher.match_country("East Germany", 1975).confidence
  0.75
"""

from __future__ import annotations

import logging
from functools import partial
from typing import List, Optional

from placecountry.countries.countrycatalog import Catalog
from placecountry.countries.countrynormalize import normalize_place
from placecountry.countries.countryresult import NO_MATCH, MatchResult, PlaceWithCountry
from placecountry.countries.countrystats import (
    MatcherStatistics,
    StatisticsAggregator,
    UnresolvedLocation,
)
from placecountry.countries.countrytiers import (
    MAX_WINDOW,
    Tier,
    alias_tier,
    exact_tier,
    fuzzy_tier,
    historical_tier,
    pattern_tier,
    region_tier,
)

logger = logging.getLogger(__name__)


class CountryMatcher:
    """Resolve place strings to ISO2 country codes.

    Matching reads only the catalog and is safe to call from many threads.
    process_place() also updates this instance's statistics under a lock.

    Args:
        catalog: Catalog to match against; defaults to the packaged catalog
        fuzzy: Enable the edit-distance fallback (default True)
        max_alternatives: Runner-up fuzzy candidates to report (default 3)
        max_window: Largest word window tried inside a segment (default 4)
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        *,
        fuzzy: bool = True,
        max_alternatives: int = 3,
        max_window: int = MAX_WINDOW,
    ):
        if catalog is None:
            # Import here to avoid circular dependency
            from placecountry.countries.countryapi import load_catalog
            catalog = load_catalog()

        self.catalog = catalog
        self._tiers: List[Tier] = [
            exact_tier,
            alias_tier,
            partial(pattern_tier, max_window=max_window),
            partial(region_tier, max_window=max_window),
            partial(historical_tier, max_window=max_window),
        ]
        if fuzzy:
            self._tiers.append(partial(fuzzy_tier, max_alternatives=max_alternatives))

        self._stats = StatisticsAggregator()

    def match_country(self, raw: Optional[str], year: Optional[int] = None) -> MatchResult:
        """Resolve one place string.

        Args:
            raw: Place text, e.g. "Dallas, Texas, USA" or "Born in Texas"
            year: Event year, needed for historical names ("East Germany", 1975)

        Returns:
            First tier result, or NO_MATCH. Never raises for string input.
        """
        normalized = normalize_place(raw)
        if normalized.is_empty:
            return NO_MATCH

        for tier in self._tiers:
            result = tier(normalized, year, self.catalog)
            if result is not None:
                return result

        return NO_MATCH

    def process_place(
        self,
        raw: Optional[str],
        year: Optional[int] = None,
        individual_id: Optional[str] = None,
        event_type: Optional[str] = None,
    ) -> PlaceWithCountry:
        """Resolve a record's place and record the outcome in the statistics.

        Args:
            raw: Place text from the record
            year: Event year, if known
            individual_id: Record identifier, kept for the unresolved log
            event_type: e.g. "birth", "death", kept for the unresolved log
        """
        result = self.match_country(raw, year)
        original = "" if raw is None else str(raw)

        self._stats.record(
            original,
            result,
            year=year,
            individual_id=individual_id,
            event_type=event_type,
        )

        if result.iso2 is None:
            logger.debug(f"Unresolved place {original!r} (individual={individual_id}, event={event_type})")
            return PlaceWithCountry(original=original, individual_id=individual_id, event_type=event_type)

        return PlaceWithCountry(
            original=original,
            individual_id=individual_id,
            event_type=event_type,
            country=result,
        )

    def get_statistics(self) -> MatcherStatistics:
        """Copy of the statistics accumulated since construction or last reset."""
        return self._stats.snapshot()

    def get_unresolved_locations(self) -> List[UnresolvedLocation]:
        """Unresolved places in call order."""
        return self._stats.unresolved()

    def reset_statistics(self) -> None:
        """Zero all counters and clear the unresolved log."""
        self._stats.reset()


__all__ = [
    "CountryMatcher",
]
