"""
Tier Matchers
-------------

Six independent strategies, each a pure function

    tier(normalized, year, catalog) -> MatchResult | None

tried by the resolution pipeline in this order:

  1) exact       ISO2/ISO3 code                        1.00
  2) alias       canonical name or alias, whole input  0.95
  3) pattern     last level or trailing country name   0.90
  4) region      state/province anywhere in the input  0.85
  5) historical  defunct state with year in window     0.75
  6) fuzzy       Levenshtein over names and aliases    0.30 - 0.89

Fuzzy scoring uses RapidFuzz; raw similarity is 1 - distance / max(len).
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

try:
    from rapidfuzz import process
    from rapidfuzz.distance import Levenshtein
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e

from placecountry.countries.countrycatalog import Catalog
from placecountry.countries.countrynormalize import NormalizedInput, token_windows
from placecountry.countries.countryresult import (
    ALIAS_CONFIDENCE,
    EXACT_CONFIDENCE,
    FUZZY_CEILING,
    FUZZY_FLOOR,
    HISTORICAL_CONFIDENCE,
    PATTERN_CONFIDENCE,
    REGION_CONFIDENCE,
    Alternative,
    MatchMethod,
    MatchResult,
)

Tier = Callable[[NormalizedInput, Optional[int], Catalog], Optional[MatchResult]]

MAX_WINDOW = 4

# Raw similarity that maps onto FUZZY_FLOOR; 1.0 maps onto FUZZY_CEILING
FUZZY_RAW_FLOOR = 0.6


# ---- Shared lookups ----
def _code_or_name(text: str, key: str, catalog: Catalog) -> Optional[Tuple[str, str]]:
    """(iso2, matched text) for an exact code or alias hit on one string."""
    iso2 = catalog.lookup_code(key)
    if iso2:
        return iso2, text
    hit = catalog.lookup_name(key)
    if hit:
        return hit[0], text
    return None


def exact_tier(normalized: NormalizedInput, year: Optional[int], catalog: Catalog) -> Optional[MatchResult]:
    iso2 = catalog.lookup_code(normalized.key)
    if iso2 is None:
        return None
    return MatchResult(iso2=iso2, confidence=EXACT_CONFIDENCE, method=MatchMethod.EXACT, matched_on=iso2)


def alias_tier(normalized: NormalizedInput, year: Optional[int], catalog: Catalog) -> Optional[MatchResult]:
    hit = catalog.lookup_name(normalized.key)
    if hit is None:
        return None
    return MatchResult(
        iso2=hit[0],
        confidence=ALIAS_CONFIDENCE,
        method=MatchMethod.ALIAS,
        matched_on=normalized.original,
    )


def pattern_tier(
    normalized: NormalizedInput,
    year: Optional[int],
    catalog: Catalog,
    *,
    max_window: int = MAX_WINDOW,
) -> Optional[MatchResult]:
    """Resolve the broadest level of a "City[, State][, Country]" string.

    Candidates, first hit wins:
      1. last segment as a code or alias ("Paris, France")
      2. last two segments joined ("Seoul, Korea, Republic of")
      3. trailing word windows of the last segment ("Born in France",
         "..., in the United States")

    The first two need at least two segments; a lone segment was already
    tried whole by the exact and alias tiers. Windows are checked against
    names only, so a short trailing word ("Kings Co") is never read as a code.

    Windowing stops at a window that is a known region or historical name so
    that "New Mexico" never resolves through its last word and "East Germany"
    is left to the historical tier.
    """
    segments = normalized.segments
    if not segments:
        return None

    last = segments[-1]
    if len(segments) >= 2:
        prev = segments[-2]
        candidates: List[Tuple[str, str]] = [
            (last.text, last.key),
            (f"{prev.text}, {last.text}", f"{prev.key}, {last.key}"),
        ]
        for text, key in candidates:
            hit = _code_or_name(text, key, catalog)
            if hit:
                return _pattern_result(*hit)

    for text, key, _, _ in token_windows(last.tokens, max_size=max_window, trailing=True):
        if catalog.lookup_region(key) or catalog.lookup_historical(key):
            return None
        hit = catalog.lookup_name(key)
        if hit:
            return _pattern_result(hit[0], text)

    return None


def _pattern_result(iso2: str, matched_on: str) -> MatchResult:
    return MatchResult(iso2=iso2, confidence=PATTERN_CONFIDENCE, method=MatchMethod.PATTERN, matched_on=matched_on)


def _region_candidates(
    normalized: NormalizedInput,
    catalog: Catalog,
    max_window: int,
) -> Iterator[Tuple[str, str]]:
    yield normalized.original, normalized.key
    for segment in reversed(normalized.segments):
        yield segment.text, segment.key
        # Words inside a longer country name ("New Zealand") are not offered
        # again on their own ("Zealand")
        covered: List[Tuple[int, int]] = []
        for text, key, start, stop in token_windows(segment.tokens, max_size=max_window):
            if any(lo <= start and stop <= hi for lo, hi in covered):
                continue
            if catalog.lookup_name(key):
                covered.append((start, stop))
                continue
            yield text, key


def region_tier(
    normalized: NormalizedInput,
    year: Optional[int],
    catalog: Catalog,
    *,
    max_window: int = MAX_WINDOW,
) -> Optional[MatchResult]:
    """Find a state/province/county name anywhere in the input."""
    seen = set()
    for text, key in _region_candidates(normalized, catalog, max_window):
        if key in seen:
            continue
        seen.add(key)
        hit = catalog.lookup_region(key)
        if hit:
            return MatchResult(
                iso2=hit[0],
                confidence=REGION_CONFIDENCE,
                method=MatchMethod.REGION,
                matched_on=text,
            )
    return None


def historical_tier(
    normalized: NormalizedInput,
    year: Optional[int],
    catalog: Catalog,
    *,
    max_window: int = MAX_WINDOW,
) -> Optional[MatchResult]:
    """Defunct state names, only when the year falls inside their window.

    Tries the whole input, then the last segment, then trailing word windows
    of the last segment ("Born in East Germany"). Abstains without a year or
    with a year outside the window.
    """
    if year is None:
        return None

    candidates = [(normalized.original, normalized.key)]
    last = normalized.last_segment
    if last is not None:
        if last.key != normalized.key:
            candidates.append((last.text, last.key))
        candidates.extend(
            (text, key) for text, key, _, _ in token_windows(last.tokens, max_size=max_window, trailing=True)
        )

    for text, key in candidates:
        hit = catalog.lookup_historical(key)
        if hit is None:
            continue
        iso2, hist = hit
        if hist.covers(year):
            return MatchResult(
                iso2=iso2,
                confidence=HISTORICAL_CONFIDENCE,
                method=MatchMethod.HISTORICAL,
                matched_on=text,
                historical_year=year,
            )
        # "Northern Rhodesia" out of its window is not retried as "Rhodesia"
        return None
    return None


# ---- Fuzzy ----
def fuzzy_confidence(similarity: float) -> float:
    """Map raw similarity in [0, 1] onto the fuzzy confidence range.

    Linear from (FUZZY_RAW_FLOOR -> FUZZY_FLOOR) to (1.0 -> FUZZY_CEILING),
    clamped to [0, FUZZY_CEILING]. Anything under FUZZY_FLOOR is rejected by
    the caller.

    Examples:
        >>> fuzzy_confidence(1.0)
        0.89
        >>> fuzzy_confidence(0.6)
        0.3
    """
    slope = (FUZZY_CEILING - FUZZY_FLOOR) / (1.0 - FUZZY_RAW_FLOOR)
    value = FUZZY_FLOOR + (similarity - FUZZY_RAW_FLOOR) * slope
    return round(max(0.0, min(FUZZY_CEILING, value)), 4)


def score_candidates(key: str, catalog: Catalog) -> List[Tuple[str, float, int, str]]:
    """Score every name and alias against a folded input.

    Returns:
        One (iso2, confidence, distance, matched name) per country, ordered by
        confidence desc, edit distance asc, catalog order. Only candidates at
        or above FUZZY_FLOOR are kept.
    """
    if not key:
        return []

    hits = process.extract(
        key,
        catalog.fuzzy_keys,
        scorer=Levenshtein.normalized_similarity,
        processor=None,
        score_cutoff=FUZZY_RAW_FLOOR,
        limit=None,
    )

    scored = []
    for choice, similarity, index in hits:
        confidence = fuzzy_confidence(similarity)
        if confidence < FUZZY_FLOOR:
            continue
        distance = Levenshtein.distance(key, choice)
        scored.append((-confidence, distance, index))
    scored.sort()

    ranked = []
    seen = set()
    for neg_confidence, distance, index in scored:
        iso2, display = catalog.fuzzy_entry(index)
        if iso2 in seen:
            continue
        seen.add(iso2)
        ranked.append((iso2, -neg_confidence, distance, display))
    return ranked


def fuzzy_tier(
    normalized: NormalizedInput,
    year: Optional[int],
    catalog: Catalog,
    *,
    max_alternatives: int = 3,
) -> Optional[MatchResult]:
    ranked = score_candidates(normalized.key, catalog)
    if not ranked:
        return None

    iso2, confidence, _, display = ranked[0]
    alternatives = tuple(
        Alternative(iso2=alt_iso2, confidence=alt_conf, reason=f"edit distance {dist} from {alt_name!r}")
        for alt_iso2, alt_conf, dist, alt_name in ranked[1:1 + max_alternatives]
    )
    return MatchResult(
        iso2=iso2,
        confidence=confidence,
        method=MatchMethod.FUZZY,
        matched_on=display,
        alternatives=alternatives,
    )


__all__ = [
    "Tier",
    "MAX_WINDOW",
    "FUZZY_RAW_FLOOR",
    "exact_tier",
    "alias_tier",
    "pattern_tier",
    "region_tier",
    "historical_tier",
    "fuzzy_tier",
    "fuzzy_confidence",
    "score_candidates",
]
