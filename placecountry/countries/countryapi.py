"""Country resolution API.

Public functions for resolving place strings to ISO 3166-1 alpha-2 codes.
For per-run statistics (confidence buckets, unresolved audit log) create a
CountryMatcher and use process_place().
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from placecountry.countries.countrycatalog import Catalog, build_catalog
from placecountry.countries.countrymatcher import CountryMatcher
from placecountry.countries.countrynormalize import normalize_country_key
from placecountry.countries.countryresult import MatchResult
from placecountry.countries.countrytiers import score_candidates
from placecountry.utils.dataloader import (
    find_data_file,
    load_parquet_or_csv,
    format_not_found_error,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """Load the country catalog once and reuse it.

    Resolution order:
      1. path, if given (parquet or CSV written by build_countries.py)
      2. countries.parquet in countries/data/ or tables/countries/
      3. built in memory from countries.yaml, pycountry and country_converter

    Args:
        path: Optional compiled catalog table

    Returns:
        Immutable Catalog

    Raises:
        FileNotFoundError: An explicit path does not exist
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            error_msg = format_not_found_error(
                subdirectory="countries",
                searched_locations=[("Explicit path", path)],
                fix_instructions=[
                    "Run placecountry/countries/data/build_countries.py to generate a table.",
                    "Or call load_catalog() without a path to build from packaged sources.",
                ],
            )
            raise FileNotFoundError(error_msg)
        catalog = Catalog.from_frame(load_parquet_or_csv(path))
        logger.info(f"Loaded country catalog from {path}: {catalog!r}")
        return catalog

    found_path = find_data_file(
        module_file=__file__,
        subdirectory="countries",
        filenames=["countries.parquet", "countries.csv"],
    )
    if found_path is not None:
        catalog = Catalog.from_frame(load_parquet_or_csv(found_path))
        logger.info(f"Loaded country catalog from {found_path}: {catalog!r}")
        return catalog

    return build_catalog()


@lru_cache(maxsize=1)
def _default_matcher() -> CountryMatcher:
    # Shared for stateless lookups only; nothing here calls process_place()
    return CountryMatcher(load_catalog())


def match_country(name: str, year: Optional[int] = None) -> MatchResult:
    """Resolve a place string with the packaged catalog.

    Examples:
        >>> match_country("Deutschland")
        MatchResult(iso2='DE', confidence=0.95, method=<MatchMethod.ALIAS: 'alias'>, ...)

        >>> match_country("South Vietnam", 1970).method.value
        'historical'
    """
    return _default_matcher().match_country(name, year)


def country_identifier(
    name: str,
    year: Optional[int] = None,
    *,
    min_confidence: float = 0.0,
) -> Optional[str]:
    """Get the ISO2 code for a place string.

    Args:
        name: Country name, code, alias or "City, State, Country" string
        year: Event year, enables historical names
        min_confidence: Return None below this confidence (e.g. 0.7 to drop
                        low-confidence fuzzy matches)

    Returns:
        ISO 3166-1 alpha-2 code or None

    Examples:
        >>> country_identifier("Holland")
        'NL'

        >>> country_identifier("Boston, Massachusetts, USA")
        'US'

        >>> country_identifier("Untied States", min_confidence=0.9)
    """
    result = match_country(name, year)
    if result.iso2 is None or result.confidence < min_confidence:
        return None
    return result.iso2


def country_identifiers(
    names: Iterable[str],
    year: Optional[int] = None,
    *,
    min_confidence: float = 0.0,
) -> List[Optional[str]]:
    """Batch version of country_identifier.

    Examples:
        >>> country_identifiers(["USA", "Holland", "England"])
        ['US', 'NL', 'GB']
    """
    return [country_identifier(n, year, min_confidence=min_confidence) for n in names]


def match_candidates(name: str, *, k: int = 5) -> List[dict]:
    """Top-K fuzzy candidates + scores (for review UIs).

    Useful when a place ended up unresolved or low-confidence and someone
    needs to pick the right country by hand.

    Returns:
        List of dicts with iso2, name, matched_on, confidence, distance,
        best first. One entry per country.

    Examples:
        >>> [c['iso2'] for c in match_candidates("Irak", k=2)]
        ['IQ', 'IR']
    """
    catalog = load_catalog()
    ranked = score_candidates(normalize_country_key(name), catalog)
    out = []
    for iso2, confidence, distance, matched_on in ranked[:k]:
        record = catalog.get(iso2)
        out.append({
            "iso2": iso2,
            "name": record.canonical_name if record else iso2,
            "matched_on": matched_on,
            "confidence": confidence,
            "distance": distance,
        })
    return out


def list_countries(*, with_historical: bool = False) -> pd.DataFrame:
    """Catalog as a DataFrame.

    Args:
        with_historical: Only return countries that carry historical names

    Returns:
        DataFrame with iso2, iso3, name, aliases, regions, historical columns
    """
    df = load_catalog().to_frame()
    if with_historical:
        df = df[df["historical"] != ""].reset_index(drop=True)
    return df


def resolve_places(
    df: pd.DataFrame,
    *,
    place_column: str = "place",
    year_column: Optional[str] = None,
    id_column: Optional[str] = None,
    event_column: Optional[str] = None,
    matcher: Optional[CountryMatcher] = None,
) -> pd.DataFrame:
    """Resolve a column of place strings, recording statistics on the matcher.

    Typical use is the import step of a family-tree build: one row per
    birth/death event, one matcher per build so its statistics describe the
    whole file.

    Args:
        df: Input rows
        place_column: Column with place text
        year_column: Optional column with event years (NaN allowed)
        id_column: Optional column with individual IDs
        event_column: Optional column with event types
        matcher: Matcher that accumulates statistics; a fresh one if None

    Returns:
        Copy of df with iso2, confidence, method and matched_on columns added
    """
    if place_column not in df.columns:
        raise KeyError(f"Column {place_column!r} not found in DataFrame")

    if matcher is None:
        matcher = CountryMatcher(load_catalog())

    def _cell(row: pd.Series, column: Optional[str]):
        if column is None:
            return None
        value = row[column]
        return None if pd.isna(value) else value

    iso2s, confidences, methods, matched_on = [], [], [], []
    for _, row in df.iterrows():
        year = _cell(row, year_column)
        individual_id = _cell(row, id_column)
        place = matcher.process_place(
            _cell(row, place_column),
            int(year) if year is not None else None,
            str(individual_id) if individual_id is not None else None,
            _cell(row, event_column),
        )
        country = place.country
        iso2s.append(country.iso2 if country else None)
        confidences.append(country.confidence if country else 0.0)
        methods.append(country.method.value if country else "none")
        matched_on.append(country.matched_on if country else None)

    out = df.copy()
    out["iso2"] = iso2s
    out["confidence"] = confidences
    out["method"] = methods
    out["matched_on"] = matched_on
    return out


__all__ = [
    "load_catalog",
    "match_country",
    "country_identifier",
    "country_identifiers",
    "match_candidates",
    "list_countries",
    "resolve_places",
]
