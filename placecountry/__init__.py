"""placecountry - Country resolution for genealogical place names

Resolves free-text place strings ("Paris, France", "Born in Texas",
"South Vietnam") to ISO 3166-1 alpha-2 codes with a confidence score and the
strategy that produced the match.

Usage:
    from placecountry import CountryMatcher, match_country, country_identifier

    # One-off lookups with the packaged catalog
    country_identifier("Deutschland")           # Returns: 'DE'
    match_country("East Germany", 1975)         # MatchResult(iso2='DE', method=historical, ...)

    # A matcher per import run, with statistics
    matcher = CountryMatcher()
    matcher.process_place("Dallas, Texas, USA", 1960, "I001", "birth")
    matcher.get_statistics().to_dict()
"""

__version__ = "0.1.0"

# ============================================================================
# Country Resolution API
# ============================================================================

from .countries.countryapi import (
    load_catalog,          # Load (cached) country catalog
    match_country,         # Full MatchResult for a place string
    country_identifier,    # Primary API - place string -> ISO2 code
    country_identifiers,   # Batch resolution
    match_candidates,      # Top-K fuzzy candidates for review
    list_countries,        # Catalog as DataFrame
    resolve_places,        # DataFrame batch resolution with statistics
)

# ============================================================================
# Building blocks
# ============================================================================

from .countries.countrycatalog import (
    Catalog,
    CatalogError,
    CountryRecord,
    HistoricalName,
    build_catalog,
)
from .countries.countrymatcher import CountryMatcher
from .countries.countryresult import (
    MatchMethod,
    MatchResult,
    Alternative,
    PlaceWithCountry,
    NO_MATCH,
)
from .countries.countrystats import (
    MatcherStatistics,
    UnresolvedLocation,
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "country_identifier",
    "match_country",
    "CountryMatcher",

    # ========================================================================
    # Country Resolution
    # ========================================================================
    "country_identifiers",
    "match_candidates",
    "list_countries",
    "resolve_places",
    "load_catalog",

    # ========================================================================
    # Types
    # ========================================================================
    "Catalog",
    "CatalogError",
    "CountryRecord",
    "HistoricalName",
    "build_catalog",
    "MatchMethod",
    "MatchResult",
    "Alternative",
    "PlaceWithCountry",
    "NO_MATCH",
    "MatcherStatistics",
    "UnresolvedLocation",
]
