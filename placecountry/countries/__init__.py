"""Country resolution for genealogical place strings."""

from placecountry.countries.countryapi import (
    load_catalog,
    match_country,
    country_identifier,
    country_identifiers,
    match_candidates,
    list_countries,
    resolve_places,
)
from placecountry.countries.countrycatalog import (
    Catalog,
    CatalogError,
    CountryRecord,
    HistoricalName,
    build_catalog,
)
from placecountry.countries.countrymatcher import CountryMatcher
from placecountry.countries.countryresult import (
    MatchMethod,
    MatchResult,
    Alternative,
    PlaceWithCountry,
    NO_MATCH,
)
from placecountry.countries.countrystats import (
    MatcherStatistics,
    UnresolvedLocation,
)

__all__ = [
    "load_catalog",
    "match_country",
    "country_identifier",
    "country_identifiers",
    "match_candidates",
    "list_countries",
    "resolve_places",
    "Catalog",
    "CatalogError",
    "CountryRecord",
    "HistoricalName",
    "build_catalog",
    "CountryMatcher",
    "MatchMethod",
    "MatchResult",
    "Alternative",
    "PlaceWithCountry",
    "NO_MATCH",
    "MatcherStatistics",
    "UnresolvedLocation",
]
