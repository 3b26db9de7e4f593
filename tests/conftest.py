"""Shared test fixtures for placecountry tests."""

import pytest

from placecountry.countries.countrycatalog import (
    Catalog,
    CountryRecord,
    HistoricalName,
    build_catalog,
)
from placecountry.countries.countrymatcher import CountryMatcher


@pytest.fixture(scope="session")
def catalog():
    """Full catalog built from countries.yaml, pycountry and country_converter.

    Built once per session; a Catalog is immutable so sharing it is safe.
    """
    return build_catalog()


@pytest.fixture
def matcher(catalog):
    """Fresh matcher (and fresh statistics) over the full catalog."""
    return CountryMatcher(catalog)


@pytest.fixture(scope="session")
def tiny_records():
    """Hand-built records covering every tier without depending on pycountry."""
    return [
        CountryRecord(
            iso2="US", iso3="USA", canonical_name="United States",
            aliases=("America", "United States of America"),
            regions=("Texas", "New Mexico", "New Jersey", "Massachusetts"),
        ),
        CountryRecord(iso2="MX", iso3="MEX", canonical_name="Mexico"),
        CountryRecord(
            iso2="DE", iso3="DEU", canonical_name="Germany",
            aliases=("Deutschland",),
            regions=("Bavaria",),
            historical=(
                HistoricalName("East Germany", 1949, 1990, ("German Democratic Republic", "GDR")),
                HistoricalName("West Germany", 1949, 1990),
            ),
        ),
        CountryRecord(iso2="FR", iso3="FRA", canonical_name="France"),
        CountryRecord(iso2="NZ", iso3="NZL", canonical_name="New Zealand"),
        CountryRecord(iso2="DK", iso3="DNK", canonical_name="Denmark", regions=("Zealand",)),
        CountryRecord(iso2="JE", iso3="JEY", canonical_name="Jersey"),
        CountryRecord(iso2="IQ", iso3="IRQ", canonical_name="Iraq"),
        CountryRecord(iso2="IR", iso3="IRN", canonical_name="Iran"),
        CountryRecord(
            iso2="GB", iso3="GBR", canonical_name="United Kingdom",
            aliases=("England", "Scotland", "Wales", "UK"),
            regions=("Yorkshire",),
        ),
        CountryRecord(
            iso2="KR", iso3="KOR", canonical_name="South Korea",
            aliases=("Korea, Republic of",),
        ),
        CountryRecord(
            iso2="VN", iso3="VNM", canonical_name="Vietnam",
            historical=(HistoricalName("South Vietnam", 1955, 1975),),
        ),
    ]


@pytest.fixture(scope="session")
def tiny_catalog(tiny_records):
    return Catalog(tiny_records)


@pytest.fixture
def tiny_matcher(tiny_catalog):
    return CountryMatcher(tiny_catalog)


@pytest.fixture
def sample_places():
    """Typical place strings from family-tree exports and their ISO2 codes."""
    return {
        "USA": "US",
        "Deutschland": "DE",
        "Paris, France": "FR",
        "Dallas, Texas, USA": "US",
        "Born in Texas": "US",
        "England": "GB",
        "Holland": "NL",
        "Munich, Bavaria": "DE",
    }
