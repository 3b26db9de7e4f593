#!/usr/bin/env python3
"""
Build countries.parquet from countries.yaml, pycountry and country_converter.

This script:
1. Builds the in-memory catalog (curated overlay first, derived names second)
2. Flattens it to iso2, iso3, name, aliases, regions, historical columns
3. Re-reads the table through Catalog.from_frame() to check it round-trips
4. Writes countries.parquet next to this file (or to --output)

load_catalog() picks the parquet up automatically; without it the catalog is
rebuilt from the packaged sources on first use.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

import pandas as pd

from placecountry.countries.countrycatalog import Catalog, CatalogError, build_catalog
from placecountry.utils.build_framework import (
    BuildConfig,
    build_entity_database,
    validate_duplicate_ids,
    validate_required_fields,
)


def validate_countries(df: pd.DataFrame) -> List[str]:
    """Validate the flattened catalog."""
    issues = []
    issues.extend(validate_duplicate_ids(df, 'iso2'))
    issues.extend(validate_duplicate_ids(df, 'iso3'))
    issues.extend(validate_required_fields(df, ['iso2', 'iso3', 'name']))

    try:
        Catalog.from_frame(df)
    except CatalogError as e:
        issues.append(f"Table does not round-trip: {e}")

    return issues


def generate_country_summary(df: pd.DataFrame) -> None:
    """Print country-specific summary statistics."""
    print(f"\nCountries with aliases: {(df['aliases'] != '').sum()}")
    print(f"Countries with regions: {(df['regions'] != '').sum()}")
    print(f"Countries with historical names: {(df['historical'] != '').sum()}")

    region_counts = df['regions'].str.count(r'\|') + (df['regions'] != '').astype(int)
    top = df.assign(n_regions=region_counts).nlargest(5, 'n_regions')
    print("\nMost regions:")
    for _, row in top.iterrows():
        print(f"  {row['iso2']} {row['name']}: {row['n_regions']}")


def main(argv=None):
    """Main build process."""
    data_dir = Path(__file__).parent

    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--overlay", type=Path, default=data_dir / "countries.yaml",
                        help="Curated YAML overlay")
    parser.add_argument("--output", type=Path, default=data_dir / "countries.parquet",
                        help="Parquet file to write")
    parser.add_argument("--no-converter-names", action="store_true",
                        help="Skip names from country_converter")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = BuildConfig(
        output_parquet=args.output,
        build_frame=lambda: build_catalog(
            args.overlay,
            include_converter_names=not args.no_converter_names,
        ).to_frame(),
        validate_data=validate_countries,
        generate_summary=generate_country_summary,
        entity_plural="countries",
        sort_column="iso2",
    )

    return build_entity_database(config)


if __name__ == "__main__":
    sys.exit(main())
