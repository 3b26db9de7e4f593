"""
Shared framework for writing compiled lookup tables.

build_countries.py supplies a DataFrame builder plus validation and summary
callbacks; this module does the string coercion, validation report, parquet
write and build summary.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import pandas as pd


@dataclass
class BuildConfig:
    """Configuration for building one lookup table."""

    # Output file (required)
    output_parquet: Path = None

    # Callbacks (required)
    build_frame: Callable[[], pd.DataFrame] = None  # Produce the table rows
    validate_data: Callable[[pd.DataFrame], List[str]] = None  # Return validation issues
    generate_summary: Optional[Callable[[pd.DataFrame], None]] = None  # Print summary stats

    # Metadata
    entity_plural: str = "rows"  # "countries", ...
    sort_column: Optional[str] = None  # Defaults to the first column


def build_entity_database(config: BuildConfig) -> int:
    """
    Generic build process for a lookup table.

    Returns:
        0 on success, 1 if validation issues found
    """
    if config.output_parquet is None or config.build_frame is None:
        raise ValueError("output_parquet and build_frame must be provided")

    print(f"Building {config.entity_plural} table")
    df = config.build_frame()

    # All columns are strings; missing values become ""
    for col in df.columns:
        df[col] = df[col].fillna("").astype(str)

    print("\nValidating data...")
    issues = config.validate_data(df) if config.validate_data else []

    if issues:
        print("\n⚠️  Validation issues found:")
        for issue in issues:
            print(f"  - {issue}")
        print()
    else:
        print("✅ All validations passed")

    sort_column = config.sort_column or df.columns[0]
    df = df.sort_values(sort_column).reset_index(drop=True)

    output = Path(config.output_parquet)
    output.parent.mkdir(parents=True, exist_ok=True)
    print(f"\nWriting {len(df)} {config.entity_plural} to {output}")
    df.to_parquet(output, index=False, engine='pyarrow')

    print("\n" + "=" * 60)
    print("BUILD SUMMARY")
    print("=" * 60)
    print(f"Total {config.entity_plural}: {len(df)}")
    print(f"Output file: {output}")
    print(f"File size: {output.stat().st_size / 1024:.1f} KB")

    if config.generate_summary is not None:
        config.generate_summary(df)

    if issues:
        print(f"\n⚠️  Build completed with {len(issues)} validation issues")
        return 1
    print("\n✅ Build completed successfully")
    return 0


def validate_duplicate_ids(df: pd.DataFrame, id_field: str) -> List[str]:
    """Check for duplicate IDs."""
    issues = []
    duplicates = df[df.duplicated(subset=[id_field], keep=False)]
    if not duplicates.empty:
        dup_names = duplicates[['name', id_field]].to_dict('records')
        issues.append(f"Duplicate {id_field}s found: {dup_names}")
    return issues


def validate_required_fields(df: pd.DataFrame, required_fields: List[str]) -> List[str]:
    """Check for missing required fields."""
    issues = []
    for field in required_fields:
        missing = df[df[field].isna() | (df[field] == "")]
        if not missing.empty:
            missing_names = missing['name'].tolist() if 'name' in df.columns else missing.index.tolist()
            issues.append(f"Missing {field} for rows: {missing_names}")
    return issues
