"""Data file discovery and table loading.

Compiled tables live next to the module that owns them (``countries/data/``),
with a development ``tables/`` directory at the repository root as fallback.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd


def find_data_file(
    module_file: str,
    subdirectory: str,
    filenames: List[str],
    search_dev_tables: bool = True,
) -> Optional[Path]:
    """Find a data file by searching standard locations.

    Search priority:
    1. Module-local data: {module_dir}/data/
    2. Development data: tables/{subdirectory}/ (if search_dev_tables=True)

    Args:
        module_file: __file__ from the calling module
        subdirectory: Subdirectory name under tables/ (e.g., 'countries')
        filenames: Candidate filenames, in order of preference
        search_dev_tables: Whether to look in the repository tables/ directory

    Returns:
        Path to the first file found, or None

    Examples:
        >>> find_data_file(__file__, 'countries', ['countries.parquet'])
    """
    data_dir = Path(module_file).parent / "data"
    for filename in filenames:
        p = data_dir / filename
        if p.exists():
            return p

    if search_dev_tables:
        # module -> subpackage -> package -> repository root
        tables_dir = Path(module_file).parent.parent.parent / "tables" / subdirectory
        for filename in filenames:
            p = tables_dir / filename
            if p.exists():
                return p

    return None


def load_parquet_or_csv(file_path: Path) -> pd.DataFrame:
    """Load a DataFrame from a parquet or CSV file based on extension.

    CSV columns are read as strings with empty cells kept as "".

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the extension is not .parquet or .csv
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Required file not found: {file_path}")

    if file_path.suffix == ".parquet":
        return pd.read_parquet(file_path)
    elif file_path.suffix == ".csv":
        return pd.read_csv(file_path, dtype=str, keep_default_na=False)
    else:
        raise ValueError(f"Unsupported file format: {file_path.suffix}. Use .parquet or .csv")


def format_not_found_error(
    subdirectory: str,
    searched_locations: List[Tuple[str, Path]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful FileNotFoundError message."""
    lines = [f"No {subdirectory} data found in standard locations.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  - {instruction}")

    return "\n".join(lines)


__all__ = [
    "find_data_file",
    "load_parquet_or_csv",
    "format_not_found_error",
]
