"""Shared utilities for placecountry package."""

from placecountry.utils.dataloader import (
    find_data_file,
    load_parquet_or_csv,
    format_not_found_error,
)
from placecountry.utils.normalize import (
    fold_name,
    strip_accents,
    normalize_quotes,
)
from placecountry.utils.build_utils import (
    load_yaml_file,
    pack_list,
    unpack_list,
)

__all__ = [
    # Data loading
    "find_data_file",
    "load_parquet_or_csv",
    "format_not_found_error",
    # Normalization
    "fold_name",
    "strip_accents",
    "normalize_quotes",
    # Build utilities
    "load_yaml_file",
    "pack_list",
    "unpack_list",
]
