"""
Build Utility Functions
-----------------------

Helpers shared by the catalog builder and the table build script.

Functions:
  - load_yaml_file: Load and parse a YAML file
  - pack_list: Join a list of names into one table cell
  - unpack_list: Split a table cell back into a list of names
"""

from pathlib import Path
from typing import List, Optional

try:
    import yaml
except ImportError as e:
    raise ImportError("PyYAML not installed. pip install pyyaml") from e


LIST_SEPARATOR = "|"


def load_yaml_file(path: Path) -> dict:
    """
    Load and parse YAML file.

    Raises:
        FileNotFoundError: If file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def pack_list(values: Optional[List[str]]) -> str:
    """
    Join names into a single cell so the table keeps string-only columns.

    Examples:
        >>> pack_list(['England', 'Scotland'])
        'England|Scotland'

        >>> pack_list(None)
        ''
    """
    if not values:
        return ""
    return LIST_SEPARATOR.join(str(v) for v in values)


def unpack_list(cell: Optional[str]) -> List[str]:
    """
    Inverse of pack_list; blank cells and NaN give an empty list.

    Examples:
        >>> unpack_list('England|Scotland')
        ['England', 'Scotland']
    """
    if cell is None or not isinstance(cell, str) or not cell.strip():
        return []
    return [part for part in cell.split(LIST_SEPARATOR) if part.strip()]


__all__ = [
    "load_yaml_file",
    "pack_list",
    "unpack_list",
]
