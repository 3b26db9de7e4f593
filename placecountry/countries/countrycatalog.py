"""
Country Catalog
---------------

Immutable reference data for country resolution: ISO codes, canonical names,
aliases, regions (states, provinces, counties) and historical names of defunct
states attached to their successor.

Sources, in claim priority:
  1) data/countries.yaml - curated aliases, regions, historical names
  2) pycountry           - ISO 3166-1 codes and official names
  3) country_converter   - short and official names used in statistics data

API:
  build_catalog(overlay_path=None, include_converter_names=True) -> Catalog
  Catalog.from_frame(df) / Catalog.to_frame()

Examples:
  >>> catalog = build_catalog()
  >>> catalog.lookup_code("DEU")
  'DE'
  >>> catalog.lookup_name("deutschland")
  ('DE', 'Deutschland')
  >>> catalog.lookup_region("bavaria")
  ('DE', 'Bavaria')
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

# ---- Optional imports with helpful error messages ----
try:
    import pycountry
except ImportError as e:
    raise ImportError("pycountry not installed. pip install pycountry") from e

try:
    import country_converter as coco
except ImportError as e:
    raise ImportError("country_converter not installed. pip install country_converter") from e

from placecountry.countries.countrynormalize import normalize_country_key
from placecountry.utils.build_utils import load_yaml_file, pack_list, unpack_list

logger = logging.getLogger(__name__)

DEFAULT_OVERLAY = Path(__file__).parent / "data" / "countries.yaml"

CATALOG_COLUMNS = ["iso2", "iso3", "name", "aliases", "regions", "historical"]


class CatalogError(ValueError):
    """Catalog data violates a uniqueness or validity invariant."""


@dataclass(frozen=True)
class HistoricalName:
    """A defunct state, valid only inside [valid_from, valid_to] (inclusive)."""

    name: str
    valid_from: int
    valid_to: int
    aliases: tuple[str, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name,) + self.aliases

    def covers(self, year: int) -> bool:
        return self.valid_from <= year <= self.valid_to

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "valid_from": self.valid_from,
            "valid_to": self.valid_to,
            "aliases": list(self.aliases),
        }


@dataclass(frozen=True)
class CountryRecord:
    iso2: str
    iso3: str
    canonical_name: str
    aliases: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    historical: tuple[HistoricalName, ...] = field(default_factory=tuple)

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical name followed by aliases."""
        return (self.canonical_name,) + self.aliases


class Catalog:
    """Read-only country catalog with flat lookup maps.

    Every name, alias and region key maps to exactly one iso2; construction
    raises CatalogError otherwise. Maps are built once and never mutated, so a
    Catalog can be shared across threads.
    """

    def __init__(self, records: Iterable[CountryRecord]):
        self._records: tuple[CountryRecord, ...] = tuple(records)
        self._by_iso2: Dict[str, CountryRecord] = {}
        self._codes: Dict[str, str] = {}
        self._names: Dict[str, Tuple[str, str]] = {}
        self._regions: Dict[str, Tuple[str, str]] = {}
        self._historical: Dict[str, Tuple[str, HistoricalName]] = {}
        # Fuzzy candidates in catalog order: canonical name, then aliases
        self._fuzzy_keys: List[str] = []
        self._fuzzy_entries: List[Tuple[str, str]] = []

        for record in self._records:
            self._add_codes(record)
        for record in self._records:
            for name in record.names:
                self._claim(self._names, name, record.iso2, "name")
        for record in self._records:
            for region in record.regions:
                key = self._claim(self._regions, region, record.iso2, "region")
                owner = self._names.get(key)
                if owner and owner[0] != record.iso2:
                    raise CatalogError(
                        f"Region {region!r} of {record.iso2} is also a name of {owner[0]}"
                    )
        for record in self._records:
            for hist in record.historical:
                self._add_historical(record.iso2, hist)

        for key, (iso2, display) in self._names.items():
            self._fuzzy_keys.append(key)
            self._fuzzy_entries.append((iso2, display))

    # ---- Construction helpers ----
    def _add_codes(self, record: CountryRecord) -> None:
        iso2, iso3 = record.iso2.upper(), record.iso3.upper()
        if len(iso2) != 2 or len(iso3) != 3:
            raise CatalogError(f"Bad ISO codes for {record.canonical_name!r}: {iso2}/{iso3}")
        for code in (iso2, iso3):
            if code in self._codes:
                raise CatalogError(f"Duplicate ISO code {code}")
            self._codes[code] = iso2
        self._by_iso2[iso2] = record

    def _claim(self, table: dict, text: str, iso2: str, kind: str) -> str:
        key = normalize_country_key(text)
        if not key:
            raise CatalogError(f"Empty {kind} for {iso2}")
        owner = table.get(key)
        if owner is None:
            table[key] = (iso2, text)
        elif owner[0] != iso2:
            raise CatalogError(f"{kind.capitalize()} {text!r} claimed by both {owner[0]} and {iso2}")
        return key

    def _add_historical(self, iso2: str, hist: HistoricalName) -> None:
        if hist.valid_from > hist.valid_to:
            raise CatalogError(
                f"Historical name {hist.name!r} has valid_from > valid_to "
                f"({hist.valid_from} > {hist.valid_to})"
            )
        for text in hist.names:
            key = normalize_country_key(text)
            if not key:
                raise CatalogError(f"Empty historical name for {iso2}")
            existing = self._historical.get(key)
            if existing is not None:
                # Spelling variants that fold to one key ("Preußen"/"Preussen")
                if existing == (iso2, hist):
                    continue
                raise CatalogError(f"Historical name {text!r} defined twice")
            # Sharing a string is only allowed with the successor itself
            for table in (self._names, self._regions):
                owner = table.get(key)
                if owner and owner[0] != iso2:
                    raise CatalogError(
                        f"Historical name {text!r} of {iso2} collides with {owner[0]}"
                    )
            self._historical[key] = (iso2, hist)

    # ---- Container protocol ----
    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CountryRecord]:
        return iter(self._records)

    def __contains__(self, iso2: object) -> bool:
        return isinstance(iso2, str) and iso2.upper() in self._by_iso2

    def __repr__(self) -> str:
        return f"Catalog({len(self._records)} countries, {len(self._regions)} regions)"

    @property
    def records(self) -> tuple[CountryRecord, ...]:
        return self._records

    def get(self, iso2: str) -> Optional[CountryRecord]:
        return self._by_iso2.get(iso2.upper())

    # ---- Lookups (all keys are normalize_country_key output) ----
    def lookup_code(self, key: str) -> Optional[str]:
        """ISO2 for an ISO2/ISO3 code, any case."""
        if len(key) not in (2, 3):
            return None
        return self._codes.get(key.upper())

    def lookup_name(self, key: str) -> Optional[Tuple[str, str]]:
        """(iso2, display text) for a canonical name or alias key."""
        return self._names.get(key)

    def lookup_region(self, key: str) -> Optional[Tuple[str, str]]:
        """(iso2, display text) for a region key."""
        return self._regions.get(key)

    def lookup_historical(self, key: str) -> Optional[Tuple[str, HistoricalName]]:
        """(successor iso2, HistoricalName) for a historical name or alias key."""
        return self._historical.get(key)

    @property
    def fuzzy_keys(self) -> List[str]:
        """Name and alias keys in catalog order (historical names excluded)."""
        return self._fuzzy_keys

    def fuzzy_entry(self, index: int) -> Tuple[str, str]:
        """(iso2, display text) for a position in fuzzy_keys."""
        return self._fuzzy_entries[index]

    # ---- Table round-trip ----
    def to_frame(self) -> pd.DataFrame:
        """Flatten the catalog into a string-only DataFrame."""
        rows = []
        for r in self._records:
            rows.append({
                "iso2": r.iso2,
                "iso3": r.iso3,
                "name": r.canonical_name,
                "aliases": pack_list(list(r.aliases)),
                "regions": pack_list(list(r.regions)),
                "historical": json.dumps([h.to_dict() for h in r.historical], ensure_ascii=False)
                if r.historical else "",
            })
        return pd.DataFrame(rows, columns=CATALOG_COLUMNS)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Catalog":
        """Rebuild a catalog from a table written by to_frame()."""
        missing = [c for c in CATALOG_COLUMNS if c not in df.columns]
        if missing:
            raise CatalogError(f"Catalog table missing columns: {missing}")

        records = []
        for _, row in df.iterrows():
            historical = ()
            cell = row["historical"]
            if isinstance(cell, str) and cell.strip():
                historical = tuple(_historical_from_dict(h) for h in json.loads(cell))
            records.append(CountryRecord(
                iso2=str(row["iso2"]).upper(),
                iso3=str(row["iso3"]).upper(),
                canonical_name=str(row["name"]),
                aliases=tuple(unpack_list(row["aliases"])),
                regions=tuple(unpack_list(row["regions"])),
                historical=historical,
            ))
        return cls(records)


def _historical_from_dict(entry: dict) -> HistoricalName:
    try:
        return HistoricalName(
            name=str(entry["name"]),
            valid_from=int(entry["valid_from"]),
            valid_to=int(entry["valid_to"]),
            aliases=tuple(str(a) for a in entry.get("aliases") or ()),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Malformed historical entry: {entry!r}") from e


# ---- Source readers ----
def _pycountry_entries() -> Dict[str, dict]:
    """iso2 -> {'iso3', 'name', 'names'} from ISO 3166-1."""
    entries: Dict[str, dict] = {}
    for c in pycountry.countries:
        alpha2 = getattr(c, "alpha_2", None)
        alpha3 = getattr(c, "alpha_3", None)
        if not (alpha2 and alpha3):
            continue

        common = getattr(c, "common_name", None)
        name = getattr(c, "name", None)
        official = getattr(c, "official_name", None)
        entries[alpha2] = {
            "iso3": alpha3,
            "name": common or name,
            "names": [n for n in (common, name, official) if n],
        }
    return entries


def _converter_names() -> Dict[str, List[str]]:
    """iso2 -> short and official names known to country_converter."""
    names: Dict[str, List[str]] = {}
    data = coco.CountryConverter().data
    for _, row in data.iterrows():
        iso2 = row.get("ISO2")
        if not isinstance(iso2, str) or len(iso2) != 2:
            continue
        for col in ("name_short", "name_official"):
            value = row.get(col)
            if isinstance(value, str) and value.strip():
                names.setdefault(iso2.upper(), []).append(value.strip())
    return names


# ---- Builder ----
def build_catalog(
    overlay_path: Optional[Path] = None,
    *,
    include_converter_names: bool = True,
) -> Catalog:
    """Build the catalog from the curated overlay, pycountry and country_converter.

    Curated entries (canonical names, overlay aliases, regions, historical
    names) claim their keys first. Names from pycountry and country_converter
    are added as aliases unless another country already claims the key, in
    which case they are skipped with a warning.

    Args:
        overlay_path: YAML overlay, default data/countries.yaml
        include_converter_names: Also pull names from country_converter

    Returns:
        Validated Catalog, records sorted by iso2

    Raises:
        CatalogError: Curated data violates a catalog invariant
        FileNotFoundError: Overlay file missing
    """
    path = Path(overlay_path) if overlay_path is not None else DEFAULT_OVERLAY
    overlay = {}
    for code, entry in (load_yaml_file(path).get("countries") or {}).items():
        # Unquoted NO parses as a YAML boolean
        if not isinstance(code, str) or len(code) != 2:
            raise CatalogError(f"Overlay key {code!r} in {path.name} is not an ISO2 code (quote it)")
        overlay[code.upper()] = entry

    base = _pycountry_entries()

    for iso2, entry in overlay.items():
        entry = entry or {}
        if iso2 in base:
            continue
        # User-assigned codes (e.g. Kosovo XK) must carry their own codes
        if not entry.get("iso3") or not entry.get("name"):
            raise CatalogError(f"Overlay entry {iso2} is not in ISO 3166-1 and lacks iso3/name")
        base[iso2] = {"iso3": entry["iso3"], "name": entry["name"], "names": []}

    derived: Dict[str, List[str]] = {iso2: list(info["names"]) for iso2, info in base.items()}
    if include_converter_names:
        for iso2, names in _converter_names().items():
            if iso2 in derived:
                derived[iso2].extend(names)

    # Curated claims
    claims: Dict[str, str] = {}
    curated: Dict[str, dict] = {}
    for iso2 in sorted(base):
        entry = overlay.get(iso2) or {}
        canonical = entry.get("name") or base[iso2]["name"]
        aliases = [str(a) for a in entry.get("aliases") or []]
        regions = [str(r) for r in entry.get("regions") or []]
        historical = tuple(_historical_from_dict(h) for h in entry.get("historical") or [])

        for text in [canonical] + aliases + regions:
            claims.setdefault(normalize_country_key(text), iso2)
        for hist in historical:
            for text in hist.names:
                claims.setdefault(normalize_country_key(text), iso2)

        curated[iso2] = {
            "canonical": canonical,
            "aliases": aliases,
            "regions": regions,
            "historical": historical,
        }

    # Derived aliases
    records = []
    skipped = 0
    for iso2 in sorted(base):
        info = curated[iso2]
        seen = {normalize_country_key(t) for t in [info["canonical"]] + info["aliases"]}
        aliases = list(info["aliases"])
        for text in derived[iso2]:
            key = normalize_country_key(text)
            if not key or key in seen:
                continue
            owner = claims.get(key)
            if owner is not None and owner != iso2:
                logger.warning(f"Skipping name {text!r} for {iso2}: already claimed by {owner}")
                skipped += 1
                continue
            claims[key] = iso2
            seen.add(key)
            aliases.append(text)

        records.append(CountryRecord(
            iso2=iso2,
            iso3=str(base[iso2]["iso3"]).upper(),
            canonical_name=info["canonical"],
            aliases=tuple(aliases),
            regions=tuple(info["regions"]),
            historical=info["historical"],
        ))

    catalog = Catalog(records)
    logger.info(f"Built country catalog from {path.name}: {catalog!r}, {skipped} derived names skipped")
    return catalog


__all__ = [
    "CatalogError",
    "HistoricalName",
    "CountryRecord",
    "Catalog",
    "build_catalog",
    "DEFAULT_OVERLAY",
    "CATALOG_COLUMNS",
]
