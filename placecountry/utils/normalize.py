"""Shared text normalization utilities.

Unlike an ASCII transliteration, folding here keeps non-Latin scripts intact
("Россия" stays matchable) and only strips combining marks, so "México" and
"Mexico" compare equal.
"""

import re
import unicodedata


_QUOTES = {
    "‘": "'",
    "’": "'",
    "‛": "'",
    "´": "'",
    "`": "'",
    "“": '"',
    "”": '"',
}


def normalize_quotes(s: str) -> str:
    """Normalize curly quotes and stray accents to ASCII quotes.

    Examples:
        >>> normalize_quotes("Cote d’Ivoire")
        "Cote d'Ivoire"
    """
    for src, dst in _QUOTES.items():
        s = s.replace(src, dst)
    return s


def strip_accents(s: str) -> str:
    """Remove combining marks after NFKD decomposition.

    Examples:
        >>> strip_accents("Île-de-France")
        'Ile-de-France'

        >>> strip_accents("Россия")
        'Россия'
    """
    decomposed = unicodedata.normalize("NFKD", s)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped)


def fold_name(s: str) -> str:
    """Case- and accent-insensitive key for exact lookups.

    Transformations:
      1. Quote normalization
      2. Combining marks removed (NFKD)
      3. Casefold
      4. Collapse whitespace

    Args:
        s: Raw text

    Returns:
        Folded key, "" for empty input

    Examples:
        >>> fold_name("  Deutschland ")
        'deutschland'

        >>> fold_name("CÔTE  D’IVOIRE")
        "cote d'ivoire"
    """
    if not s:
        return ""

    s = normalize_quotes(s)
    s = strip_accents(s)
    s = s.casefold()
    s = re.sub(r"\s+", " ", s).strip()

    return s


__all__ = [
    "normalize_quotes",
    "strip_accents",
    "fold_name",
]
