"""
Place String Normalization
--------------------------

Turns a raw place string from a genealogical record into the pieces the tier
matchers compare against the catalog:

  - key:      folded whole input ("paris, france")
  - segments: comma-separated parts, last one usually the broadest level
  - tokens:   whitespace-separated words inside each segment

Examples:
  >>> n = normalize_place("  Dallas, Texas, USA ")
  >>> n.original
  'Dallas, Texas, USA'
  >>> [s.text for s in n.segments]
  ['Dallas', 'Texas', 'USA']
  >>> n.segments[-1].key
  'usa'

  >>> normalize_place("   ").is_empty
  True
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from placecountry.utils.normalize import fold_name


# Characters trimmed from both ends of a token ("(Texas)" -> "Texas")
_EDGE_PUNCTUATION = "\"'()[]{}<>:;!?.*"


def normalize_country_key(s: Optional[str]) -> str:
    """Lookup key used for every catalog name, alias and region.

    Examples:
        >>> normalize_country_key("Côte d’Ivoire")
        "cote d'ivoire"

        >>> normalize_country_key("BAYERN")
        'bayern'
    """
    if not s:
        return ""
    return fold_name(str(s))


@dataclass(frozen=True)
class Token:
    text: str
    key: str


@dataclass(frozen=True)
class Segment:
    """One comma-separated level of a place hierarchy."""

    text: str
    key: str
    tokens: tuple[Token, ...]


@dataclass(frozen=True)
class NormalizedInput:
    """Canonical form of a raw place string.

    Attributes:
        original: Input with surrounding whitespace removed
        key: Folded whole input
        segments: Non-empty comma-separated parts, in input order
    """

    original: str
    key: str
    segments: tuple[Segment, ...]

    @property
    def is_empty(self) -> bool:
        return not self.key

    @property
    def last_segment(self) -> Optional[Segment]:
        return self.segments[-1] if self.segments else None


EMPTY_INPUT = NormalizedInput(original="", key="", segments=())


def _tokenize(text: str) -> tuple[Token, ...]:
    tokens = []
    for word in text.split():
        word = word.strip(_EDGE_PUNCTUATION)
        key = normalize_country_key(word)
        if key:
            tokens.append(Token(text=word, key=key))
    return tuple(tokens)


def normalize_place(raw: Optional[str]) -> NormalizedInput:
    """Normalize a raw place string.

    Never raises for string input. Blank input (including None) returns
    EMPTY_INPUT, which the resolution pipeline short-circuits on.

    Args:
        raw: Place string as found in the record

    Returns:
        NormalizedInput with key, segments and tokens
    """
    if not raw:
        return EMPTY_INPUT

    original = str(raw).strip()
    key = normalize_country_key(original)
    if not key:
        return EMPTY_INPUT

    segments = []
    for part in original.split(","):
        text = re.sub(r"\s+", " ", part).strip()
        seg_key = normalize_country_key(text)
        if seg_key:
            segments.append(Segment(text=text, key=seg_key, tokens=_tokenize(text)))

    return NormalizedInput(original=original, key=key, segments=tuple(segments))


def token_windows(
    tokens: Sequence[Token],
    max_size: int = 4,
    trailing: bool = False,
) -> Iterator[tuple[str, str, int, int]]:
    """Yield contiguous token windows as (text, key, start, stop).

    Longer windows come first, and within one size the right-most window comes
    first, since place hierarchies put the broadest level last. start/stop
    are token positions, stop exclusive.

    Args:
        tokens: Tokens of one segment
        max_size: Largest window, in tokens
        trailing: Only yield windows that end at the last token

    Examples:
        >>> toks = normalize_place("Born in Texas").segments[0].tokens
        >>> [w[0] for w in token_windows(toks, trailing=True)]
        ['Born in Texas', 'in Texas', 'Texas']
    """
    n = len(tokens)
    for size in range(min(max_size, n), 0, -1):
        starts = [n - size] if trailing else range(n - size, -1, -1)
        for start in starts:
            window = tokens[start:start + size]
            yield (
                " ".join(t.text for t in window),
                " ".join(t.key for t in window),
                start,
                start + size,
            )


__all__ = [
    "EMPTY_INPUT",
    "NormalizedInput",
    "Segment",
    "Token",
    "normalize_country_key",
    "normalize_place",
    "token_windows",
]
