"""
Summary: Guess a work's title and artist from its folder or file name.
Why: Discovery and rescan need a best-effort default without any I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from sharaku.config.settings import UNTITLED_PLACEHOLDER

# Whole name made of bracket/parenthesis groups, e.g. "[Tag] (Tag)"
_ONLY_TAGS: Final[re.Pattern[str]] = re.compile(r"^(?:\s*(?:\[[^\]]*\]|\([^)]*\)))+\s*$")

# Leading event tag such as "(C97) " before the artist bracket
_LEADING_EVENT: Final[re.Pattern[str]] = re.compile(r"^\s*\([^)]*\)\s*")

_BRACKET_ARTIST: Final[re.Pattern[str]] = re.compile(r"^\[([^\]]*)\]\s*(.*)$")

_TRAILING_TAG: Final[re.Pattern[str]] = re.compile(r"\s*(?:\[[^\]]*\]|\([^)]*\))\s*$")

_ARTIST_SEPARATOR: Final[str] = " - "


@dataclass(slots=True, frozen=True)
class ParsedMetadata:
    """Title and optional artist guessed from a name."""

    title: str
    artist: str | None = None


def _strip_trailing_tags(text: str) -> str:
    """Remove trailing ``(...)``/``[...]`` groups while something remains."""

    current = text.strip()
    while True:
        candidate = _TRAILING_TAG.sub("", current).strip()
        if not candidate or candidate == current:
            return current
        current = candidate


def parse_folder_name(name: str) -> ParsedMetadata:
    """Parse ``name`` into a title and artist guess.

    Precedence:
        1. ``[Artist] Title`` (an optional leading ``(Event)`` tag is ignored)
        2. ``Artist - Title`` (first separator wins)
        3. the whole name, with trailing bracketed tags stripped, and no artist

    Never raises. Empty input yields the ``Untitled`` placeholder; a name made
    only of bracketed tags is returned unchanged as the title.
    """
    raw = name.strip()
    if not raw:
        return ParsedMetadata(title=UNTITLED_PLACEHOLDER)

    if _ONLY_TAGS.match(raw):
        return ParsedMetadata(title=raw)

    without_event = _LEADING_EVENT.sub("", raw, count=1)
    bracket = _BRACKET_ARTIST.match(without_event)
    if bracket is not None:
        artist = bracket.group(1).strip()
        title = _strip_trailing_tags(bracket.group(2))
        if artist and title:
            return ParsedMetadata(title=title, artist=artist)

    if _ARTIST_SEPARATOR in raw:
        artist_part, title_part = raw.split(_ARTIST_SEPARATOR, 1)
        artist = artist_part.strip()
        title = _strip_trailing_tags(title_part)
        if artist and title:
            return ParsedMetadata(title=title, artist=artist)

    return ParsedMetadata(title=_strip_trailing_tags(raw) or raw)


__all__ = ["ParsedMetadata", "parse_folder_name"]
