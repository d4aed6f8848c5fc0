"""
Summary: Sanitize metadata values before they become directory names.
Why: Metadata must never inject separators, traversal or characters illegal on common filesystems.
"""

from __future__ import annotations

import re
import unicodedata
from typing import ClassVar, final


@final
class Sanitizer:
    """Sanitize single path segments."""

    # Characters rejected by common filesystems plus both separators
    FORBIDDEN_CHARACTERS: ClassVar[frozenset[str]] = frozenset('\\/:*?"<>|')

    # ASCII control characters
    CONTROL_CHARACTERS: ClassVar[re.Pattern[str]] = re.compile(r"[\x00-\x1f\x7f]")

    FORBIDDEN_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r'[\\/:*?"<>|]')

    WHITESPACE_RUN: ClassVar[re.Pattern[str]] = re.compile(r"\s+")

    REPLACEMENT: ClassVar[str] = "_"

    # Maximum segment length (in bytes)
    MAX_SEGMENT_LENGTH: ClassVar[int] = 200

    @classmethod
    def sanitize_segment(cls, text: str | int | None) -> str:
        """Turn a metadata value into a safe single directory name.

        Args:
            text: Raw metadata value.

        Returns:
            str: Value with:
                - NFC-normalized characters
                - forbidden characters and separators replaced by ``_``
                - control characters removed and whitespace collapsed
                - no leading/trailing spaces and no trailing dots
                - at most ``MAX_SEGMENT_LENGTH`` bytes
            An empty string when nothing usable remains (including ``.`` and ``..``).
        """
        if text is None:
            return ""

        value = unicodedata.normalize("NFC", str(text))
        value = cls.CONTROL_CHARACTERS.sub("", value)
        value = cls.FORBIDDEN_PATTERN.sub(cls.REPLACEMENT, value)
        value = cls.WHITESPACE_RUN.sub(" ", value).strip()
        value = value.rstrip(". ")

        if len(value.encode("utf-8")) > cls.MAX_SEGMENT_LENGTH:
            while len(value.encode("utf-8")) > cls.MAX_SEGMENT_LENGTH:
                value = value[:-1]
            value = value.rstrip(". ")

        return value

    @classmethod
    def has_forbidden_characters(cls, text: str) -> bool:
        """Return True when ``text`` contains a forbidden or control character."""

        return any(char in cls.FORBIDDEN_CHARACTERS for char in text) or bool(
            cls.CONTROL_CHARACTERS.search(text)
        )


__all__ = ["Sanitizer"]
