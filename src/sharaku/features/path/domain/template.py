"""
Summary: Validate directory templates and render them into relative managed paths.
Why: Give discovery, import and relocation one deterministic metadata-to-path mapping.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Final

from sharaku.config.settings import (
    DEFAULT_DIRECTORY_TEMPLATE,
    DEFAULT_TYPE_LABEL_FOLDER,
    DEFAULT_TYPE_LABEL_IMAGE,
    UNKNOWN_SEGMENT,
    WORK_TYPE_IMAGE,
)
from sharaku.shared import SharakuError, WorkMetadata

from .sanitizer import Sanitizer

PLACEHOLDERS: Final[frozenset[str]] = frozenset(
    {"title", "artist", "year", "genre", "circle", "origin", "type"}
)
REQUIRED_PLACEHOLDER: Final[str] = "title"
SEGMENT_SEPARATOR: Final[str] = "/"

_WINDOWS_DRIVE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z]:")

SAMPLE_METADATA: Final[WorkMetadata] = WorkMetadata(
    title="My Artwork",
    artist="Artist Name",
    year=2025,
    genre="Illustration",
    circle="Circle",
    origin="Original",
)


class TemplateError(SharakuError):
    """Raised when a template is invalid or renders to an unusable path."""


@dataclass(slots=True, frozen=True)
class TemplateValidation:
    """Outcome of ``validate_template``; ``error`` is None iff ``valid``."""

    valid: bool
    error: str | None = None


@dataclass(slots=True, frozen=True)
class TypeLabels:
    """Labels substituted for the ``{type}`` placeholder."""

    image: str = DEFAULT_TYPE_LABEL_IMAGE
    folder: str = DEFAULT_TYPE_LABEL_FOLDER

    def label_for(self, work_type: str) -> str:
        return self.image if work_type == WORK_TYPE_IMAGE else self.folder


@dataclass(slots=True, frozen=True)
class _Token:
    text: str
    is_placeholder: bool


def _tokenize_segment(segment: str) -> list[_Token]:
    """Split one template segment into literal and placeholder tokens.

    Raises:
        TemplateError: On unbalanced braces or empty placeholders.
    """
    tokens: list[_Token] = []
    literal: list[str] = []
    index = 0
    while index < len(segment):
        char = segment[index]
        if char == "}":
            raise TemplateError("Unmatched '}' in template")
        if char != "{":
            literal.append(char)
            index += 1
            continue
        close = segment.find("}", index + 1)
        nested = segment.find("{", index + 1)
        if close == -1 or (nested != -1 and nested < close):
            raise TemplateError("Unclosed placeholder in template")
        name = segment[index + 1 : close].strip()
        if not name:
            raise TemplateError("Empty placeholder in template")
        if literal:
            tokens.append(_Token("".join(literal), False))
            literal = []
        tokens.append(_Token(name, True))
        index = close + 1
    if literal:
        tokens.append(_Token("".join(literal), False))
    return tokens


def _parse(template: str) -> list[list[_Token]]:
    """Parse and check a template, returning tokens per path segment."""

    if not template or not template.strip():
        raise TemplateError("Template is empty")

    stripped = template.strip()
    if stripped.startswith(("/", "\\")) or _WINDOWS_DRIVE.match(stripped):
        raise TemplateError("Template must be a relative path")

    segments: list[list[_Token]] = []
    seen: set[str] = set()
    for raw_segment in stripped.split(SEGMENT_SEPARATOR):
        tokens = _tokenize_segment(raw_segment)
        literal_text = "".join(token.text for token in tokens if not token.is_placeholder)
        has_placeholder = any(token.is_placeholder for token in tokens)
        if not raw_segment.strip():
            raise TemplateError("Template contains an empty path segment")
        if raw_segment.strip() in {".", ".."}:
            raise TemplateError("Template must not contain '.' or '..' segments")
        if not has_placeholder and not raw_segment.strip().rstrip(". "):
            raise TemplateError("Template contains an empty path segment")
        if Sanitizer.has_forbidden_characters(literal_text):
            raise TemplateError('Template contains forbidden characters (\\ : * ? " < > |)')
        for token in tokens:
            if token.is_placeholder:
                if token.text not in PLACEHOLDERS:
                    raise TemplateError(f"Unknown placeholder: {{{token.text}}}")
                seen.add(token.text)
        segments.append(tokens)

    if REQUIRED_PLACEHOLDER not in seen:
        raise TemplateError("Template must contain {title}")
    return segments


def validate_template(template: str) -> TemplateValidation:
    """Check ``template`` without rendering it."""

    try:
        _ = _parse(template)
    except TemplateError as exc:
        return TemplateValidation(valid=False, error=str(exc))
    return TemplateValidation(valid=True)


def _placeholder_value(name: str, metadata: WorkMetadata, labels: TypeLabels) -> str:
    if name == "type":
        return Sanitizer.sanitize_segment(labels.label_for(metadata.work_type))
    value: str | int | None = getattr(metadata, name)
    if value is None:
        return UNKNOWN_SEGMENT
    return Sanitizer.sanitize_segment(value)


def render_template(
    template: str | None,
    metadata: WorkMetadata,
    labels: TypeLabels | None = None,
) -> str:
    """Render ``template`` into a relative path string using ``/`` separators.

    A ``None`` template selects the default layout. Absent metadata fields
    render as ``Unknown``; present values are sanitized into single segments.

    Raises:
        TemplateError: If the template is invalid or a segment renders empty.
    """
    segments = _parse(template if template is not None else DEFAULT_DIRECTORY_TEMPLATE)
    type_labels = labels or TypeLabels()

    rendered: list[str] = []
    for tokens in segments:
        parts = [
            _placeholder_value(token.text, metadata, type_labels) if token.is_placeholder else token.text
            for token in tokens
        ]
        segment = "".join(parts).strip().rstrip(". ")
        if not segment:
            raise TemplateError(f"Template renders an empty path segment for '{metadata.title}'")
        rendered.append(segment)

    relative = PurePosixPath(*rendered)
    if relative.is_absolute() or any(part in {".", ".."} for part in relative.parts):
        raise TemplateError(f"Rendered path escapes the library root: {relative}")
    return relative.as_posix()


def resolve_destination(
    library_root: Path,
    template: str | None,
    metadata: WorkMetadata,
    labels: TypeLabels | None = None,
) -> Path:
    """Render ``template`` and anchor it under ``library_root``.

    Raises:
        TemplateError: If rendering fails or the result is not strictly inside the root.
    """
    relative = render_template(template, metadata, labels)
    destination = library_root.joinpath(*relative.split(SEGMENT_SEPARATOR))
    if destination == library_root or not destination.is_relative_to(library_root):
        raise TemplateError(f"Rendered path escapes the library root: {relative}")
    return destination


def preview_template(template: str, labels: TypeLabels | None = None) -> str:
    """Render ``template`` against fixed sample metadata."""

    return render_template(template, SAMPLE_METADATA, labels)


__all__ = [
    "PLACEHOLDERS",
    "SAMPLE_METADATA",
    "TemplateError",
    "TemplateValidation",
    "TypeLabels",
    "preview_template",
    "render_template",
    "resolve_destination",
    "validate_template",
]
