"""Rich console handler for structured library events.

Where: platform/logging/handlers.py
What: Render ``library_event`` log records with icons, counters and compact paths.
Why: Keep console formatting out of the use cases, which only attach extras.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class LibraryRichHandler(RichHandler):
    """Rich handler that styles library synchronization events."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "library.operation.start": ("🚀", "cyan"),
        "library.operation.complete": ("✅", "green"),
        "library.operation.cancelled": ("⏹️", "yellow"),
        "library.operation.error": ("❌", "red"),
        "library.import.start": ("📥", "blue"),
        "library.import.success": ("🎉", "green"),
        "library.import.error": ("⛔", "red"),
        "library.relocate.move": ("📦", "magenta"),
        "library.relocate.skip": ("↪️", "yellow"),
        "library.relocate.error": ("⛔", "red"),
        "library.rescan.orphan": ("🧩", "blue"),
        "library.rescan.missing": ("⚠️", "yellow"),
        "library.partial_commit": ("🩹", "red"),
        "library.source.leftover": ("🧹", "yellow"),
    }
    _EVENT_PREFIXES: ClassVar[dict[str, str]] = {
        "library.import.start": "Importing ",
        "library.import.success": "Imported ",
        "library.import.error": "Import failed ",
        "library.relocate.move": "Moving ",
        "library.relocate.skip": "Skipped ",
        "library.relocate.error": "Move failed ",
        "library.rescan.orphan": "Registered orphan ",
        "library.rescan.missing": "Needs attention ",
        "library.partial_commit": "Partial commit ",
        "library.source.leftover": "Source left behind ",
    }
    _ARROW_EVENTS: ClassVar[frozenset[str]] = frozenset(
        {
            "library.import.start",
            "library.import.success",
            "library.relocate.move",
            "library.partial_commit",
            "library.source.leftover",
        }
    )
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path with coloured separators and ellipsis truncation.

        Args:
            path: Absolute or relative path string to format.
            base: Optional base path used to relativize ``path`` when possible.

        Returns:
            Text: Styled, possibly truncated path.
        """
        pure_path = self._to_pure_path(path)
        base_path = self._to_pure_path(base) if base else None

        display_path: PurePath = pure_path
        if base_path is not None and self._is_relative_to(pure_path, base_path):
            relative_path = pure_path.relative_to(base_path)
            if str(relative_path) not in {"", "."}:
                display_path = relative_path

        separator = "\\" if isinstance(display_path, PureWindowsPath) else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT :]

        display_string = ""
        if anchor and not truncated:
            display_string = anchor if anchor.endswith(separator) else anchor + separator
        if truncated:
            display_string += "…" + separator
        display_string += separator.join(body_parts)
        if not display_string:
            display_string = "."

        text = Text()
        for char in display_string:
            if char in {separator, "/", "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    @staticmethod
    def _is_relative_to(path: PurePath, other: PurePath) -> bool:
        """Return whether ``path`` can be expressed relative to ``other``."""

        try:
            _ = path.relative_to(other)
            return True
        except ValueError:
            return False

    def _render_library_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render structured library events with dedicated styling."""

        event = getattr(record, "library_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        if event.startswith("library.operation"):
            operation = getattr(record, "operation", None) or "operation"
            _ = body.append(f"{str(operation).capitalize()} {event.rsplit('.', 1)[-1]}")
            metrics: list[str] = []
            for key in ("total", "succeeded", "relocated", "registered", "skipped", "flagged", "failed", "found"):
                value = getattr(record, key, None)
                if isinstance(value, int):
                    metrics.append(f"{key}={value}")
            error_message = getattr(record, "error_message", None)
            if error_message:
                metrics.append(str(error_message))
            if metrics:
                _ = body.append(" [" + ", ".join(metrics) + "]")
            root = getattr(record, "library_root", None)
            if root:
                _ = body.append(" @ ")
                _ = body.append_text(self._format_path(str(root)))
            _ = text.append_text(body)
            return text

        current = getattr(record, "current", None)
        total = getattr(record, "total", None)
        if isinstance(current, int) and current > 0:
            if isinstance(total, int) and total > 0:
                _ = body.append(f"[{current}/{total}] ")
            else:
                _ = body.append(f"[{current}] ")

        prefix = self._EVENT_PREFIXES.get(event)
        if prefix:
            _ = body.append(prefix)

        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)
        library_root = getattr(record, "library_root", None)
        if source_path:
            _ = body.append_text(self._format_path(str(source_path)))
        if event in self._ARROW_EVENTS and target_path:
            _ = body.append(" → ")
            _ = body.append_text(
                self._format_path(str(target_path), base=str(library_root) if library_root else None)
            )
        if not source_path and not target_path:
            _ = body.append(message)

        details: list[str] = []
        title = getattr(record, "title", None)
        if title:
            details.append(str(title))
        page_count = getattr(record, "page_count", None)
        if isinstance(page_count, int):
            details.append(f"{page_count} pages")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for library events."""

        library_text = self._render_library_message(record, message)
        if library_text is not None:
            return library_text
        return super().render_message(record, message)


__all__ = ["LibraryRichHandler"]
