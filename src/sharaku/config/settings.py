"""Where: src/sharaku/config/settings.py
What: Runtime constants shared by the library synchronization engine.
Why: Expose validated defaults to feature layers without file I/O.
Assumptions: - Image detection is extension based; file contents are never decoded.
Trade-offs: - Extension list is fixed rather than user configurable.
"""

from __future__ import annotations

from typing import Final

# Image-like files -----------------------------------------------------------

# Lower-case extensions (without dot) treated as pages of a work.
IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {"jpg", "jpeg", "png", "gif", "webp", "bmp"}
)


# Directory templates --------------------------------------------------------

# Layout used when no template has been configured.
DEFAULT_DIRECTORY_TEMPLATE: Final[str] = "{artist}/{title}"

# Segment substituted for placeholders whose metadata field is absent.
UNKNOWN_SEGMENT: Final[str] = "Unknown"

# Title used when a folder name yields nothing usable.
UNTITLED_PLACEHOLDER: Final[str] = "Untitled"

# Hex digits in the in-plan collision suffix (``name_0001`` ... ``name_000a``).
COLLISION_SUFFIX_WIDTH: Final[int] = 4


# Work type labels -----------------------------------------------------------

WORK_TYPE_FOLDER: Final[str] = "folder"
WORK_TYPE_IMAGE: Final[str] = "image"
DEFAULT_TYPE_LABEL_FOLDER: Final[str] = "Folder"
DEFAULT_TYPE_LABEL_IMAGE: Final[str] = "Image"


# Scanning -------------------------------------------------------------------

# Directory names never treated as candidates nor descended into.
RESERVED_DIR_NAMES: Final[frozenset[str]] = frozenset(
    {"$RECYCLE.BIN", "System Volume Information", "__MACOSX", "@eaDir"}
)


# Progress streaming ---------------------------------------------------------

# Maximum number of undelivered progress events before the producer blocks.
EVENT_QUEUE_SIZE: Final[int] = 256


__all__ = [
    "COLLISION_SUFFIX_WIDTH",
    "DEFAULT_DIRECTORY_TEMPLATE",
    "DEFAULT_TYPE_LABEL_FOLDER",
    "DEFAULT_TYPE_LABEL_IMAGE",
    "EVENT_QUEUE_SIZE",
    "IMAGE_EXTENSIONS",
    "RESERVED_DIR_NAMES",
    "UNKNOWN_SEGMENT",
    "UNTITLED_PLACEHOLDER",
    "WORK_TYPE_FOLDER",
    "WORK_TYPE_IMAGE",
]
