# Path: `src/sharaku/features/metadata/__init__.py`
# Summary: Export the folder name parser.
# Why: Keep callers independent of the module layout.

from .domain.folder_name_parser import ParsedMetadata, parse_folder_name

__all__ = ["ParsedMetadata", "parse_folder_name"]
