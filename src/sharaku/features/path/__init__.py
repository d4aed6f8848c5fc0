# Path: `src/sharaku/features/path/__init__.py`
# Summary: Export directory template and sanitizer symbols.
# Why: Provide a stable import surface for use cases and tests.

from .domain.sanitizer import Sanitizer
from .domain.template import (
    PLACEHOLDERS,
    SAMPLE_METADATA,
    TemplateError,
    TemplateValidation,
    TypeLabels,
    preview_template,
    render_template,
    resolve_destination,
    validate_template,
)

__all__ = [
    "PLACEHOLDERS",
    "SAMPLE_METADATA",
    "Sanitizer",
    "TemplateError",
    "TemplateValidation",
    "TypeLabels",
    "preview_template",
    "render_template",
    "resolve_destination",
    "validate_template",
]
