# Where: sharaku.shared.__init__
# What: Provide a concise import surface for shared dataclasses and errors.
# Why: Encourage consistent reuse of shared value objects across features.

"""Shared cross-cutting value objects exposed at the package level."""

from .app_settings import AppSettings
from .errors import SharakuError
from .work_metadata import WorkMetadata

__all__ = ["AppSettings", "SharakuError", "WorkMetadata"]
