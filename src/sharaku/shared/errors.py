"""Root of the sharaku exception hierarchy."""

from __future__ import annotations


class SharakuError(Exception):
    """Base class for every error raised deliberately by sharaku."""


__all__ = ["SharakuError"]
