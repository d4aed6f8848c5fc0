"""sharaku - keep a library of page-based works organized on disk."""

__version__ = "0.1.0"
