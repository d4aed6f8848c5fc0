"""Command line interface package."""

from sharaku.ui.cli.cli import main

__all__ = ["main"]
