"""Command line argument handling package."""

from sharaku.ui.cli.args.parser import ArgumentParser
from sharaku.ui.cli.args.options import (
    CLIArgs,
    ConfigArgs,
    DiscoverArgs,
    ImportArgs,
    RelocateArgs,
    RescanArgs,
    TemplateArgs,
    WorksArgs,
)

__all__ = [
    "ArgumentParser",
    "CLIArgs",
    "ConfigArgs",
    "DiscoverArgs",
    "ImportArgs",
    "RelocateArgs",
    "RescanArgs",
    "TemplateArgs",
    "WorksArgs",
]
