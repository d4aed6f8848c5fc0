"""Command execution package for CLI."""

from sharaku.ui.cli.commands.config import ConfigCommand
from sharaku.ui.cli.commands.discover import DiscoverCommand
from sharaku.ui.cli.commands.executor import CommandExecutor
from sharaku.ui.cli.commands.importer import ImportCommand
from sharaku.ui.cli.commands.relocate import RelocateCommand
from sharaku.ui.cli.commands.rescan import RescanCommand
from sharaku.ui.cli.commands.template import TemplateCommand
from sharaku.ui.cli.commands.works import WorksCommand

__all__ = [
    "CommandExecutor",
    "ConfigCommand",
    "DiscoverCommand",
    "ImportCommand",
    "RelocateCommand",
    "RescanCommand",
    "TemplateCommand",
    "WorksCommand",
]
