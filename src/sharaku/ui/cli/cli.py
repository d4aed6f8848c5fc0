"""Command line interface for sharaku."""

from __future__ import annotations

import sys
from typing import final

from sharaku.config.config import Config
from sharaku.features.library import OperationCancelledError
from sharaku.platform.logging import logger
from sharaku.shared import SharakuError
from sharaku.ui.cli.args import ArgumentParser
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
from sharaku.ui.cli.commands import (
    ConfigCommand,
    DiscoverCommand,
    ImportCommand,
    RelocateCommand,
    RescanCommand,
    TemplateCommand,
    WorksCommand,
)


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            config = Config.load()
            args: CLIArgs = ArgumentParser.process_args(args_list, config)
            if not CommandProcessor._dispatch(args, config):
                sys.exit(1)

        except OperationCancelledError as e:
            logger.warning("%s; partial results were kept", e)
            sys.exit(130)
        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except SharakuError as e:
            logger.error("%s", e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)

    @staticmethod
    def _dispatch(args: CLIArgs, config: Config) -> bool:
        if isinstance(args, DiscoverArgs):
            return DiscoverCommand(args, config).execute()
        if isinstance(args, ImportArgs):
            return ImportCommand(args, config).execute()
        if isinstance(args, RelocateArgs):
            return RelocateCommand(args, config).execute()
        if isinstance(args, RescanArgs):
            return RescanCommand(args, config).execute()
        if isinstance(args, TemplateArgs):
            return TemplateCommand(args, config).execute()
        if isinstance(args, ConfigArgs):
            return ConfigCommand(args, config).execute()
        assert isinstance(args, WorksArgs)
        return WorksCommand(args, config).execute()


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures call ``sys.exit(...)``
        from ``process_command``, so this return is only reached on success.
    """
    CommandProcessor.process_command()
    return 0
