"""Command line argument parser."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from sharaku.config.config import Config
from sharaku.features.library import ImportMode
from sharaku.features.path import PLACEHOLDERS
from sharaku.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
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

_TEMPLATE_HELP = "Directory template, e.g. '{artist}/{title}'. Placeholders: " + ", ".join(
    "{" + name + "}" for name in sorted(PLACEHOLDERS)
)


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="sharaku",
            description="sharaku - keep a library of page-based works organized on disk.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        discover_parser = subparsers.add_parser(
            "discover",
            help="Find folders of images below ROOT that could be imported",
        )
        _ = discover_parser.add_argument(
            "root",
            type=str,
            help="Directory to scan recursively",
            metavar="ROOT",
        )
        _ = discover_parser.add_argument(
            "--import",
            dest="import_new",
            action="store_true",
            help="Import every discovered folder that is not registered yet",
        )
        ArgumentParser._add_mode_argument(discover_parser)
        ArgumentParser._add_verbosity_arguments(discover_parser)

        import_parser = subparsers.add_parser(
            "import",
            help="Import one folder into the library",
        )
        _ = import_parser.add_argument(
            "source",
            type=str,
            help="Folder containing the pages of the work",
            metavar="SOURCE",
        )
        _ = import_parser.add_argument("--title", type=str, required=True, help="Work title")
        _ = import_parser.add_argument("--artist", type=str, help="Artist name")
        _ = import_parser.add_argument("--year", type=int, help="Publication year")
        _ = import_parser.add_argument("--genre", type=str, help="Genre")
        _ = import_parser.add_argument("--circle", type=str, help="Circle or group")
        _ = import_parser.add_argument("--origin", type=str, help="Original series")
        _ = import_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only print the destination the import would use",
        )
        ArgumentParser._add_mode_argument(import_parser)
        ArgumentParser._add_verbosity_arguments(import_parser)

        relocate_parser = subparsers.add_parser(
            "relocate",
            help="Preview (or apply with --apply) moving every work to a new layout",
        )
        _ = relocate_parser.add_argument("template", type=str, help=_TEMPLATE_HELP, metavar="TEMPLATE")
        _ = relocate_parser.add_argument(
            "--apply",
            action="store_true",
            help="Move the directories and update the catalog",
        )
        ArgumentParser._add_verbosity_arguments(relocate_parser)

        rescan_parser = subparsers.add_parser(
            "rescan",
            help="Reconcile the catalog with the library directory",
        )
        ArgumentParser._add_verbosity_arguments(rescan_parser)

        template_parser = subparsers.add_parser(
            "template",
            help="Validate or preview a directory template",
        )
        _ = template_parser.add_argument(
            "action",
            choices=["validate", "preview"],
            help="validate: check syntax; preview: render with sample metadata",
        )
        _ = template_parser.add_argument("template", type=str, help=_TEMPLATE_HELP, metavar="TEMPLATE")
        ArgumentParser._add_verbosity_arguments(template_parser)

        config_parser = subparsers.add_parser(
            "config",
            help="Show or update the configuration",
        )
        _ = config_parser.add_argument("--library-root", type=str, help="Managed library directory")
        _ = config_parser.add_argument("--template", type=str, help=_TEMPLATE_HELP)
        _ = config_parser.add_argument("--type-label-image", type=str, help="Label for {type} of images")
        _ = config_parser.add_argument("--type-label-folder", type=str, help="Label for {type} of folders")
        ArgumentParser._add_verbosity_arguments(config_parser)

        works_parser = subparsers.add_parser(
            "works",
            help="List, show or forget registered works",
        )
        _ = works_parser.add_argument("action", choices=["list", "show", "delete"])
        _ = works_parser.add_argument("work_id", type=int, nargs="?", metavar="ID")
        ArgumentParser._add_verbosity_arguments(works_parser)

        return parser

    @staticmethod
    def process_args(
        args_list: Sequence[str] | None = None,
        config: Config | None = None,
    ) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
            config: Loaded configuration; loaded from disk when omitted.

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If arguments are invalid.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = config or Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command
        verbosity = {"verbose": is_verbose, "quiet": is_quiet}

        if command == "discover":
            return DiscoverArgs(
                command="discover",
                root=Path(parsed_args.root).expanduser(),
                import_new=parsed_args.import_new,
                mode=ImportMode.from_user_input(parsed_args.mode),
                **verbosity,
            )

        if command == "import":
            return ArgumentParser._process_import(parsed_args, verbosity)

        if command == "relocate":
            return RelocateArgs(
                command="relocate",
                template=parsed_args.template,
                apply=parsed_args.apply,
                **verbosity,
            )

        if command == "rescan":
            return RescanArgs(command="rescan", **verbosity)

        if command == "template":
            return TemplateArgs(
                command="template",
                action=parsed_args.action,
                template=parsed_args.template,
                **verbosity,
            )

        if command == "config":
            return ConfigArgs(
                command="config",
                library_root=Path(parsed_args.library_root).expanduser()
                if parsed_args.library_root
                else None,
                template=parsed_args.template,
                type_label_image=parsed_args.type_label_image,
                type_label_folder=parsed_args.type_label_folder,
                **verbosity,
            )

        if command == "works":
            if parsed_args.action in {"show", "delete"} and parsed_args.work_id is None:
                logger.error("works %s requires a work ID", parsed_args.action)
                sys.exit(2)
            return WorksArgs(
                command="works",
                action=parsed_args.action,
                work_id=parsed_args.work_id,
                **verbosity,
            )

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _add_mode_argument(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--mode",
            type=str,
            choices=[mode.value for mode in ImportMode],
            default=ImportMode.COPY.value,
            help="copy leaves the source untouched; move relocates it (default: %(default)s)",
        )

    @staticmethod
    def _add_verbosity_arguments(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _process_import(parsed_args: argparse.Namespace, verbosity: dict[str, bool]) -> ImportArgs:
        title = parsed_args.title.strip()
        if not title:
            logger.error("Title must not be empty")
            sys.exit(2)

        return ImportArgs(
            command="import",
            source=Path(parsed_args.source).expanduser(),
            title=title,
            artist=parsed_args.artist,
            year=parsed_args.year,
            genre=parsed_args.genre,
            circle=parsed_args.circle,
            origin=parsed_args.origin,
            mode=ImportMode.from_user_input(parsed_args.mode),
            dry_run=parsed_args.dry_run,
            **verbosity,
        )
