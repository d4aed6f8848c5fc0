"""Import a single folder with explicit metadata."""

from __future__ import annotations

from typing import final, override

from rich.markup import escape

from sharaku.application.services.library_service import LibrarySyncService
from sharaku.features.library import ImportRequest
from sharaku.shared import WorkMetadata
from sharaku.ui.cli.args.options import ImportArgs
from sharaku.ui.cli.commands.executor import CommandExecutor


@final
class ImportCommand(CommandExecutor[ImportArgs]):
    """Import one work, or print its destination with ``--dry-run``."""

    @override
    def run(self, service: LibrarySyncService) -> bool:
        metadata = WorkMetadata(
            title=self.args.title,
            artist=self.args.artist,
            year=self.args.year,
            genre=self.args.genre,
            circle=self.args.circle,
            origin=self.args.origin,
        )

        if self.args.dry_run:
            destination = service.preview_import_path(metadata)
            self.result_display.console.print(
                f"[yellow]Would import to:[/yellow] {escape(str(destination))}"
            )
            return True

        result = service.import_one(
            ImportRequest(source=self.args.source, metadata=metadata, mode=self.args.mode)
        )
        self.result_display.show_import_result(result, quiet=self.args.quiet)
        return True
