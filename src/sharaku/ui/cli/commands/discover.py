"""Discover (and optionally import) candidate folders."""

from __future__ import annotations

from typing import final, override

from sharaku.application.services.library_service import LibrarySyncService
from sharaku.ui.cli.args.options import DiscoverArgs
from sharaku.ui.cli.commands.executor import CommandExecutor


@final
class DiscoverCommand(CommandExecutor[DiscoverArgs]):
    """List importable folders below a root, importing new ones on request."""

    @override
    def run(self, service: LibrarySyncService) -> bool:
        folders = self.progress_display.run(
            service.discover(self.args.root), "Scanning", quiet=self.args.quiet
        )
        self.result_display.show_discovered(folders, quiet=self.args.quiet)

        if not self.args.import_new:
            return True

        requests = [
            folder.to_import_request(self.args.mode)
            for folder in folders
            if not folder.already_registered
        ]
        if not requests:
            self.result_display.console.print("Nothing new to import.")
            return True

        summary = self.progress_display.run(
            service.import_bulk(requests), "Importing", quiet=self.args.quiet
        )
        self.result_display.show_bulk_summary(summary, quiet=self.args.quiet)
        return summary.failed == 0
