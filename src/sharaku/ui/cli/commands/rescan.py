"""Reconcile the catalog with the library directory."""

from __future__ import annotations

from typing import final, override

from sharaku.application.services.library_service import LibrarySyncService
from sharaku.ui.cli.args.options import RescanArgs
from sharaku.ui.cli.commands.executor import CommandExecutor


@final
class RescanCommand(CommandExecutor[RescanArgs]):
    """Register orphan folders and flag broken catalog entries."""

    @override
    def run(self, service: LibrarySyncService) -> bool:
        summary = self.progress_display.run(service.rescan(), "Rescanning", quiet=self.args.quiet)
        self.result_display.show_rescan_summary(summary, quiet=self.args.quiet)
        return summary.failed == 0
