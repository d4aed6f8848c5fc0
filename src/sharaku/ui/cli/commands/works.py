"""Inspect or forget catalog entries."""

from __future__ import annotations

from typing import final, override

from sharaku.application.services.library_service import LibrarySyncService
from sharaku.ui.cli.args.options import WorksArgs
from sharaku.ui.cli.commands.executor import CommandExecutor


@final
class WorksCommand(CommandExecutor[WorksArgs]):
    """List, show or delete registered works."""

    @override
    def run(self, service: LibrarySyncService) -> bool:
        if self.args.action == "list":
            self.result_display.show_works(service.list_works(), quiet=self.args.quiet)
            return True

        assert self.args.work_id is not None
        if self.args.action == "show":
            self.result_display.show_work(service.get_work(self.args.work_id))
            return True

        service.delete_work(self.args.work_id)
        if not self.args.quiet:
            self.result_display.console.print(
                f"[green]Forgot work #{self.args.work_id}[/green] (files left on disk)"
            )
        return True
