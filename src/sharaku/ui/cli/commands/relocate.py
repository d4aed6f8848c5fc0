"""Preview or apply a new directory layout."""

from __future__ import annotations

from typing import final, override

from sharaku.application.services.library_service import LibrarySyncService
from sharaku.ui.cli.args.options import RelocateArgs
from sharaku.ui.cli.commands.executor import CommandExecutor


@final
class RelocateCommand(CommandExecutor[RelocateArgs]):
    """Show the relocation plan; move works when ``--apply`` is given."""

    @override
    def run(self, service: LibrarySyncService) -> bool:
        previews = service.preview_relocation(self.args.template)
        self.result_display.show_relocation_preview(previews, quiet=self.args.quiet)

        if not self.args.apply:
            if not self.args.quiet:
                self.result_display.console.print("[dim]Run again with --apply to move the works.[/dim]")
            return True

        # Committing the template (not the preview) saves it as the configured layout.
        summary = self.progress_display.run(
            service.commit_relocation(self.args.template), "Relocating", quiet=self.args.quiet
        )
        self.result_display.show_relocation_summary(summary, quiet=self.args.quiet)
        return summary.failed == 0
