"""src/sharaku/ui/cli/display/result.py
What: Render user-facing summaries for discovery, import, relocation and rescan flows.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sharaku.features.catalog import Work
from sharaku.features.library import (
    BulkImportSummary,
    DiscoveredFolder,
    ImportResult,
    RelocationPreview,
    RelocationSummary,
    RescanSummary,
)


def _table(title: str) -> Table:
    return Table(
        title=title,
        show_header=True,
        header_style="bold magenta",
        box=box.SIMPLE_HEAD,
        highlight=True,
    )


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        """Initialize result display."""
        self.console = console or Console()

    def show_discovered(self, folders: Sequence[DiscoveredFolder], *, quiet: bool = False) -> None:
        if quiet:
            return
        if not folders:
            self.console.print("[yellow]No importable folders found.[/yellow]")
            return

        table = _table("Discovered Folders")
        table.add_column("Folder", style="bold")
        table.add_column("Pages", justify="right")
        table.add_column("Artist")
        table.add_column("Title")
        table.add_column("Status")
        for folder in folders:
            status = "[dim]registered[/dim]" if folder.already_registered else "[green]new[/green]"
            table.add_row(
                escape(str(folder.path)),
                str(folder.image_count),
                escape(folder.parsed_metadata.artist or "-"),
                escape(folder.parsed_metadata.title),
                status,
            )
        self.console.print(table)

    def show_import_result(self, result: ImportResult, *, quiet: bool = False) -> None:
        if quiet:
            return
        self.console.print(
            f"[green]Imported work #{result.work_id}[/green] "
            + f"({result.page_count} pages) → {escape(str(result.destination_path))}"
        )
        if result.leftover_source is not None:
            self.console.print(
                f"[yellow]Source left behind:[/yellow] {escape(str(result.leftover_source))}"
            )

    def show_bulk_summary(self, summary: BulkImportSummary, *, quiet: bool = False) -> None:
        """Print counts, then every failed item with its message."""

        if quiet:
            return

        self.console.print("\n[bold]Import Summary:[/bold]")
        self.console.print(f"Total folders: {summary.succeeded + summary.failed}")
        self.console.print(f"[green]Imported: {summary.succeeded}[/green]")
        for result in summary.results:
            if result.leftover_source is not None:
                self.console.print(
                    f"[yellow]  • Source left behind: {escape(str(result.leftover_source))}[/yellow]"
                )
        if not summary.failures:
            return
        self.console.print(f"[red]Failed: {summary.failed}[/red]")
        for failure in summary.failures:
            source = escape(str(failure.request.source))
            self.console.print(f"[red]  • {source}: {escape(failure.message)}[/red]")

    def show_relocation_preview(
        self, previews: Sequence[RelocationPreview], *, quiet: bool = False
    ) -> None:
        if quiet:
            return
        if not previews:
            self.console.print("[yellow]The catalog is empty.[/yellow]")
            return

        table = _table("Relocation Preview")
        table.add_column("ID", justify="right")
        table.add_column("Title", style="bold")
        table.add_column("Current")
        table.add_column("New")
        for preview in previews:
            new_path = "[dim]unchanged[/dim]" if preview.is_noop else escape(str(preview.new_path))
            table.add_row(
                str(preview.work_id), escape(preview.title), escape(str(preview.old_path)), new_path
            )
        self.console.print(table)

        pending = sum(1 for preview in previews if not preview.is_noop)
        self.console.print(f"{pending} of {len(previews)} works would move.")

    def show_relocation_summary(self, summary: RelocationSummary, *, quiet: bool = False) -> None:
        if quiet:
            return

        self.console.print("\n[bold]Relocation Summary:[/bold]")
        self.console.print(f"[green]Relocated: {summary.relocated}[/green]")
        if summary.skipped:
            self.console.print(f"[yellow]Skipped: {summary.skipped}[/yellow]")
        for path in summary.leftover_sources:
            self.console.print(f"[yellow]  • Source left behind: {escape(str(path))}[/yellow]")
        if not summary.failures:
            return
        self.console.print(f"[red]Failed: {summary.failed}[/red]")
        for failure in summary.failures:
            note = " (moved on disk, catalog not updated)" if failure.moved_on_disk else ""
            self.console.print(
                f"[red]  • {escape(str(failure.old_path))} → {escape(str(failure.new_path))}: "
                + f"{escape(failure.message)}{note}[/red]"
            )

    def show_rescan_summary(self, summary: RescanSummary, *, quiet: bool = False) -> None:
        if quiet:
            return

        self.console.print("\n[bold]Rescan Summary:[/bold]")
        self.console.print(f"[green]Registered: {summary.registered}[/green]")
        for path in summary.registered_paths:
            self.console.print(f"  + {escape(str(path))}")
        if summary.failed:
            self.console.print(f"[red]Failed: {summary.failed}[/red]")
        if summary.flagged:
            self.console.print(f"[yellow]Flagged: {len(summary.flagged)}[/yellow]")
            for flagged in summary.flagged:
                self.console.print(
                    f"[yellow]  • #{flagged.work_id} {escape(str(flagged.path))}: "
                    + f"{flagged.reason}[/yellow]"
                )

    def show_works(self, works: Sequence[Work], *, quiet: bool = False) -> None:
        if quiet:
            return
        if not works:
            self.console.print("[yellow]No works registered.[/yellow]")
            return

        table = _table("Works")
        table.add_column("ID", justify="right")
        table.add_column("Title", style="bold")
        table.add_column("Artist")
        table.add_column("Pages", justify="right")
        table.add_column("Path", style="dim")
        for work in works:
            table.add_row(
                str(work.id),
                escape(work.title),
                escape(work.artist or "-"),
                str(work.page_count),
                escape(str(work.path)),
            )
        self.console.print(table)

    def show_work(self, work: Work, *, quiet: bool = False) -> None:
        if quiet:
            return
        self.console.print(f"[bold]#{work.id} {escape(work.title)}[/bold]")
        fields = (
            ("Artist", work.artist),
            ("Year", work.year),
            ("Genre", work.genre),
            ("Circle", work.circle),
            ("Origin", work.origin),
            ("Type", work.work_type),
            ("Pages", work.page_count),
            ("Path", work.path),
            ("Added", work.created_at.isoformat(timespec="seconds")),
        )
        for label, value in fields:
            if value is None:
                continue
            self.console.print(f"  {label}: {escape(str(value))}")
