"""src/sharaku/ui/cli/commands/config.py
What: Show or update the persisted configuration.
Why: Set the library root and layout without editing TOML by hand.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import final

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sharaku.config.config import Config
from sharaku.features.path import validate_template
from sharaku.ui.cli.args.options import ConfigArgs


@final
class ConfigCommand:
    """Apply the given overrides, save them, and print the result."""

    def __init__(
        self,
        args: ConfigArgs,
        config: Config,
        *,
        saver: Callable[[Config], Path] | None = None,
        console: Console | None = None,
    ) -> None:
        self._args = args
        self._config = config
        self._saver = saver or (lambda cfg: cfg.save())
        self._console = console or Console()

    def execute(self) -> bool:
        changed = False

        if self._args.template is not None:
            validation = validate_template(self._args.template)
            if not validation.valid:
                self._console.print(f"[red]Invalid template:[/red] {escape(validation.error or '')}")
                return False
            self._config.directory_template = self._args.template
            changed = True

        if self._args.library_root is not None:
            self._config.library_root = self._args.library_root.resolve()
            changed = True
        if self._args.type_label_image is not None:
            self._config.type_label_image = self._args.type_label_image
            changed = True
        if self._args.type_label_folder is not None:
            self._config.type_label_folder = self._args.type_label_folder
            changed = True

        if changed:
            target = self._saver(self._config)
            if not self._args.quiet:
                self._console.print(f"[green]Configuration saved to[/green] {escape(str(target))}")

        if not self._args.quiet:
            self._console.print(self._build_table())
        return True

    def _build_table(self) -> Table:
        table = Table(
            title="Configuration",
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE_HEAD,
        )
        table.add_column("Key", style="bold")
        table.add_column("Value")

        rows = (
            ("library_root", self._config.library_root),
            ("directory_template", self._config.directory_template),
            ("type_label_image", self._config.type_label_image),
            ("type_label_folder", self._config.type_label_folder),
            ("database_path", self._config.database_path),
            ("log_file", self._config.log_file),
        )
        for key, value in rows:
            display = "[dim]default[/dim]" if value is None else escape(str(value))
            table.add_row(key, display)
        return table
