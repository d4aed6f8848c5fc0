"""Validate or preview a directory template without touching the catalog."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from sharaku.config.config import Config
from sharaku.features.library.usecases.library_root import type_labels
from sharaku.features.path import TemplateError, preview_template, validate_template
from sharaku.ui.cli.args.options import TemplateArgs


@final
class TemplateCommand:
    """Report template syntax errors or render the sample layout."""

    def __init__(self, args: TemplateArgs, config: Config, *, console: Console | None = None) -> None:
        self._args = args
        self._config = config
        self._console = console or Console()

    def execute(self) -> bool:
        template = self._args.template

        if self._args.action == "validate":
            validation = validate_template(template)
            if validation.valid:
                self._console.print(f"[green]Valid template:[/green] {escape(template)}")
            else:
                self._console.print(f"[red]Invalid template:[/red] {escape(validation.error or '')}")
            return validation.valid

        try:
            rendered = preview_template(template, type_labels(self._config.get_settings()))
        except TemplateError as exc:
            self._console.print(f"[red]Invalid template:[/red] {escape(str(exc))}")
            return False
        self._console.print(f"{escape(template)} → [bold]{escape(rendered)}[/bold]")
        return True
