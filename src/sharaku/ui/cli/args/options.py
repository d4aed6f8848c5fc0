"""Command line argument options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from sharaku.features.library import ImportMode


@final
@dataclass(slots=True)
class DiscoverArgs:
    """Command line arguments for the ``discover`` subcommand."""

    command: Literal["discover"]
    root: Path
    import_new: bool
    mode: ImportMode
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ImportArgs:
    """Command line arguments for the ``import`` subcommand."""

    command: Literal["import"]
    source: Path
    title: str
    artist: str | None
    year: int | None
    genre: str | None
    circle: str | None
    origin: str | None
    mode: ImportMode
    dry_run: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class RelocateArgs:
    """Command line arguments for the ``relocate`` subcommand."""

    command: Literal["relocate"]
    template: str
    apply: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class RescanArgs:
    """Command line arguments for the ``rescan`` subcommand."""

    command: Literal["rescan"]
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class TemplateArgs:
    """Command line arguments for the ``template`` subcommand."""

    command: Literal["template"]
    action: Literal["validate", "preview"]
    template: str
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ConfigArgs:
    """Command line arguments for the ``config`` subcommand."""

    command: Literal["config"]
    library_root: Path | None
    template: str | None
    type_label_image: str | None
    type_label_folder: str | None
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class WorksArgs:
    """Command line arguments for the ``works`` subcommand."""

    command: Literal["works"]
    action: Literal["list", "show", "delete"]
    work_id: int | None
    verbose: bool
    quiet: bool


CLIArgs = DiscoverArgs | ImportArgs | RelocateArgs | RescanArgs | TemplateArgs | ConfigArgs | WorksArgs

__all__ = [
    "CLIArgs",
    "ConfigArgs",
    "DiscoverArgs",
    "ImportArgs",
    "RelocateArgs",
    "RescanArgs",
    "TemplateArgs",
    "WorksArgs",
]
