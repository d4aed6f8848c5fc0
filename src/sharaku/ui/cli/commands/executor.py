"""src/sharaku/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Every catalog-backed command opens the database and builds the service the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Generic, TypeVar

from rich.console import Console

from sharaku.application.services.library_service import LibrarySyncService
from sharaku.config.config import Config
from sharaku.platform.db.db_manager import DatabaseManager
from sharaku.ui.cli.args.options import CLIArgs
from sharaku.ui.cli.display.progress import ProgressDisplay, progress_console
from sharaku.ui.cli.display.result import ResultDisplay

A = TypeVar("A", bound=CLIArgs)

ServiceFactory = Callable[[Config, DatabaseManager], LibrarySyncService]


def _default_service_factory(config: Config, db_manager: DatabaseManager) -> LibrarySyncService:
    return LibrarySyncService.from_config(config, db_manager)


class CommandExecutor(ABC, Generic[A]):
    """Base class for commands that need the catalog."""

    args: A
    config: Config
    progress_display: ProgressDisplay
    result_display: ResultDisplay

    def __init__(
        self,
        args: A,
        config: Config,
        *,
        db_manager_factory: Callable[[Path | None], DatabaseManager] | None = None,
        service_factory: ServiceFactory | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            config: Loaded configuration.
            db_manager_factory: Builds the database manager from the configured path.
            service_factory: Builds the application service around an open database.
            console: Console used for result output.
        """
        self.args = args
        self.config = config
        self._db_manager_factory = db_manager_factory or DatabaseManager
        self._service_factory = service_factory or _default_service_factory
        self.progress_display = ProgressDisplay()
        self.result_display = ResultDisplay(console or progress_console())

    def execute(self) -> bool:
        """Run the command; ``False`` means at least one item failed."""

        manager = self._db_manager_factory(self.config.database_path)
        with manager as db_manager:
            service = self._service_factory(self.config, db_manager)
            return self.run(service)

    @abstractmethod
    def run(self, service: LibrarySyncService) -> bool:
        """Execute the command against an open service."""
        ...
