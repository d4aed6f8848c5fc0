"""Tests for CLI functionality."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from sharaku.config.config import Config
from sharaku.features.library import ConfigurationError, OperationCancelledError
from sharaku.ui.cli import main
from sharaku.ui.cli.args.options import RescanArgs
from sharaku.ui.cli.cli import CommandProcessor


@pytest.fixture
def mock_config(mocker: MockerFixture, tmp_path: Path) -> Config:
    """Avoid reading the user's configuration."""
    config = Config(library_root=tmp_path, database_path=tmp_path / "catalog.db")
    _ = mocker.patch("sharaku.ui.cli.cli.Config.load", return_value=config)
    return config


@pytest.fixture
def mock_process_args(mocker: MockerFixture) -> MagicMock:
    """Skip logger setup and return fixed rescan arguments."""
    return mocker.patch(
        "sharaku.ui.cli.cli.ArgumentParser.process_args",
        return_value=RescanArgs(command="rescan", verbose=False, quiet=True),
    )


def test_process_command_success(
    mock_config: Config, mock_process_args: MagicMock, mocker: MockerFixture
) -> None:
    dispatch = mocker.patch.object(CommandProcessor, "_dispatch", return_value=True)

    CommandProcessor.process_command(["rescan", "--quiet"])

    mock_process_args.assert_called_once_with(["rescan", "--quiet"], mock_config)
    dispatch.assert_called_once_with(mock_process_args.return_value, mock_config)


def test_process_command_failed_items_exit_one(
    mock_config: Config, mock_process_args: MagicMock, mocker: MockerFixture
) -> None:
    _ = mocker.patch.object(CommandProcessor, "_dispatch", return_value=False)

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["rescan"])

    assert exc_info.value.code == 1


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (OperationCancelledError("rescan", 3), 130),
        (KeyboardInterrupt(), 130),
        (ConfigurationError("No library root configured"), 1),
        (RuntimeError("boom"), 1),
    ],
)
def test_process_command_maps_errors_to_exit_codes(
    mock_config: Config,
    mock_process_args: MagicMock,
    mocker: MockerFixture,
    error: BaseException,
    code: int,
) -> None:
    _ = mocker.patch.object(CommandProcessor, "_dispatch", side_effect=error)

    with pytest.raises(SystemExit) as exc_info:
        CommandProcessor.process_command(["rescan"])

    assert exc_info.value.code == code


def test_rescan_end_to_end(mock_config: Config, mock_process_args: MagicMock) -> None:
    """A real dispatch against an empty library succeeds."""
    CommandProcessor.process_command(["rescan", "--quiet"])

    assert mock_config.database_path is not None
    assert mock_config.database_path.exists()


def test_main_returns_zero(mocker: MockerFixture) -> None:
    process = mocker.patch("sharaku.ui.cli.cli.CommandProcessor.process_command")

    assert main() == 0
    process.assert_called_once_with()
