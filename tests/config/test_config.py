"""Test configuration management."""

import tomllib
from pathlib import Path

import pytest

from sharaku.config.config import Config, ConfigFileError
from sharaku.config.paths import default_config_path
from sharaku.config.settings import DEFAULT_TYPE_LABEL_FOLDER, DEFAULT_TYPE_LABEL_IMAGE


def test_default_config(portable_repo_root: Path) -> None:
    """Test default configuration creation at portable repo location."""
    _ = portable_repo_root
    config = Config()
    assert config.library_root is None
    assert config.directory_template is None
    assert config.type_label_image == DEFAULT_TYPE_LABEL_IMAGE
    assert config.type_label_folder == DEFAULT_TYPE_LABEL_FOLDER

    target = config.save()
    assert target == default_config_path()
    assert default_config_path().exists()


def test_load_creates_missing_file(portable_repo_root: Path) -> None:
    """Loading without a file writes the defaults and returns them."""
    _ = portable_repo_root
    assert not default_config_path().exists()

    config = Config.load()

    assert default_config_path().exists()
    assert config.library_root is None


def test_save_load_roundtrip(portable_repo_root: Path) -> None:
    """Test saving and loading configuration in TOML format at repo path."""
    original = Config(
        library_root=portable_repo_root / "library",
        directory_template="{artist}/{year}/{title}",
        type_label_image="Single",
        log_file=Path("/test/logs/sharaku.log"),
    )
    _ = original.save()

    loaded = Config.load()

    assert loaded.library_root == portable_repo_root / "library"
    assert loaded.directory_template == "{artist}/{year}/{title}"
    assert loaded.type_label_image == "Single"
    assert loaded.type_label_folder == DEFAULT_TYPE_LABEL_FOLDER
    assert loaded.log_file == Path("/test/logs/sharaku.log")
    assert loaded.database_path is None


def test_load_returns_fresh_instances(portable_repo_root: Path) -> None:
    """Each load reads the file again instead of returning a cached object."""
    _ = portable_repo_root
    first = Config.load()
    first.directory_template = "{title}"
    _ = first.save()

    second = Config.load()
    assert second is not first
    assert second.directory_template == "{title}"


def test_toml_output_is_commented_and_parseable(portable_repo_root: Path) -> None:
    """Saved TOML carries comments and escapes quotes and backslashes."""
    _ = portable_repo_root
    config = Config(directory_template='{artist}/"{title}"', type_label_folder="A\\B")
    target = config.save()

    content = target.read_text(encoding="utf-8")
    assert "#" in content

    parsed = tomllib.loads(content)
    assert parsed["directory_template"] == '{artist}/"{title}"'
    assert parsed["type_label_folder"] == "A\\B"
    assert "library_root" not in parsed


def test_blank_values_become_none(portable_repo_root: Path) -> None:
    """Empty strings from hand-edited files mean "use the default"."""
    _ = portable_repo_root
    config = Config(library_root="", directory_template="  ")  # pyright: ignore[reportArgumentType]
    assert config.library_root is None
    assert config.directory_template is None


def test_unknown_keys_are_ignored(portable_repo_root: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Unknown keys are dropped with a warning instead of failing the load."""
    _ = portable_repo_root
    target = default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    _ = target.write_text('directory_template = "{title}"\nmystery = 1\n', encoding="utf-8")

    with caplog.at_level("WARNING", logger="sharaku"):
        config = Config.load()

    assert config.directory_template == "{title}"
    assert "mystery" in caplog.text


def test_invalid_toml_raises(portable_repo_root: Path) -> None:
    """Malformed files surface as ConfigFileError."""
    _ = portable_repo_root
    target = default_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    _ = target.write_text("library_root = [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigFileError):
        _ = Config.load()


def test_get_settings_snapshot(tmp_path: Path) -> None:
    """The settings snapshot mirrors the engine-relevant fields."""
    config = Config(library_root=tmp_path, directory_template="{title}", type_label_folder="Book")
    settings = config.get_settings()
    assert settings.library_root == tmp_path
    assert settings.directory_template == "{title}"
    assert settings.type_label_folder == "Book"
