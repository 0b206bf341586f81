"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from prunectl.core.paths import (
    APP_NAME,
    ensure_config_dir,
    ensure_state_dir,
    get_config_dir,
    get_config_path,
    get_inventory_path,
    get_state_dir,
    get_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ):
            os.environ.pop("XDG_CONFIG_HOME", None)
            result = get_config_dir()
            expected = Path.home() / ".config" / APP_NAME

        assert result == expected

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestGetStateDir:
    """Tests for get_state_dir function."""

    def test_default_state_dir(self) -> None:
        """get_state_dir returns default path when XDG_STATE_HOME not set."""
        with patch.dict(os.environ):
            os.environ.pop("XDG_STATE_HOME", None)
            result = get_state_dir()
            expected = Path.home() / ".local" / "state" / APP_NAME

        assert result == expected

    def test_respects_xdg_state_home(self, tmp_path: Path) -> None:
        """get_state_dir respects XDG_STATE_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            result = get_state_dir()

        assert result == tmp_path / APP_NAME


class TestFilePaths:
    """Tests for file path helpers."""

    def test_file_locations(self, isolated_dirs: Path) -> None:
        """Config files live in the config dir, snapshots in the state dir."""
        assert get_config_path() == isolated_dirs / "config" / APP_NAME / "config.toml"
        assert get_theme_path() == isolated_dirs / "config" / APP_NAME / "theme.toml"
        assert get_inventory_path() == isolated_dirs / "state" / APP_NAME / "inventory.jsonl"


class TestEnsureDirs:
    """Tests for directory creation."""

    def test_ensure_creates_dirs(self, isolated_dirs: Path) -> None:
        """ensure_* creates the directories."""
        assert ensure_config_dir().is_dir()
        assert ensure_state_dir().is_dir()

    def test_ensure_permission_error(self, isolated_dirs: Path) -> None:
        """Permission problems are reported as RuntimeError."""
        with (
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_state_dir()
