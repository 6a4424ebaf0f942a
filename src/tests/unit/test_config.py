"""Tests for notevault.core.config."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

import notevault.core.config as config
from notevault.core.errors import ConfigError


class TestEnvHelpers:
    """Tests for environment variable helpers."""

    def test_get_env_returns_value(self, monkeypatch):
        monkeypatch.setenv("TEST_VAR", "test_value")

        assert config.get_env("TEST_VAR") == "test_value"

    def test_get_env_returns_default(self, monkeypatch):
        monkeypatch.delenv("NONEXISTENT_VAR", raising=False)

        assert config.get_env("NONEXISTENT_VAR", "default") == "default"

    @pytest.mark.parametrize(
        "value,default,expected",
        [
            ("42", 0, 42),
            ("not_a_number", 99, 99),
            (None, 123, 123),
        ],
    )
    def test_get_env_int(self, monkeypatch, value, default, expected):
        """get_env_int parses or falls back to default."""
        if value is None:
            monkeypatch.delenv("INT_VAR", raising=False)
        else:
            monkeypatch.setenv("INT_VAR", value)

        assert config.get_env_int("INT_VAR", default) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("1", True),
            ("yes", True),
            ("false", False),
            ("0", False),
            ("maybe", False),
        ],
    )
    def test_get_env_bool(self, monkeypatch, value, expected):
        monkeypatch.setenv("BOOL_VAR", value)

        assert config.get_env_bool("BOOL_VAR") is expected


class TestDefaultDataDir:
    """Tests for per-OS data directory resolution."""

    def test_linux(self, monkeypatch):
        monkeypatch.setattr(config.sys, "platform", "linux")

        assert config.default_data_dir() == Path.home() / ".notevault"

    def test_macos(self, monkeypatch):
        monkeypatch.setattr(config.sys, "platform", "darwin")

        expected = Path.home() / "Library" / "Application Support" / "notevault"
        assert config.default_data_dir() == expected

    def test_other_uses_xdg(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config.sys, "platform", "freebsd13")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert config.default_data_dir() == tmp_path / "notevault"


class TestLoadSettings:
    """Tests for notevault.yaml loading."""

    def test_defaults_when_missing(self, tmp_path: Path):
        assert config.load_settings(tmp_path) == config.StorageSettings()

    def test_defaults_when_empty(self, tmp_path: Path):
        (tmp_path / "notevault.yaml").write_text("")

        assert config.load_settings(tmp_path) == config.StorageSettings()

    def test_loads_values(self, tmp_path: Path):
        (tmp_path / "notevault.yaml").write_text(
            'metadata_dir: ".meta"\ncanvas_extension: ".board"\n'
        )

        settings = config.load_settings(tmp_path)

        assert settings.metadata_dir == ".meta"
        assert settings.canvas_extension == ".board"
        assert settings.hidden_prefix == "."

    def test_invalid_yaml_raises(self, tmp_path: Path):
        (tmp_path / "notevault.yaml").write_text("invalid: yaml: content: [")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            config.load_settings(tmp_path)

    def test_non_mapping_raises(self, tmp_path: Path):
        (tmp_path / "notevault.yaml").write_text("- item1\n- item2")

        with pytest.raises(ConfigError, match="must be a mapping"):
            config.load_settings(tmp_path)

    def test_unknown_key_rejected(self, tmp_path: Path):
        (tmp_path / "notevault.yaml").write_text("metdata_dir: .meta")

        with pytest.raises(ValidationError):
            config.load_settings(tmp_path)

    def test_json_indent_from_env(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("NOTEVAULT_JSON_INDENT", "4")

        assert config.load_settings(tmp_path).json_indent == 4

    def test_env_indent_overrides_file(self, monkeypatch, tmp_path: Path):
        (tmp_path / "notevault.yaml").write_text("json_indent: 0\nmetadata_dir: .meta\n")
        monkeypatch.setenv("NOTEVAULT_JSON_INDENT", "3")

        settings = config.load_settings(tmp_path)

        assert settings.json_indent == 3
        assert settings.metadata_dir == ".meta"

    def test_invalid_env_indent_keeps_file_value(self, monkeypatch, tmp_path: Path):
        (tmp_path / "notevault.yaml").write_text("json_indent: 0\n")
        monkeypatch.setenv("NOTEVAULT_JSON_INDENT", "wide")

        assert config.load_settings(tmp_path).json_indent == 0


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.fixture
    def captured(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            config.logging, "basicConfig", lambda **kwargs: calls.append(kwargs)
        )
        return calls

    def test_uses_log_level(self, monkeypatch, captured):
        monkeypatch.delenv("NOTEVAULT_DEBUG", raising=False)
        monkeypatch.setattr(config, "LOG_LEVEL", "warning")

        config.setup_logging()

        assert captured[0]["level"] == logging.WARNING

    def test_debug_env_forces_debug(self, monkeypatch, captured):
        monkeypatch.setenv("NOTEVAULT_DEBUG", "true")
        monkeypatch.setattr(config, "LOG_LEVEL", "ERROR")

        config.setup_logging()

        assert captured[0]["level"] == logging.DEBUG


class TestHiddenRules:
    """Tests for StorageSettings hidden-entry helpers."""

    @pytest.mark.parametrize(
        "relative_path,hidden",
        [
            ("notes/a.md", False),
            (".notevault/tree.json", True),
            ("notes/.git/config", True),
            ("notes/..", True),
            ("", False),
        ],
    )
    def test_hides(self, relative_path, hidden):
        assert config.StorageSettings().hides(relative_path) is hidden
