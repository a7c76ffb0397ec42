"""Tests for IngestSettings and the global settings helpers."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from screenplay_ingest.config import (
    IngestSettings,
    get_settings,
    reset_settings,
    set_settings,
)
from screenplay_ingest.exceptions import ConfigurationError


class TestIngestSettingsDefaults:
    """Test defaults and validation."""

    def test_defaults(self):
        """Test the default values."""
        settings = IngestSettings(_env_file=None)

        assert settings.words_per_page == 250
        assert settings.fallback_encoding == "latin-1"
        assert settings.debug is False
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert settings.log_file is None

    def test_environment_prefix(self, monkeypatch):
        """Test that prefixed environment variables are read."""
        monkeypatch.setenv("SCREENPLAY_INGEST_WORDS_PER_PAGE", "200")
        monkeypatch.setenv("SCREENPLAY_INGEST_LOG_LEVEL", "info")

        settings = IngestSettings(_env_file=None)

        assert settings.words_per_page == 200
        assert settings.log_level == "INFO"

    def test_case_insensitive_logging_values(self):
        """Test log level and format normalization."""
        settings = IngestSettings(_env_file=None, log_level="debug", log_format="JSON")
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"words_per_page": 0},
            {"words_per_page": -10},
            {"log_level": "LOUD"},
            {"log_format": "xml"},
            {"fallback_encoding": "not-a-codec"},
        ],
    )
    def test_invalid_values(self, overrides):
        """Test that invalid values are rejected."""
        with pytest.raises(ValidationError):
            IngestSettings(_env_file=None, **overrides)

    def test_log_file_is_expanded(self, monkeypatch, tmp_path):
        """Test home and environment variable expansion of the log path."""
        monkeypatch.setenv("INGEST_LOGS", str(tmp_path))
        settings = IngestSettings(_env_file=None, log_file="$INGEST_LOGS/ingest.log")

        assert settings.log_file == (tmp_path / "ingest.log").resolve()
        assert settings.log_file.is_absolute()


class TestIngestSettingsFromFile:
    """Test loading settings from configuration files."""

    def test_yaml(self, tmp_path):
        """Test a YAML configuration file."""
        config = tmp_path / "ingest.yaml"
        config.write_text("words_per_page: 220\nlog_level: debug\n")

        settings = IngestSettings.from_file(config)

        assert settings.words_per_page == 220
        assert settings.log_level == "DEBUG"

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file gives defaults."""
        config = tmp_path / "ingest.yml"
        config.write_text("")
        assert IngestSettings.from_file(config).words_per_page == 250

    def test_toml(self, tmp_path):
        """Test a TOML configuration file."""
        config = tmp_path / "ingest.toml"
        config.write_text('words_per_page = 300\nfallback_encoding = "cp1252"\n')

        settings = IngestSettings.from_file(config)

        assert settings.words_per_page == 300
        assert settings.fallback_encoding == "cp1252"

    def test_json(self, tmp_path):
        """Test a JSON configuration file."""
        config = tmp_path / "ingest.json"
        config.write_text(json.dumps({"log_format": "structured", "debug": True}))

        settings = IngestSettings.from_file(str(config))

        assert settings.log_format == "structured"
        assert settings.debug is True

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            IngestSettings.from_file(tmp_path / "absent.yaml")

    def test_unsupported_suffix(self, tmp_path):
        """Test that an unknown file type raises ConfigurationError."""
        config = tmp_path / "ingest.ini"
        config.write_text("[ingest]\n")

        with pytest.raises(ConfigurationError) as exc_info:
            IngestSettings.from_file(config)
        assert exc_info.value.details["detected_format"] == ".ini"

    def test_common_key_mistake(self, tmp_path):
        """Test the hint for a misspelled key."""
        config = tmp_path / "ingest.yaml"
        config.write_text("level: DEBUG\n")

        with pytest.raises(ConfigurationError) as exc_info:
            IngestSettings.from_file(config)
        assert exc_info.value.hint == "Use 'log_level' instead of 'level'"


class TestFromMultipleSources:
    """Test settings precedence."""

    def test_cli_overrides_file(self, tmp_path):
        """Test that CLI arguments win over file values."""
        config = tmp_path / "ingest.yaml"
        config.write_text("words_per_page: 220\nlog_format: json\n")

        settings = IngestSettings.from_multiple_sources(
            config_files=[config],
            cli_args={"words_per_page": 180, "log_level": None},
        )

        assert settings.words_per_page == 180
        assert settings.log_format == "json"
        assert settings.log_level == "WARNING"

    def test_later_files_override_earlier(self, tmp_path):
        """Test file ordering."""
        first = tmp_path / "base.yaml"
        first.write_text("words_per_page: 220\ndebug: true\n")
        second = tmp_path / "local.toml"
        second.write_text("words_per_page = 240\n")

        settings = IngestSettings.from_multiple_sources(config_files=[first, second])

        assert settings.words_per_page == 240
        assert settings.debug is True

    def test_no_sources(self):
        """Test that no sources gives defaults."""
        assert IngestSettings.from_multiple_sources().words_per_page == 250


class TestGlobalSettings:
    """Test the module-level settings helpers."""

    def test_set_and_get(self):
        """Test installing a settings instance."""
        custom = IngestSettings(_env_file=None, words_per_page=99)
        set_settings(custom)
        assert get_settings() is custom

    def test_reset_reloads(self, monkeypatch):
        """Test that reset forces a reload from the environment."""
        monkeypatch.setenv("SCREENPLAY_INGEST_WORDS_PER_PAGE", "123")
        reset_settings()

        assert get_settings().words_per_page == 123
        assert get_settings() is get_settings()

    def test_log_file_path_type(self, tmp_path):
        """Test that Path values are accepted for the log file."""
        settings = IngestSettings(_env_file=None, log_file=Path(tmp_path, "x.log"))
        assert settings.log_file == (tmp_path / "x.log").resolve()
