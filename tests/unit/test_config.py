"""
tests/unit/test_config.py - Tests for record options and process configuration.
"""

import json

import pytest

from reactive import RecordType
from reactive.bootstrap import config as config_module
from reactive.bootstrap import LoggingConfig, ReactiveConfig, RecordOptions, get_config, load_config


class TestRecordOptions:
    """Test per-record-type options."""

    def test_default(self):
        """Test computed fields are protected by default."""
        assert RecordOptions.from_kwargs().allow_setting_computed_fields is False

    def test_current_name(self):
        """Test the current option name."""
        assert RecordOptions.from_kwargs(allow_setting_computed_fields=True).allow_setting_computed_fields

    def test_historical_name(self):
        """Test the historical option name is honored."""
        options = RecordOptions.from_kwargs(allow_updating_computed_fields=True)
        assert options.allow_setting_computed_fields is True

    def test_both_names_agreeing(self):
        """Test both names may be given when they agree."""
        options = RecordOptions.from_kwargs(
            allow_setting_computed_fields=True,
            allow_updating_computed_fields=True,
        )
        assert options.allow_setting_computed_fields is True

    def test_both_names_conflicting(self):
        """Test conflicting values are refused."""
        with pytest.raises(TypeError, match="Conflicting"):
            RecordOptions.from_kwargs(
                allow_setting_computed_fields=True,
                allow_updating_computed_fields=False,
            )

    def test_unknown_option(self):
        """Test unknown options are refused."""
        with pytest.raises(TypeError, match="Unknown"):
            RecordOptions.from_kwargs(allow_anything=True)

    def test_historical_name_on_record_type(self):
        """Test the historical name through RecordType."""
        rt = RecordType("Legacy", ["a", "double"], allow_updating_computed_fields=True)
        rt.register("double", ["a"], lambda a: a * 2)
        assert rt.allow_setting_computed_fields
        assert rt.create(a=1, double=5).double == 5

    def test_to_dict(self):
        """Test options serialize under the current name."""
        assert RecordOptions().to_dict() == {"allow_setting_computed_fields": False}


class TestLoggingConfig:
    """Test logging configuration from the environment."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is set."""
        for var in ("REACTIVE_LOG_LEVEL", "REACTIVE_LOG_FILE", "REACTIVE_JSON_LOGS"):
            monkeypatch.delenv(var, raising=False)
        config = LoggingConfig.from_env()
        assert config.level == "INFO"
        assert config.log_file is None
        assert config.json_logs is False

    def test_from_env(self, monkeypatch):
        """Test environment overrides."""
        monkeypatch.setenv("REACTIVE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("REACTIVE_JSON_LOGS", "true")
        monkeypatch.setenv("REACTIVE_LOG_FILE", "/tmp/reactive.log")
        config = LoggingConfig.from_env()
        assert config.level == "DEBUG"
        assert config.json_logs is True
        assert config.log_file == "/tmp/reactive.log"


class TestReactiveConfig:
    """Test root configuration loading."""

    def test_from_env(self, monkeypatch):
        """Test environment and debug flags."""
        monkeypatch.setenv("REACTIVE_ENVIRONMENT", "production")
        monkeypatch.setenv("REACTIVE_DEBUG", "TRUE")
        config = ReactiveConfig.from_env()
        assert config.environment == "production"
        assert config.debug is True

    def test_from_file(self, tmp_path, monkeypatch):
        """Test file values override the environment."""
        monkeypatch.setenv("REACTIVE_ENVIRONMENT", "development")
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "environment": "staging",
            "logging": {"level": "WARNING", "unknown_key": 1},
        }))

        config = ReactiveConfig.from_file(str(path))
        assert config.environment == "staging"
        assert config.logging.level == "WARNING"
        assert not hasattr(config.logging, "unknown_key")

    def test_missing_file_falls_back(self, tmp_path, monkeypatch):
        """Test a missing file yields environment configuration."""
        monkeypatch.setenv("REACTIVE_ENVIRONMENT", "ci")
        config = ReactiveConfig.from_file(str(tmp_path / "absent.json"))
        assert config.environment == "ci"

    def test_to_dict(self):
        """Test serialization."""
        data = ReactiveConfig().to_dict()
        assert data["environment"] == "development"
        assert data["logging"]["level"] == "INFO"

    def test_load_and_get(self, monkeypatch):
        """Test the process-wide configuration is cached."""
        monkeypatch.setattr(config_module, "_config", None)
        monkeypatch.setenv("REACTIVE_ENVIRONMENT", "test")

        config = get_config()
        assert config.environment == "test"
        assert get_config() is config

        reloaded = load_config()
        assert get_config() is reloaded
