"""Tests for configuration loading."""

import os

import pytest
import yaml

from business_calendar.config.manager import ConfigManager
from business_calendar.data.schemas import Config

ENV_VARS = (
    "BUSINESS_CALENDAR_DIRECTORIES",
    "BUSINESS_CALENDAR_DEFAULT",
    "BUSINESS_CALENDAR_LOG_LEVEL",
    "BUSINESS_CALENDAR_API_HOST",
    "BUSINESS_CALENDAR_API_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove configuration overrides from the environment."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def settings_file(tmp_path):
    """Create a temporary settings file."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        "calendars:\n"
        "  directories:\n"
        "    - /srv/calendars\n"
        "  default: bacs\n"
        "logging:\n"
        "  level: debug\n"
        "api:\n"
        "  host: 127.0.0.1\n"
        "  port: 9000\n",
        encoding="utf-8",
    )
    return path


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_packaged_defaults(self):
        """Test loading the packaged settings.yaml."""
        cfg = ConfigManager().load_config()

        assert cfg.calendar_directories == []
        assert cfg.default_calendar is None
        assert cfg.log_level == "INFO"
        assert cfg.api_port == 8000

    def test_load_from_file(self, settings_file):
        """Test load from file."""
        cfg = ConfigManager(str(settings_file)).load_config()

        assert cfg.calendar_directories == ["/srv/calendars"]
        assert cfg.default_calendar == "bacs"
        assert cfg.log_level == "DEBUG"
        assert cfg.api_host == "127.0.0.1"
        assert cfg.api_port == 9000

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test missing file uses defaults."""
        cfg = ConfigManager(str(tmp_path / "missing.yaml")).load_config()
        assert cfg == Config()

    def test_env_overrides(self, settings_file, monkeypatch):
        """Test BUSINESS_CALENDAR_* environment overrides."""
        monkeypatch.setenv("BUSINESS_CALENDAR_DIRECTORIES", os.pathsep.join(["/a", "/b"]))
        monkeypatch.setenv("BUSINESS_CALENDAR_DEFAULT", "weekdays")
        monkeypatch.setenv("BUSINESS_CALENDAR_API_PORT", "8123")

        cfg = ConfigManager(str(settings_file)).load_config()

        assert cfg.calendar_directories == ["/a", "/b"]
        assert cfg.default_calendar == "weekdays"
        assert cfg.api_port == 8123

    def test_invalid_env_value_is_ignored(self, settings_file, monkeypatch):
        """Test invalid env value is ignored."""
        monkeypatch.setenv("BUSINESS_CALENDAR_API_PORT", "not-a-port")
        assert ConfigManager(str(settings_file)).load_config().api_port == 9000

    def test_invalid_settings(self, tmp_path):
        """Test that an invalid log level raises ValueError."""
        path = tmp_path / "settings.yaml"
        path.write_text("logging:\n  level: loud\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            ConfigManager(str(path)).load_config()

    def test_invalid_yaml(self, tmp_path):
        """Test that broken YAML raises ValueError."""
        path = tmp_path / "settings.yaml"
        path.write_text("api: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            ConfigManager(str(path)).load_config()

    def test_save_config(self, tmp_path):
        """Test saving and reloading the configuration."""
        path = tmp_path / "nested" / "settings.yaml"
        cfg = Config(calendar_directories=["/srv/calendars"], default_calendar="bacs", api_port=9001)

        ConfigManager(str(path)).save_config(cfg)

        saved = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert saved["calendars"] == {"directories": ["/srv/calendars"], "default": "bacs"}
        assert saved["api"]["port"] == 9001
        assert ConfigManager(str(path)).load_config() == cfg
