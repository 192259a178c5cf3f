"""Tests for hostscope configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest

from hostscope.config.loader import ConfigError, load_config, load_yaml
from hostscope.config.models import HostscopeConfig, LoggingConfig, ProbeConfig


@pytest.fixture
def tmp_yaml(tmp_path):
    """Create a temporary YAML file."""

    def _create(content: str, filename: str = "config.yaml") -> Path:
        path = tmp_path / filename
        path.write_text(content)
        return path

    return _create


class TestModels:
    def test_defaults(self):
        config = HostscopeConfig()
        assert config.probes.command_timeout == 2.0
        assert config.logging.level == "INFO"
        assert config.logging.backup_count == 3

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            ProbeConfig(command_timeout=0)

    def test_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_bad_level(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="chatty")


class TestLoadYaml:
    def test_valid_yaml(self, tmp_yaml):
        data = load_yaml(tmp_yaml("probes:\n  command_timeout: 1.5\n"))
        assert data == {"probes": {"command_timeout": 1.5}}

    def test_empty_yaml(self, tmp_yaml):
        assert load_yaml(tmp_yaml("")) == {}

    def test_file_not_found(self):
        with pytest.raises(ConfigError, match="not found"):
            load_yaml(Path("/nonexistent/config.yaml"))

    def test_invalid_yaml(self, tmp_yaml):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_yaml(tmp_yaml("probes: [broken: {"))

    def test_not_a_mapping(self, tmp_yaml):
        with pytest.raises(ConfigError, match="mapping"):
            load_yaml(tmp_yaml("- a\n- b\n"))


class TestLoadConfig:
    def test_explicit_path(self, tmp_yaml):
        path = tmp_yaml("probes:\n  command_timeout: 0.5\nlogging:\n  level: warning\n")
        config = load_config(path)
        assert config.probes.command_timeout == 0.5
        assert config.logging.level == "WARNING"

    def test_validation_error(self, tmp_yaml):
        path = tmp_yaml("probes:\n  command_timeout: -1\n")
        with pytest.raises(ConfigError, match="validation failed"):
            load_config(path)

    def test_env_var(self, tmp_yaml, monkeypatch):
        path = tmp_yaml("probes:\n  command_timeout: 4\n")
        monkeypatch.setenv("HOSTSCOPE_CONFIG", str(path))
        assert load_config().probes.command_timeout == 4.0

    def test_env_var_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOSTSCOPE_CONFIG", str(tmp_path / "missing.yaml"))
        with pytest.raises(ConfigError, match="not found"):
            load_config()

    def test_defaults_without_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("HOSTSCOPE_CONFIG", raising=False)
        with patch("hostscope.config.loader.DEFAULT_CONFIG_PATH", tmp_path / "none.yaml"):
            assert load_config() == HostscopeConfig()

    def test_default_path_used(self, monkeypatch, tmp_yaml):
        monkeypatch.delenv("HOSTSCOPE_CONFIG", raising=False)
        path = tmp_yaml("logging:\n  backup_count: 9\n")
        with patch("hostscope.config.loader.DEFAULT_CONFIG_PATH", path):
            assert load_config().logging.backup_count == 9
