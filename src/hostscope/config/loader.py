"""YAML configuration file loading with Pydantic validation."""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import HostscopeConfig

CONFIG_ENV_VAR = "HOSTSCOPE_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".hostscope" / "config.yaml"


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def load_config(path: Path | None = None) -> HostscopeConfig:
    """Load the configuration file, falling back to defaults.

    Lookup order: explicit path, $HOSTSCOPE_CONFIG, ~/.hostscope/config.yaml.
    Only a missing default file is silently replaced with defaults.

    Raises:
        ConfigError: If the file is unreadable or fails validation.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
        elif DEFAULT_CONFIG_PATH.exists():
            path = DEFAULT_CONFIG_PATH
        else:
            return HostscopeConfig()

    data = load_yaml(path)
    try:
        return HostscopeConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e
