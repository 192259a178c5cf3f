"""Configuration models and loading."""

from .loader import ConfigError, load_config
from .models import HostscopeConfig, LoggingConfig, ProbeConfig

__all__ = ["ConfigError", "HostscopeConfig", "LoggingConfig", "ProbeConfig", "load_config"]
