"""Pydantic models for hostscope configuration."""

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ProbeConfig(BaseModel):
    """Probe execution settings."""

    command_timeout: float = Field(default=2.0, gt=0.0)


class LoggingConfig(BaseModel):
    """Rotating log file settings."""

    level: str = "INFO"
    max_bytes: int = Field(default=1024 * 1024, ge=1024)
    backup_count: int = Field(default=3, ge=0)

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(_LOG_LEVELS)}")
        return value


class HostscopeConfig(BaseModel):
    """Top-level configuration file."""

    probes: ProbeConfig = Field(default_factory=ProbeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
