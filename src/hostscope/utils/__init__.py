"""Shared helpers for hostscope."""

from .commands import run_command, terminate_running
from .formatting import format_bytes, format_uptime

__all__ = ["format_bytes", "format_uptime", "run_command", "terminate_running"]
