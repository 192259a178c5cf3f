"""Interactive shell identification."""

import logging
import os
import platform
from collections.abc import Mapping

from hostscope.collectors.process import last_path_segment, parent_command_name
from hostscope.utils.commands import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

UNKNOWN_SHELL = "Unknown Shell"


def detect_shell(
    environ: Mapping[str, str] | None = None,
    system: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Name the shell this process was started from.

    Resolution order:
        1. $SHELL, reduced to its final path segment.
        2. Windows: PowerShell if $PSModulePath is set, else the $ComSpec
           executable without ".exe", else "cmd".
        3. Elsewhere: the parent process command name from `ps`.

    Args:
        environ: Environment to inspect (defaults to os.environ).
        system: Platform name as returned by platform.system().
        timeout: Seconds allowed for the `ps` query.
    """
    env = os.environ if environ is None else environ
    system = system or platform.system()

    shell_path = env.get("SHELL")
    if shell_path:
        name = last_path_segment(shell_path)
        if name:
            return name

    if system == "Windows":
        if env.get("PSModulePath"):
            return "PowerShell"
        comspec = env.get("ComSpec")
        if comspec:
            name = last_path_segment(comspec)
            if name.lower().endswith(".exe"):
                name = name[:-4]
            return name or "cmd"
        return "cmd"

    name = parent_command_name(timeout)
    if name:
        return name

    logger.debug("Shell could not be determined")
    return UNKNOWN_SHELL
