"""Process-table helpers shared by the shell and terminal probes."""

import os

from hostscope.utils.commands import DEFAULT_TIMEOUT, run_command


def last_path_segment(path: str) -> str:
    """Final component of a POSIX or Windows path."""
    return path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


def parent_command_name(timeout: float = DEFAULT_TIMEOUT) -> str:
    """Command name of this process's parent, as `ps` reports it.

    Returns an empty string when `ps` is missing or fails. A leading "-"
    (login shell marker) is dropped.
    """
    output = run_command(["ps", "-p", str(os.getppid()), "-o", "comm="], timeout=timeout)
    lines = output.strip().splitlines() if output else []
    if not lines:
        return ""
    return last_path_segment(lines[0].strip().lstrip("-"))
