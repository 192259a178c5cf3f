"""Terminal emulator identification."""

import logging
import os
import platform
from collections.abc import Mapping

from hostscope.collectors.process import parent_command_name
from hostscope.utils.commands import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

UNKNOWN_TERMINAL = "Unknown Terminal"

# (variable, display template); "{}" is filled with the variable's value.
_TERMINAL_ENV_VARS: list[tuple[str, str]] = [
    ("TERM_PROGRAM", "{}"),
    ("TERMINAL_EMULATOR", "{}"),
    ("KONSOLE_VERSION", "Konsole"),
    ("XTERM_VERSION", "xterm {}"),
    ("GNOME_TERMINAL_SCREEN", "GNOME Terminal"),
    ("KITTY_WINDOW_ID", "kitty"),
    ("ALACRITTY_SOCKET", "Alacritty"),
    ("WEZTERM_PANE", "WezTerm"),
    ("TILIX_ID", "Tilix"),
]

_WINDOWS_SESSION_VARS = [
    ("WT_SESSION", "Windows Terminal"),
    ("ConEmuPID", "ConEmu"),
    ("CMDER_ROOT", "Cmder"),
]

_WINDOWS_IMAGES = {
    "windowsterminal.exe": "Windows Terminal",
    "conemu.exe": "ConEmu",
    "conemu64.exe": "ConEmu",
    "conemuc.exe": "ConEmu",
    "conemuc64.exe": "ConEmu",
    "cmd.exe": "Command Prompt",
    "powershell.exe": "PowerShell",
    "pwsh.exe": "PowerShell Core",
}

_WINDOWS_HOSTS = {"Windows Terminal", "ConEmu"}

_GENERIC_SHELLS = {"sh", "bash"}


def detect_terminal(
    environ: Mapping[str, str] | None = None,
    system: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Name the terminal emulator hosting this session. Never raises."""
    env = os.environ if environ is None else environ
    system = system or platform.system()

    name = _from_terminal_env(env)
    if name:
        return name

    if system == "Windows":
        return _detect_windows_terminal(env)

    name = _from_term_type(env.get("TERM", ""), timeout)
    if name:
        return name

    logger.debug("Terminal could not be determined")
    return UNKNOWN_TERMINAL


def _from_terminal_env(env: Mapping[str, str]) -> str | None:
    for var, template in _TERMINAL_ENV_VARS:
        value = env.get(var)
        if value:
            return template.format(value)
    return None


def _from_term_type(term: str, timeout: float) -> str | None:
    if term in ("xterm", "xterm-256color"):
        parent = parent_command_name(timeout)
        if parent and parent not in _GENERIC_SHELLS:
            return parent
        return "xterm"
    if term == "screen":
        return "GNU Screen"
    if term == "tmux":
        return "tmux"
    if "kitty" in term:
        return "kitty"
    if "alacritty" in term:
        return "Alacritty"
    return None


def _detect_windows_terminal(env: Mapping[str, str]) -> str:
    for var, display in _WINDOWS_SESSION_VARS:
        if env.get(var):
            return display

    ancestry = _windows_ancestry()
    for image in ancestry:
        display = map_windows_image(image)
        if display in _WINDOWS_HOSTS:
            return display
    if ancestry:
        return map_windows_image(ancestry[0]) or "Command Prompt"
    return "Command Prompt"


def map_windows_image(image: str) -> str:
    """Display name for a Windows executable image name."""
    known = _WINDOWS_IMAGES.get(image.lower())
    if known:
        return known
    if image.lower().endswith(".exe"):
        return image[:-4]
    return image


def _windows_ancestry() -> list[str]:
    """Image names of the parent and grandparent of this process."""
    try:
        import psutil

        names = []
        proc = psutil.Process().parent()
        while proc is not None and len(names) < 2:
            names.append(proc.name())
            proc = proc.parent()
        return names
    except Exception as e:
        logger.debug(f"Process ancestry lookup failed: {e}")
        return []
