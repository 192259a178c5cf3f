"""System information snapshot collection."""

import logging
import os
import platform
import socket
import time
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

import psutil

from hostscope.utils.commands import DEFAULT_TIMEOUT
from hostscope.utils.formatting import format_uptime

from .cpu import CpuInfo, collect_cpus
from .gpu import GpuInfo, UNKNOWN_GPU, select_gpu_lister
from .network import UNKNOWN_IP, detect_local_ip
from .shell import UNKNOWN_SHELL, detect_shell
from .terminal import UNKNOWN_TERMINAL, detect_terminal

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class CollectionError(Exception):
    """Raised when the OS refuses a query no probe can recover from."""


@dataclass(frozen=True)
class SystemInfo:
    """Snapshot of host facts at time of collection."""

    os_name: str = UNKNOWN
    os_version: str = UNKNOWN
    os_arch: str = UNKNOWN
    kernel_version: str = UNKNOWN
    hostname: str = UNKNOWN
    username: str = UNKNOWN
    uptime: str = UNKNOWN
    cpus: tuple[CpuInfo, ...] = ()
    memory_total: int = 0
    memory_used: int = 0
    gpus: tuple[GpuInfo, ...] = (UNKNOWN_GPU,)
    local_ip: str = UNKNOWN_IP
    shell: str = UNKNOWN_SHELL
    terminal: str = UNKNOWN_TERMINAL

    @property
    def memory_percent(self) -> int:
        """Used memory as a whole percentage of total."""
        if self.memory_total <= 0:
            return 0
        return int(self.memory_used / self.memory_total * 100)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["cpus"] = [asdict(c) for c in self.cpus]
        data["gpus"] = [asdict(g) for g in self.gpus]
        return data


class SystemInfoCollector:
    """Runs every probe once and assembles a SystemInfo.

    Probes recover from their own failures; only a failed memory or boot
    time query aborts collection.
    """

    def __init__(
        self,
        command_timeout: float = DEFAULT_TIMEOUT,
        system: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.command_timeout = command_timeout
        self.system = system or platform.system()
        self.environ = os.environ if environ is None else environ
        self.gpu_lister = select_gpu_lister(self.system, timeout=command_timeout)

    def collect(self) -> SystemInfo:
        """Collect a fresh snapshot.

        Raises:
            CollectionError: If memory or uptime cannot be read from the OS.
        """
        started = time.monotonic()
        try:
            mem = psutil.virtual_memory()
            uptime_seconds = max(0, int(time.time() - psutil.boot_time()))
        except (psutil.Error, OSError) as e:
            raise CollectionError(f"Could not query the operating system: {e}") from e

        os_name, os_version = self._os_name_and_version()
        info = SystemInfo(
            os_name=os_name,
            os_version=os_version,
            os_arch=platform.machine() or UNKNOWN,
            kernel_version=self._kernel_version(),
            hostname=_hostname(),
            username=self.environ.get("USER") or self.environ.get("USERNAME") or UNKNOWN,
            uptime=format_uptime(uptime_seconds),
            cpus=tuple(collect_cpus(self.command_timeout)),
            memory_total=int(mem.total),
            memory_used=int(mem.used),
            gpus=tuple(self.gpu_lister.list_gpus()),
            local_ip=detect_local_ip(),
            shell=detect_shell(self.environ, self.system, self.command_timeout),
            terminal=detect_terminal(self.environ, self.system, self.command_timeout),
        )
        logger.info(
            f"Collected system info for {info.hostname} in "
            f"{time.monotonic() - started:.2f}s"
        )
        return info

    def _os_name_and_version(self) -> tuple[str, str]:
        if self.system == "Linux":
            try:
                release = platform.freedesktop_os_release()
            except OSError as e:
                logger.debug(f"os-release unavailable: {e}")
                return "Linux", UNKNOWN
            version = release.get("VERSION_ID") or release.get("BUILD_ID") or UNKNOWN
            return release.get("NAME") or "Linux", version
        if self.system == "Darwin":
            return "macOS", platform.mac_ver()[0] or UNKNOWN
        if self.system == "Windows":
            return "Windows", platform.release() or UNKNOWN
        return self.system or UNKNOWN, platform.release() or UNKNOWN

    def _kernel_version(self) -> str:
        if self.system == "Windows":
            return platform.version() or UNKNOWN
        return platform.release() or UNKNOWN


def _hostname() -> str:
    try:
        return socket.gethostname() or UNKNOWN
    except OSError:
        return UNKNOWN


def collect_system_info(command_timeout: float = DEFAULT_TIMEOUT) -> SystemInfo:
    """Collect a snapshot of this host with default settings."""
    return SystemInfoCollector(command_timeout=command_timeout).collect()
