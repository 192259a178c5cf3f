"""GPU enumeration through platform-specific inventory commands."""

import logging
import platform
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from hostscope.utils.commands import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GpuInfo:
    name: str
    vendor: str


UNKNOWN_GPU = GpuInfo(name="Unknown GPU", vendor="Unknown")

_PCI_DISPLAY_CLASSES = ("VGA compatible controller", "3D controller")
_PROFILER_NAME = re.compile(r'"_name" : "([^"]*)"')


class GpuLister(ABC):
    """Lists the GPUs of one platform family."""

    #: Command that produces the inventory text, empty if none.
    command: list[str] = []

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def list_gpus(self) -> list[GpuInfo]:
        """Return the detected GPUs, or the single sentinel entry."""
        if not self.command:
            return [UNKNOWN_GPU]

        output = run_command(self.command, timeout=self.timeout)
        if output is None:
            logger.debug(f"{self.command[0]} unavailable, GPU unknown")
            return [UNKNOWN_GPU]

        try:
            gpus = self.parse(output)
        except Exception as e:
            logger.warning(f"Could not parse {self.command[0]} output: {e}")
            return [UNKNOWN_GPU]
        return gpus or [UNKNOWN_GPU]

    @abstractmethod
    def parse(self, output: str) -> list[GpuInfo]:
        """Extract GPUs from the command output."""


class WindowsGpuLister(GpuLister):
    command = [
        "wmic",
        "path",
        "win32_VideoController",
        "get",
        "name,AdapterCompatibility",
        "/format:value",
    ]

    def parse(self, output: str) -> list[GpuInfo]:
        return parse_wmic_output(output)


class LinuxGpuLister(GpuLister):
    command = ["lspci", "-mm"]

    def parse(self, output: str) -> list[GpuInfo]:
        return parse_lspci_output(output)


class MacGpuLister(GpuLister):
    command = ["system_profiler", "SPDisplaysDataType", "-json"]

    def parse(self, output: str) -> list[GpuInfo]:
        return parse_system_profiler_output(output)


class FallbackGpuLister(GpuLister):
    def parse(self, output: str) -> list[GpuInfo]:
        return []


_LISTERS: dict[str, type[GpuLister]] = {
    "Windows": WindowsGpuLister,
    "Linux": LinuxGpuLister,
    "Darwin": MacGpuLister,
}


def select_gpu_lister(system: str | None = None, timeout: float = DEFAULT_TIMEOUT) -> GpuLister:
    """Pick the lister for a platform name as returned by platform.system()."""
    if system is None:
        system = platform.system()
    return _LISTERS.get(system, FallbackGpuLister)(timeout=timeout)


def parse_wmic_output(output: str) -> list[GpuInfo]:
    """Parse `wmic ... /format:value` KEY=VALUE records.

    A Name line closes the current record once a vendor has also been seen.
    """
    gpus = []
    name = ""
    vendor = ""
    for raw in output.splitlines():
        key, sep, value = raw.strip().partition("=")
        value = value.strip()
        if not sep or not value:
            continue
        if key == "AdapterCompatibility":
            vendor = value
        elif key == "Name":
            name = value
            if vendor:
                gpus.append(GpuInfo(name=name, vendor=vendor))
                name = ""
                vendor = ""
    return gpus


def parse_lspci_output(output: str) -> list[GpuInfo]:
    """Parse `lspci -mm` lines for display controllers."""
    gpus = []
    for line in output.splitlines():
        if not any(cls in line for cls in _PCI_DISPLAY_CLASSES):
            continue
        parts = line.split('"')
        if len(parts) < 6:
            continue
        vendor, device = parts[3], parts[5]
        gpus.append(GpuInfo(name=f"{vendor} {device}", vendor=vendor))
    return gpus


def parse_system_profiler_output(output: str) -> list[GpuInfo]:
    """Collect every `"_name" : "..."` value from system_profiler JSON text."""
    return [
        GpuInfo(name=name, vendor=classify_vendor(name))
        for name in _PROFILER_NAME.findall(output)
    ]


def classify_vendor(name: str) -> str:
    lowered = name.lower()
    if "nvidia" in lowered:
        return "NVIDIA"
    if "amd" in lowered or "radeon" in lowered:
        return "AMD"
    if "intel" in lowered:
        return "Intel"
    return "Unknown"


def collect_gpus(system: str | None = None, timeout: float = DEFAULT_TIMEOUT) -> list[GpuInfo]:
    """List the GPUs of this host; never empty."""
    return select_gpu_lister(system, timeout).list_gpus()
