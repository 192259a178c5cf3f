"""CPU inventory: per-core records grouped by model name."""

import json
import logging
import platform
import sys
from dataclasses import dataclass
from pathlib import Path

from hostscope.utils.commands import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)

PROC_CPUINFO = Path("/proc/cpuinfo")


@dataclass(frozen=True)
class CoreRecord:
    """One logical CPU as reported by the OS."""

    brand: str
    frequency_mhz: int


@dataclass(frozen=True)
class CpuInfo:
    """A CPU model and the number of logical cores sharing it."""

    model: str
    cores: int
    frequency_mhz: int


def aggregate_cpus(records: list[CoreRecord]) -> list[CpuInfo]:
    """Group logical cores by exact model string.

    The frequency of the first core seen for a model is kept; later cores
    only add to the count.
    """
    groups: dict[str, list[int]] = {}
    for record in records:
        entry = groups.setdefault(record.brand, [0, record.frequency_mhz])
        entry[0] += 1

    return [
        CpuInfo(model=model, cores=cores, frequency_mhz=frequency)
        for model, (cores, frequency) in groups.items()
    ]


def read_core_records(timeout: float = DEFAULT_TIMEOUT) -> list[CoreRecord]:
    """Read one record per logical CPU from the OS."""
    if platform.system() == "Linux":
        records = _read_proc_cpuinfo(PROC_CPUINFO, timeout)
        if records:
            return records
    return _read_psutil_cores(timeout)


def collect_cpus(timeout: float = DEFAULT_TIMEOUT) -> list[CpuInfo]:
    """Collect the CPU inventory of this host."""
    return aggregate_cpus(read_core_records(timeout))


def _read_proc_cpuinfo(path: Path, timeout: float = DEFAULT_TIMEOUT) -> list[CoreRecord]:
    """Parse the processor blocks of /proc/cpuinfo."""
    try:
        content = path.read_text()
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return []

    blocks = []
    current: dict[str, str] = {}
    for line in content.splitlines():
        if not line.strip():
            if current:
                blocks.append(current)
                current = {}
            continue
        key, sep, value = line.partition(":")
        if sep:
            current[key.strip()] = value.strip()
    if current:
        blocks.append(current)

    blocks = [b for b in blocks if "processor" in b]
    if not blocks:
        return []

    fallback_brand = None
    records = []
    for block in blocks:
        brand = block.get("model name")
        if not brand:
            # ARM kernels often omit "model name"
            if fallback_brand is None:
                fallback_brand = _cpuinfo_brand(timeout)
            brand = fallback_brand
        records.append(CoreRecord(brand=brand, frequency_mhz=_parse_mhz(block.get("cpu MHz"))))
    return records


def _read_psutil_cores(timeout: float = DEFAULT_TIMEOUT) -> list[CoreRecord]:
    """Build per-core records from psutil counts and py-cpuinfo's brand."""
    try:
        import psutil

        count = psutil.cpu_count(logical=True) or 0
        try:
            freqs = psutil.cpu_freq(percpu=True) or []
        except (NotImplementedError, OSError, AttributeError):
            freqs = []
    except Exception as e:
        logger.warning(f"CPU detection failed: {e}")
        return []

    brand = _cpuinfo_brand(timeout)
    records = []
    for i in range(count):
        if i < len(freqs):
            freq = freqs[i]
        elif len(freqs) == 1:
            # Some platforms only report one package-wide frequency
            freq = freqs[0]
        else:
            freq = None
        mhz = int(freq.current) if freq else 0
        records.append(CoreRecord(brand=brand, frequency_mhz=mhz))
    return records


def _cpuinfo_brand(timeout: float = DEFAULT_TIMEOUT) -> str:
    """CPU brand string from py-cpuinfo, falling back to platform.processor().

    py-cpuinfo spawns helpers of its own, so it runs as a child command
    under the same timeout as every other external lookup.
    """
    output = None
    if sys.executable:
        output = run_command([sys.executable, "-m", "cpuinfo", "--json"], timeout=timeout)
    if output:
        try:
            brand = json.loads(output).get("brand_raw")
            if brand:
                return brand
        except (ValueError, AttributeError) as e:
            logger.debug(f"Unreadable py-cpuinfo output: {e}")
    return platform.processor() or "Unknown"


def _parse_mhz(value: str | None) -> int:
    if not value:
        return 0
    try:
        return int(float(value))
    except ValueError:
        return 0
