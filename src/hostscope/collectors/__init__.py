"""Probes that gather host facts into a SystemInfo snapshot."""

from .cpu import CpuInfo
from .gpu import GpuInfo, GpuLister, select_gpu_lister
from .system_info import (
    CollectionError,
    SystemInfo,
    SystemInfoCollector,
    collect_system_info,
)

__all__ = [
    "CollectionError",
    "CpuInfo",
    "GpuInfo",
    "GpuLister",
    "SystemInfo",
    "SystemInfoCollector",
    "collect_system_info",
    "select_gpu_lister",
]
