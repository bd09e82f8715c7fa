"""
Section collectors — one per ``SectionKind``.

    from collect_inventory.core.services.sections import build_collectors
"""

from __future__ import annotations

from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.platform import SectionKind
from collect_inventory.core.services.sections.base import SectionCollector
from collect_inventory.core.services.sections.cpu import CpuCollector
from collect_inventory.core.services.sections.gpu import GpuCollector
from collect_inventory.core.services.sections.hardware import HardwareCollector
from collect_inventory.core.services.sections.memory import MemoryCollector, bytes_to_gib
from collect_inventory.core.services.sections.network import NetworkCollector
from collect_inventory.core.services.sections.os_info import OsInfoCollector
from collect_inventory.core.services.sections.storage import StorageCollector

COLLECTOR_CLASSES: dict[SectionKind, type[SectionCollector]] = {
    SectionKind.OS: OsInfoCollector,
    SectionKind.HARDWARE: HardwareCollector,
    SectionKind.CPU: CpuCollector,
    SectionKind.MEMORY: MemoryCollector,
    SectionKind.STORAGE: StorageCollector,
    SectionKind.GPU: GpuCollector,
    SectionKind.NETWORK: NetworkCollector,
}


def build_collectors(probe: Probe) -> dict[SectionKind, SectionCollector]:
    """One collector instance per section, sharing a probe."""
    return {kind: cls(probe) for kind, cls in COLLECTOR_CLASSES.items()}


__all__ = [
    "COLLECTOR_CLASSES",
    "SectionCollector",
    "build_collectors",
    "bytes_to_gib",
]
