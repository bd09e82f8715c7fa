"""
Memory section — total, available and swap, in binary gigabytes.
"""

from __future__ import annotations

import logging

from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile, SectionKind
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.sections.base import Handler, SectionCollector, kv

logger = logging.getLogger(__name__)

GIB = 1024 ** 3


def bytes_to_gib(n: int | None) -> str:
    """Format a byte count as GiB with two decimals; 0/None → ``0 GiB``."""
    if not n or n <= 0:
        return "0 GiB"
    return f"{n / GIB:.2f} GiB"


def _to_int(value: str | None) -> int:
    try:
        return int(value.strip()) if value else 0
    except ValueError:
        return 0


def parse_meminfo(text: str) -> dict[str, int]:
    """/proc/meminfo → bytes per key (values there are in kB)."""
    values: dict[str, int] = {}
    for line in text.splitlines():
        key, _, rest = line.partition(":")
        parts = rest.split()
        if parts:
            values[key.strip()] = _to_int(parts[0]) * 1024
    return values


def parse_swapinfo(text: str) -> int:
    """``swapinfo -k`` → total swap in bytes.

    Uses the ``Total`` line when swapinfo prints one (several devices),
    otherwise sums the device lines.
    """
    total_kb = 0
    for line in text.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 2:
            continue
        if parts[0] == "Total":
            return _to_int(parts[1]) * 1024
        total_kb += _to_int(parts[1])
    return total_kb * 1024


class MemoryCollector(SectionCollector):
    kind = SectionKind.MEMORY

    def handlers(self) -> dict[PlatformFamily, Handler]:
        return {
            PlatformFamily.LINUX: self._linux,
            PlatformFamily.FREEBSD: self._freebsd,
            PlatformFamily.UNKNOWN: self._generic,
        }

    def _lines(self, total: int, available: int, swap: int) -> list[str]:
        return [
            kv("RAM Total", bytes_to_gib(total)),
            kv("RAM Available", bytes_to_gib(available)),
            kv("Swap Total", bytes_to_gib(swap)),
        ]

    def _linux(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        text = self.probe.read("/proc/meminfo")
        if not text:
            logger.warning("Cannot read /proc/meminfo; memory figures are incomplete.")
            return self._lines(self.probe.physical_memory(), 0, 0)
        info = parse_meminfo(text)
        return self._lines(
            info.get("MemTotal", 0),
            info.get("MemAvailable", 0),
            info.get("SwapTotal", 0),
        )

    def _freebsd(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        p = self.probe
        total = _to_int(p.run(["sysctl", "-n", "hw.physmem"])) or p.physical_memory()
        page = _to_int(p.run(["sysctl", "-n", "hw.pagesize"]))
        free_pages = (
            _to_int(p.run(["sysctl", "-n", "vm.stats.vm.v_free_count"]))
            + _to_int(p.run(["sysctl", "-n", "vm.stats.vm.v_inactive_count"]))
        )
        swap_text = p.run(["swapinfo", "-k"])
        swap = parse_swapinfo(swap_text) if swap_text else 0
        return self._lines(total, page * free_pages, swap)

    def _generic(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        return self._lines(self.probe.physical_memory(), 0, 0)

