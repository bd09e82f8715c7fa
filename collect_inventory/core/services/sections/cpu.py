"""
CPU section — model, architecture, logical cores, threads per core, sockets.

Each family has an ordered chain: a rich source first (lscpu, sysctl),
then a minimal one that at least yields a logical CPU count.
"""

from __future__ import annotations

from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile, SectionKind
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.sections.base import (
    Handler,
    SectionCollector,
    Strategy,
    first_result,
    kv,
)

Rows = list[tuple[str, str | None]]

# report key → lscpu key
_LSCPU_FIELDS: tuple[tuple[str, str], ...] = (
    ("Model", "Model name"),
    ("Architecture", "Architecture"),
    ("Cores", "CPU(s)"),
    ("Threads/Core", "Thread(s) per core"),
    ("Sockets", "Socket(s)"),
)


def parse_colon_pairs(text: str) -> dict[str, str]:
    """``Key: value`` lines → dict; first occurrence of a key wins."""
    values: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        key = key.strip()
        if sep and key and key not in values:
            values[key] = value.strip()
    return values


def lscpu_rows(probe: Probe) -> Rows | None:
    out = probe.run(["lscpu"])
    if not out:
        return None
    data = parse_colon_pairs(out)
    if "CPU(s)" not in data and "Model name" not in data:
        return None
    return [(label, data.get(key)) for label, key in _LSCPU_FIELDS]


def cpuinfo_rows(probe: Probe) -> Rows | None:
    text = probe.read("/proc/cpuinfo")
    if not text:
        return None
    model = None
    count = 0
    for line in text.splitlines():
        key, _, value = line.partition(":")
        key = key.strip()
        if key == "processor":
            count += 1
        elif key == "model name" and model is None:
            model = value.strip()
    if count == 0 and model is None:
        return None
    return [("Model", model), ("Logical CPUs", str(count) if count else None)]


def sysctl_rows(probe: Probe) -> Rows | None:
    ncpu = probe.run(["sysctl", "-n", "hw.ncpu"])
    if not ncpu:
        return None
    return [
        ("Model", probe.run(["sysctl", "-n", "hw.model"])),
        ("Architecture", probe.run(["sysctl", "-n", "hw.machine_arch"])),
        ("Cores", ncpu),
        ("Threads/Core", probe.run(["sysctl", "-n", "kern.smp.threads_per_core"])),
        ("Sockets", None),
    ]


def generic_rows(probe: Probe) -> Rows | None:
    count = probe.cpu_count()
    return [
        ("Architecture", probe.machine() or None),
        ("Logical CPUs", str(count) if count else None),
    ]


STRATEGIES: dict[PlatformFamily, list[Strategy[Rows]]] = {
    PlatformFamily.LINUX: [
        Strategy("lscpu", lscpu_rows),
        Strategy("/proc/cpuinfo", cpuinfo_rows),
        Strategy("generic", generic_rows),
    ],
    PlatformFamily.FREEBSD: [
        Strategy("sysctl", sysctl_rows),
        Strategy("generic", generic_rows),
    ],
    PlatformFamily.UNKNOWN: [
        Strategy("generic", generic_rows),
    ],
}


class CpuCollector(SectionCollector):
    kind = SectionKind.CPU

    def handlers(self) -> dict[PlatformFamily, Handler]:
        return {family: self._chain for family in STRATEGIES}

    def _chain(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        _, rows = first_result(self.probe, STRATEGIES[profile.family])
        if not rows:
            return [kv("Status", "CPU information unavailable")]
        return [kv(label, value) for label, value in rows]
