"""
Graphics section — display-class PCI devices.
"""

from __future__ import annotations

import re

from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile, SectionKind
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.sections.base import (
    Handler,
    SectionCollector,
    not_implemented,
)

_LSPCI_DISPLAY = re.compile(r"vga|3d|display", re.IGNORECASE)


def filter_lspci(text: str) -> list[str]:
    """lspci lines describing VGA, 3D or display controllers."""
    return [line for line in text.splitlines() if _LSPCI_DISPLAY.search(line)]


def filter_pciconf(text: str) -> list[str]:
    """``pciconf -lv`` device blocks whose ``class`` is display.

    A block is a header line (``vgapci0@pci0:0:2:0: class=0x030000 ...``)
    followed by indented ``key = value`` lines.
    """
    blocks: list[list[str]] = []
    for line in text.splitlines():
        if line and not line[0].isspace():
            blocks.append([line])
        elif blocks:
            blocks[-1].append(line)

    selected: list[str] = []
    for block in blocks:
        for detail in block[1:]:
            key, sep, value = detail.partition("=")
            if sep and key.strip() == "class" and "display" in value.lower():
                selected.extend(block)
                break
    return selected


class GpuCollector(SectionCollector):
    kind = SectionKind.GPU

    def handlers(self) -> dict[PlatformFamily, Handler]:
        return {
            PlatformFamily.LINUX: self._linux,
            PlatformFamily.FREEBSD: self._freebsd,
            PlatformFamily.UNKNOWN: lambda profile, config: not_implemented(profile),
        }

    def _linux(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        if not self.probe.which("lspci"):
            return ["  lspci missing; install pciutils to detect GPUs."]
        lines = filter_lspci(self.probe.run(["lspci"]) or "")
        return lines or ["  No display controllers found."]

    def _freebsd(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        if not self.probe.which("pciconf"):
            return ["  pciconf missing; it ships with the FreeBSD base system."]
        lines = filter_pciconf(self.probe.run(["pciconf", "-lv"]) or "")
        return lines or ["  No display controllers found."]
