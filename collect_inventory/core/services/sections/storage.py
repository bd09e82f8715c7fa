"""
Storage section — block devices as a table.

Linux prints ``lsblk`` verbatim. FreeBSD has no lsblk, so ``geom disk
list`` is folded into the same columns.
"""

from __future__ import annotations

import re

from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile, SectionKind
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.sections.base import (
    Handler,
    SectionCollector,
    kv,
    not_implemented,
    table,
)

LSBLK_COLUMNS = "NAME,SIZE,TYPE,FSTYPE,MOUNTPOINT,MODEL,SERIAL"
TABLE_HEADERS = ("NAME", "SIZE", "TYPE", "FSTYPE", "MOUNTPOINT", "MODEL", "SERIAL")


def parse_geom_disks(text: str) -> list[dict[str, str]]:
    """``geom disk list`` → one dict per provider (Name, Mediasize, descr, ident...)."""
    disks: list[dict[str, str]] = []
    current: dict[str, str] | None = None
    for line in text.splitlines():
        stripped = line.strip()
        m = re.match(r"^\d+\.\s+Name:\s*(\S+)", stripped)
        if m:
            current = {"Name": m.group(1)}
            disks.append(current)
            continue
        if current is None or ":" not in stripped:
            continue
        if stripped.startswith("Geom name:"):
            current = None
            continue
        key, _, value = stripped.partition(":")
        current.setdefault(key.strip(), value.strip())
    return disks


def _human_size(mediasize: str) -> str:
    # "256060514304 (238G)" → "238G"
    m = re.search(r"\(([^)]+)\)", mediasize)
    if m:
        return m.group(1)
    return mediasize.split()[0] if mediasize else "-"


def geom_table(disks: list[dict[str, str]]) -> list[str]:
    rows = [
        [
            d.get("Name", "-"),
            _human_size(d.get("Mediasize", "")),
            "disk",
            "-",
            "-",
            d.get("descr") or "-",
            d.get("ident") or "-",
        ]
        for d in disks
    ]
    return table(TABLE_HEADERS, rows)


class StorageCollector(SectionCollector):
    kind = SectionKind.STORAGE

    def handlers(self) -> dict[PlatformFamily, Handler]:
        return {
            PlatformFamily.LINUX: self._linux,
            PlatformFamily.FREEBSD: self._freebsd,
            PlatformFamily.UNKNOWN: lambda profile, config: not_implemented(profile),
        }

    def _linux(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        if not self.probe.which("lsblk"):
            return ["  lsblk missing; install util-linux to display block devices."]
        out = self.probe.run(["lsblk", "-o", LSBLK_COLUMNS, "-e7"])
        if not out:
            return [kv("Status", "lsblk returned no data")]
        return out.splitlines()

    def _freebsd(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        if not self.probe.which("geom"):
            return ["  geom missing; it ships with the FreeBSD base system."]
        out = self.probe.run(["geom", "disk", "list"])
        disks = parse_geom_disks(out) if out else []
        if not disks:
            return [kv("Status", "no disks reported by geom")]
        return geom_table(disks)
