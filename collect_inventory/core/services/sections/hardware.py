"""
Hardware section — vendor, model, BIOS, serial, single-board-computer identity.

Serial lookup order:
  1. ``dmidecode`` as root (most reliable)
  2. a readable identity source (sysfs on Linux, kenv on FreeBSD)
  3. an instruction telling the user how to get it
"""

from __future__ import annotations

from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile, SectionKind
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.sections.base import (
    Handler,
    SectionCollector,
    Strategy,
    first_value,
    from_cmd,
    from_file,
    kv,
    not_implemented,
)

DMI_DIR = "/sys/devices/virtual/dmi/id"

SERIAL_HINT = "(run with sudo and install dmidecode to fetch serial)"

# Case-insensitive substrings that identify a single-board computer.
SBC_VENDORS: tuple[str, ...] = ("Raspberry Pi",)

# SMBIOS fillers that mean "no value".
_SMBIOS_PLACEHOLDERS = frozenset({
    "to be filled by o.e.m.", "default string", "not specified", "none", "0",
})


def _clean(value: str | None) -> str | None:
    if value is None or value.strip().lower() in _SMBIOS_PLACEHOLDERS:
        return None
    return value.strip()


def _dmidecode_serial(probe: Probe) -> str | None:
    if not (probe.which("dmidecode") and probe.is_root()):
        return None
    return _clean(probe.run(["dmidecode", "-s", "system-serial-number"]))


def match_board(text: str | None, vendors: tuple[str, ...] = SBC_VENDORS) -> str | None:
    """Board name if *text* mentions a known SBC vendor.

    For /proc/cpuinfo-style text the ``Model`` line is preferred;
    otherwise the first line that mentions the vendor is returned.
    """
    if not text:
        return None
    lowered = text.lower()
    vendor = next((v for v in vendors if v.lower() in lowered), None)
    if vendor is None:
        return None
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip().lower() == "model" and vendor.lower() in value.lower():
            return value.strip()
    for line in text.splitlines():
        if vendor.lower() in line.lower():
            return line.strip()
    return vendor


def detect_board(probe: Probe, sources: list[Strategy[str]]) -> str | None:
    """First candidate source whose text names a known SBC vendor."""
    for source in sources:
        board = match_board(source.fn(probe))
        if board:
            return board
    return None


LINUX_BOARD_SOURCES: list[Strategy[str]] = [
    from_file("/proc/device-tree/model"),
    from_file("/sys/firmware/devicetree/base/model"),
    from_file("/proc/cpuinfo"),
]

FREEBSD_BOARD_SOURCES: list[Strategy[str]] = [
    from_cmd("sysctl", "-n", "hw.fdt.model"),
    from_cmd("kenv", "-q", "smbios.system.product"),
]


def _kenv(key: str) -> Strategy[str]:
    return Strategy(f"kenv {key}", lambda p: _clean(p.run(["kenv", "-q", key])))


class HardwareCollector(SectionCollector):
    kind = SectionKind.HARDWARE

    def handlers(self) -> dict[PlatformFamily, Handler]:
        return {
            PlatformFamily.LINUX: self._linux,
            PlatformFamily.FREEBSD: self._freebsd,
            PlatformFamily.UNKNOWN: lambda profile, config: not_implemented(profile),
        }

    def _linux(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        p = self.probe
        serial = first_value(p, [
            Strategy("dmidecode", _dmidecode_serial),
            Strategy("product_serial", lambda q: _clean(q.read(f"{DMI_DIR}/product_serial"))),
        ])
        lines = [
            kv("Vendor", p.read(f"{DMI_DIR}/sys_vendor")),
            kv("Model", p.read(f"{DMI_DIR}/product_name")),
            kv("BIOS", p.read(f"{DMI_DIR}/bios_version")),
            kv("Serial", serial or SERIAL_HINT),
        ]
        board = detect_board(p, LINUX_BOARD_SOURCES)
        if board:
            lines.append(kv("Board", board))
        return lines

    def _freebsd(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        p = self.probe
        serial = first_value(p, [
            Strategy("dmidecode", _dmidecode_serial),
            _kenv("smbios.system.serial"),
        ])
        lines = [
            kv("Vendor", first_value(p, [_kenv("smbios.system.maker")])),
            kv("Model", first_value(p, [_kenv("smbios.system.product")])),
            kv("BIOS", first_value(p, [_kenv("smbios.bios.version")])),
            kv("Serial", serial or "(run as root and install dmidecode to fetch serial)"),
        ]
        board = detect_board(p, FREEBSD_BOARD_SOURCES)
        if board:
            lines.append(kv("Board", board))
        return lines
