"""
Operating System section — hostname, distribution, kernel, uptime, timezone.
"""

from __future__ import annotations

from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile, SectionKind
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.sections.base import (
    NA,
    Handler,
    SectionCollector,
    Strategy,
    first_value,
    from_cmd,
    from_file,
    kv,
)

_HOSTNAME = [
    from_cmd("hostname"),
    Strategy("platform.node", lambda p: p.node()),
    from_cmd("uname", "-n"),
]


def parse_os_release(text: str) -> dict[str, str]:
    """Parse /etc/os-release ``KEY="value"`` lines."""
    values: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def _linux_distribution(probe: Probe) -> str | None:
    text = probe.read("/etc/os-release") or probe.read("/usr/lib/os-release")
    if not text:
        return None
    data = parse_os_release(text)
    pretty = data.get("PRETTY_NAME")
    if pretty:
        return pretty
    return f"{data.get('NAME', '')} {data.get('VERSION_ID', '')}".strip() or None


def _prefixed(prefix: str, argv: list[str]) -> Strategy[str]:
    def _fn(probe: Probe) -> str | None:
        out = probe.run(argv)
        return f"{prefix} {out}" if out else None
    return Strategy(" ".join(argv), _fn)


def _kernel(probe: Probe) -> str:
    kernel = probe.run(["uname", "-sr"])
    arch = probe.run(["uname", "-m"]) or ""
    if not kernel:
        return NA
    return f"{kernel} {arch}".strip()


class OsInfoCollector(SectionCollector):
    kind = SectionKind.OS

    def handlers(self) -> dict[PlatformFamily, Handler]:
        return {
            PlatformFamily.LINUX: self._linux,
            PlatformFamily.FREEBSD: self._freebsd,
            PlatformFamily.UNKNOWN: self._generic,
        }

    def _linux(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        p = self.probe
        return [
            kv("Hostname", first_value(p, _HOSTNAME)),
            kv("Distribution", _linux_distribution(p) or "Unknown"),
            kv("Kernel", _kernel(p)),
            kv("Uptime", first_value(p, [from_cmd("uptime", "-p"), from_cmd("uptime")])),
            kv("Timezone", first_value(p, [
                from_cmd("timedatectl", "show", "--property=Timezone", "--value"),
                from_file("/etc/timezone"),
                from_cmd("date", "+%Z"),
            ])),
        ]

    def _freebsd(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        p = self.probe
        return [
            kv("Hostname", first_value(p, _HOSTNAME)),
            kv("Distribution", first_value(p, [
                _prefixed("FreeBSD", ["freebsd-version"]),
                _prefixed("FreeBSD", ["uname", "-r"]),
            ]) or "Unknown"),
            kv("Kernel", _kernel(p)),
            kv("Uptime", first_value(p, [from_cmd("uptime")])),
            kv("Timezone", first_value(p, [
                from_file("/var/db/zoneinfo"),
                from_cmd("date", "+%Z"),
            ])),
        ]

    def _generic(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        p = self.probe
        kernel = _kernel(p)
        if kernel == NA:
            kernel = f"{p.system()} {p.machine()}".strip() or NA
        return [
            kv("Hostname", first_value(p, _HOSTNAME)),
            kv("Distribution", f"not implemented for this OS ({profile.label})"),
            kv("Kernel", kernel),
            kv("Uptime", first_value(p, [from_cmd("uptime")])),
            kv("Timezone", first_value(p, [from_cmd("date", "+%Z")])),
        ]
