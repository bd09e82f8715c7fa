"""
Network section — links, then IPv4 and IPv6 addresses per interface.

Linux reads everything from ``ip -o``. FreeBSD has no single tool for
that, so ``ifconfig -a`` is parsed and each interface gets a role label
from the default route and its name. The label is a guess from naming
conventions, not routing state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile, SectionKind
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.sections.base import (
    Handler,
    SectionCollector,
    not_implemented,
    row,
)

ROLE_DEFAULT = "LAN/Default"
ROLE_TUNNEL = "Tunnel"

# Name prefix → overlay network role. Checked before the tunnel prefixes.
OVERLAY_PREFIXES: tuple[tuple[str, str], ...] = (
    ("tailscale", "Tailscale"),
    ("zt", "ZeroTier"),
)

TUNNEL_PREFIXES: tuple[str, ...] = ("tun", "tap", "wg", "gif", "gre", "ovpn", "ipsec")


# ── Linux (ip -o) ───────────────────────────────────────────────


def parse_ip_links(text: str) -> list[tuple[str, str]]:
    """``ip -o link show`` → (interface, details)."""
    links = []
    for line in text.splitlines():
        parts = line.split(": ", 2)
        if len(parts) >= 3:
            links.append((parts[1], parts[2]))
    return links


def parse_ip_addrs(text: str) -> list[tuple[str, str]]:
    """``ip -o -4|-6 addr show`` → (interface, address/prefix)."""
    addrs = []
    for line in text.splitlines():
        fields = line.split()
        if len(fields) >= 4:
            addrs.append((fields[1], fields[3]))
    return addrs


# ── FreeBSD (ifconfig -a) ───────────────────────────────────────


@dataclass
class Interface:
    name: str
    flags: str = ""
    status: str = ""
    ipv4: list[str] = field(default_factory=list)
    ipv6: list[str] = field(default_factory=list)


def netmask_to_prefix(mask: str) -> int | None:
    """``0xffffff00`` or ``255.255.255.0`` → 24."""
    try:
        if mask.startswith("0x"):
            value = int(mask, 16)
        else:
            octets = [int(o) for o in mask.split(".")]
            if len(octets) != 4:
                return None
            value = 0
            for o in octets:
                value = (value << 8) | o
    except ValueError:
        return None
    return bin(value).count("1")


def _after(parts: list[str], key: str) -> str | None:
    """Token following *key* in an ifconfig line."""
    if key in parts:
        i = parts.index(key)
        if i + 1 < len(parts):
            return parts[i + 1]
    return None


def parse_ifconfig(text: str) -> list[Interface]:
    interfaces: list[Interface] = []
    current: Interface | None = None
    for line in text.splitlines():
        if line and not line[0].isspace():
            name, _, rest = line.partition(":")
            current = Interface(name=name.strip(), flags=rest.strip())
            interfaces.append(current)
            continue
        if current is None:
            continue
        parts = line.split()
        if not parts:
            continue
        if parts[0] == "inet" and len(parts) >= 2:
            address = parts[1]
            mask = _after(parts, "netmask")
            if mask:
                prefix = netmask_to_prefix(mask)
                if prefix is not None:
                    address = f"{address}/{prefix}"
            current.ipv4.append(address)
        elif parts[0] == "inet6" and len(parts) >= 2:
            address = parts[1].split("%")[0]
            prefixlen = _after(parts, "prefixlen")
            if prefixlen:
                address = f"{address}/{prefixlen}"
            current.ipv6.append(address)
        elif parts[0] == "status:":
            current.status = " ".join(parts[1:])
    return interfaces


def default_interface(probe: Probe) -> str | None:
    """Interface carrying the IPv4 default route, if any."""
    out = probe.run(["route", "-n", "get", "default"])
    if out:
        for line in out.splitlines():
            key, _, value = line.strip().partition(":")
            if key == "interface" and value.strip():
                return value.strip()
    out = probe.run(["netstat", "-rn", "-f", "inet"])
    if out:
        for line in out.splitlines():
            fields = line.split()
            if fields and fields[0] == "default" and len(fields) >= 4:
                return fields[-1]
    return None


def classify_interface(name: str, default_iface: str | None) -> str:
    """Best-effort role label for an interface, or ``""``."""
    if default_iface and name == default_iface:
        return ROLE_DEFAULT
    lowered = name.lower()
    for prefix, role in OVERLAY_PREFIXES:
        if lowered.startswith(prefix):
            return role
    if lowered.startswith(TUNNEL_PREFIXES):
        return ROLE_TUNNEL
    return ""


def _labelled(value: str, role: str) -> str:
    return f"{value} [{role}]" if role else value


class NetworkCollector(SectionCollector):
    kind = SectionKind.NETWORK

    def handlers(self) -> dict[PlatformFamily, Handler]:
        return {
            PlatformFamily.LINUX: self._linux,
            PlatformFamily.FREEBSD: self._freebsd,
            PlatformFamily.UNKNOWN: lambda profile, config: not_implemented(profile),
        }

    def _linux(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        p = self.probe
        if not p.which("ip"):
            return ["  ip command missing; install iproute2 to list interfaces."]

        lines = ["  Links:"]
        lines += [row(name, details) for name, details in parse_ip_links(
            p.run(["ip", "-o", "link", "show"]) or "")]

        ipv4 = parse_ip_addrs(p.run(["ip", "-o", "-4", "addr", "show"]) or "")
        if ipv4:
            lines.append("  IPv4:")
            lines += [row(name, addr) for name, addr in ipv4]

        ipv6 = parse_ip_addrs(p.run(["ip", "-o", "-6", "addr", "show"]) or "")
        if ipv6:
            lines.append("  IPv6:")
            lines += [row(name, addr) for name, addr in ipv6]
        return lines

    def _freebsd(self, profile: PlatformProfile, config: RunConfig) -> list[str]:
        p = self.probe
        if not p.which("ifconfig"):
            return ["  ifconfig missing; it ships with the FreeBSD base system."]

        interfaces = parse_ifconfig(p.run(["ifconfig", "-a"]) or "")
        default_iface = default_interface(p)
        roles = {i.name: classify_interface(i.name, default_iface) for i in interfaces}

        lines = ["  Links:"]
        for iface in interfaces:
            details = iface.flags
            if iface.status:
                details = f"{details} status: {iface.status}"
            lines.append(row(iface.name, _labelled(details, roles[iface.name])))

        ipv4 = [(i.name, a) for i in interfaces for a in i.ipv4]
        if ipv4:
            lines.append("  IPv4:")
            lines += [row(name, _labelled(addr, roles[name])) for name, addr in ipv4]

        ipv6 = [(i.name, a) for i in interfaces for a in i.ipv6]
        if ipv6:
            lines.append("  IPv6:")
            lines += [row(name, _labelled(addr, roles[name])) for name, addr in ipv6]
        return lines
