"""
L0 Data — Required helper tools and their package names.

Pure data. No logic. No imports beyond the models.
"""

from __future__ import annotations

from collect_inventory.core.models.dependency import PackageManager
from collect_inventory.core.models.platform import PlatformFamily

# Tools every run needs, per OS family.
BASE_TOOLS: dict[PlatformFamily, tuple[str, ...]] = {
    PlatformFamily.LINUX: (
        "hostname", "uname", "uptime", "lsblk", "lscpu",
        "awk", "sed", "grep", "cat", "date",
    ),
    PlatformFamily.FREEBSD: (
        "hostname", "uname", "uptime", "sysctl", "awk", "sed", "grep", "cat",
        "date", "ifconfig", "pciconf", "geom", "kenv", "swapinfo",
    ),
    PlatformFamily.UNKNOWN: (
        "hostname", "uname", "uptime", "awk", "sed", "grep", "cat", "date",
    ),
}

# Appended only when the Network section is enabled.
NETWORK_TOOLS: dict[PlatformFamily, tuple[str, ...]] = {
    PlatformFamily.LINUX: ("ip",),
    PlatformFamily.FREEBSD: (),
    PlatformFamily.UNKNOWN: (),
}

# Appended only when the GPU section is enabled.
GPU_TOOLS: dict[PlatformFamily, tuple[str, ...]] = {
    PlatformFamily.LINUX: ("lspci",),
    PlatformFamily.FREEBSD: ("pciconf",),
    PlatformFamily.UNKNOWN: (),
}

# Appended on every platform. Hardware serial lookup uses it when
# running as root; on FreeBSD it is a fallback behind kenv.
ALWAYS_REQUIRED: tuple[str, ...] = ("dmidecode",)

# Tool → package, per OS family. Unlisted tools install under their own name.
FAMILY_PACKAGES: dict[PlatformFamily, dict[str, str]] = {
    PlatformFamily.LINUX: {
        "lsblk": "util-linux",
        "lscpu": "util-linux",
        "lspci": "pciutils",
        "ip": "iproute2",
        "dmidecode": "dmidecode",
        "hostname": "hostname",
        "uptime": "procps",
    },
    PlatformFamily.FREEBSD: {
        "dmidecode": "dmidecode",
    },
    PlatformFamily.UNKNOWN: {},
}

# Package names that differ on a specific package manager.
MANAGER_PACKAGES: dict[PackageManager, dict[str, str]] = {
    PackageManager.DNF: {"ip": "iproute", "uptime": "procps-ng"},
    PackageManager.YUM: {"ip": "iproute", "uptime": "procps-ng"},
    PackageManager.PACMAN: {"uptime": "procps-ng", "hostname": "inetutils"},
    PackageManager.ZYPPER: {"hostname": "hostname", "uptime": "procps"},
}
