"""
Platform resolution — OS family, required tools, package names.

The OS is identified once. Anything we do not recognise becomes
``PlatformFamily.UNKNOWN``: collectors then print placeholders instead
of failing, so an odd host still gets a report.
"""

from __future__ import annotations

import logging

from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.dependency import PackageManager
from collect_inventory.core.models.platform import (
    SECTION_ORDER,
    PlatformFamily,
    PlatformProfile,
)
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.tool_install.data.tools import (
    ALWAYS_REQUIRED,
    BASE_TOOLS,
    FAMILY_PACKAGES,
    GPU_TOOLS,
    MANAGER_PACKAGES,
    NETWORK_TOOLS,
)

logger = logging.getLogger(__name__)

_FAMILY_BY_SYSTEM: dict[str, PlatformFamily] = {
    "linux": PlatformFamily.LINUX,
    "freebsd": PlatformFamily.FREEBSD,
}


def family_for(system: str) -> PlatformFamily:
    """Map a raw ``uname -s`` value to a family."""
    return _FAMILY_BY_SYSTEM.get(system.strip().lower(), PlatformFamily.UNKNOWN)


def build_profile(family: PlatformFamily, system: str = "") -> PlatformProfile:
    """Assemble the fixed profile for a family."""
    return PlatformProfile(
        family=family,
        system=system or family.value,
        base_tools=BASE_TOOLS[family],
        section_order=SECTION_ORDER,
        network_tools=NETWORK_TOOLS[family],
        gpu_tools=GPU_TOOLS[family],
        tool_packages=dict(FAMILY_PACKAGES[family]),
    )


def resolve_platform(probe: Probe) -> PlatformProfile:
    """Identify the running OS and return its profile.

    One probe, no retries. An identification failure yields the
    Unknown profile rather than an error.
    """
    try:
        system = probe.system() or ""
    except Exception as e:
        logger.warning("Could not identify the operating system: %s", e)
        system = ""

    family = family_for(system)
    if family == PlatformFamily.UNKNOWN:
        logger.warning(
            "Platform '%s' is not fully supported; some sections will be placeholders.",
            system or "unknown",
        )
    else:
        logger.info("Platform: %s", family.value)
    return build_profile(family, system)


def required_tools(profile: PlatformProfile, config: RunConfig) -> list[str]:
    """Full ordered tool list for a run, without duplicates.

    Base tools first, then network and GPU tools when those sections are
    enabled, then the always-required tools.
    """
    tools: list[str] = list(profile.base_tools)
    if config.include_network:
        tools.extend(profile.network_tools)
    if config.include_gpu:
        tools.extend(profile.gpu_tools)
    tools.extend(ALWAYS_REQUIRED)

    seen: set[str] = set()
    ordered: list[str] = []
    for tool in tools:
        if tool not in seen:
            seen.add(tool)
            ordered.append(tool)
    return ordered


def package_for(
    tool: str,
    profile: PlatformProfile,
    pm: PackageManager = PackageManager.NONE,
    overrides: dict[str, str] | None = None,
) -> str:
    """Package that provides *tool*.

    Lookup order: settings overrides, then manager-specific names, then
    the family map, then the tool name itself.
    """
    if overrides and tool in overrides:
        return overrides[tool]
    manager_map = MANAGER_PACKAGES.get(pm, {})
    if tool in manager_map:
        return manager_map[tool]
    return profile.tool_packages.get(tool, tool)
