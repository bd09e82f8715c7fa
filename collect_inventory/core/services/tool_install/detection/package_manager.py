"""
L3 Detection — System package manager selection.

Debian-family tools are checked first. The order decides which manager
wins on hosts that ship several (e.g. dnf and yum on RHEL 8), so it is
part of the contract and must stay stable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from collect_inventory.core.models.dependency import PackageManager
from collect_inventory.core.services.tool_install.detection.availability import exists

logger = logging.getLogger(__name__)

PACKAGE_MANAGER_PRIORITY: tuple[PackageManager, ...] = (
    PackageManager.APT,
    PackageManager.APT_GET,
    PackageManager.DNF,
    PackageManager.YUM,
    PackageManager.PACMAN,
    PackageManager.ZYPPER,
    PackageManager.PKG,
)


def detect_package_manager(
    which: Callable[[str], bool] = exists,
) -> PackageManager:
    """Return the first package manager whose binary is present.

    Args:
        which: Availability check, ``exists`` by default.

    Returns:
        The selected manager, or ``PackageManager.NONE``.
    """
    for pm in PACKAGE_MANAGER_PRIORITY:
        if which(pm.value):
            logger.info("Package manager: %s", pm.value)
            return pm
    logger.info("No supported package manager found")
    return PackageManager.NONE
