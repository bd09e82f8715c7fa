"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from collect_inventory.core.services.tool_install.detection.availability import (  # noqa: F401
    exists,
)
from collect_inventory.core.services.tool_install.detection.package_manager import (  # noqa: F401
    PACKAGE_MANAGER_PRIORITY,
    detect_package_manager,
)
