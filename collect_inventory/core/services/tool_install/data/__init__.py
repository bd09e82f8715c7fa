"""
L0 Data — ``__init__.py`` re-exports the tool tables.
"""

from collect_inventory.core.services.tool_install.data.tools import (  # noqa: F401
    ALWAYS_REQUIRED,
    BASE_TOOLS,
    FAMILY_PACKAGES,
    GPU_TOOLS,
    MANAGER_PACKAGES,
    NETWORK_TOOLS,
)
