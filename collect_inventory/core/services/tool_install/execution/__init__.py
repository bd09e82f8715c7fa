"""
L4 Execution — ``__init__.py`` re-exports the install runner.
"""

from collect_inventory.core.services.tool_install.execution.subprocess_runner import (  # noqa: F401
    elevation_prefix,
    run_install_command,
)
