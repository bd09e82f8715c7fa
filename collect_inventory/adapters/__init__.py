"""
Adapters — the only code that touches the host.

    from collect_inventory.adapters import HostProbe, MockProbe
"""

from collect_inventory.adapters.base import Probe
from collect_inventory.adapters.mock import MockProbe
from collect_inventory.adapters.shell.command import HostProbe

__all__ = ["HostProbe", "MockProbe", "Probe"]
