"""
collect-inventory — OS and hardware inventory snapshots for Linux and FreeBSD.
"""

__version__ = "0.1.0"

SCRIPT_LABEL = "collect_inventory"
