"""
L3 Detection — Tool availability.

Read-only PATH lookup. Safe to call before anything else is resolved.
"""

from __future__ import annotations

import shutil


def exists(tool: str) -> bool:
    """Whether *tool* is an executable on the search path."""
    return shutil.which(tool) is not None
