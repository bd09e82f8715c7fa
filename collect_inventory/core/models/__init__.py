"""
Domain models — Pydantic types for the inventory collector.

All models are re-exported here for convenient access:

    from collect_inventory.core.models import PlatformProfile, RunConfig, Report
"""

from collect_inventory.core.models.dependency import (
    DependencyDecision,
    InstallAction,
    PackageManager,
)
from collect_inventory.core.models.platform import (
    SECTION_ORDER,
    PlatformFamily,
    PlatformProfile,
    SectionKind,
)
from collect_inventory.core.models.report import RenderedSection, Report
from collect_inventory.core.models.run_config import OPTIONAL_SECTIONS, RunConfig

__all__ = [
    # dependency.py
    "DependencyDecision",
    "InstallAction",
    "PackageManager",
    # platform.py
    "PlatformFamily",
    "PlatformProfile",
    "SECTION_ORDER",
    "SectionKind",
    # report.py
    "RenderedSection",
    "Report",
    # run_config.py
    "OPTIONAL_SECTIONS",
    "RunConfig",
]
