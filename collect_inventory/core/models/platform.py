"""
Platform model — which OS family we are running on and what it needs.

A ``PlatformProfile`` is resolved exactly once at startup and never
mutated afterwards. Collectors dispatch on ``profile.family``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PlatformFamily(str, Enum):
    """OS families the collectors know how to read."""

    LINUX = "Linux"
    FREEBSD = "FreeBSD"
    UNKNOWN = "Unknown"


class SectionKind(str, Enum):
    """Report sections, in their canonical order."""

    OS = "os"
    HARDWARE = "hardware"
    CPU = "cpu"
    MEMORY = "memory"
    STORAGE = "storage"
    GPU = "gpu"
    NETWORK = "network"

    @property
    def heading(self) -> str:
        """Heading used in the rendered report."""
        return _SECTION_HEADINGS[self]


_SECTION_HEADINGS: dict[SectionKind, str] = {
    SectionKind.OS: "Operating System",
    SectionKind.HARDWARE: "Hardware",
    SectionKind.CPU: "CPU",
    SectionKind.MEMORY: "Memory",
    SectionKind.STORAGE: "Storage",
    SectionKind.GPU: "Graphics",
    SectionKind.NETWORK: "Network Interfaces",
}

# Readability contract: the report always lists sections in this order.
SECTION_ORDER: tuple[SectionKind, ...] = (
    SectionKind.OS,
    SectionKind.HARDWARE,
    SectionKind.CPU,
    SectionKind.MEMORY,
    SectionKind.STORAGE,
    SectionKind.GPU,
    SectionKind.NETWORK,
)


class PlatformProfile(BaseModel):
    """Resolved platform — immutable for the lifetime of a run."""

    model_config = ConfigDict(frozen=True)

    family: PlatformFamily
    system: str = ""                         # raw name as the OS reported it
    base_tools: tuple[str, ...] = ()
    section_order: tuple[SectionKind, ...] = SECTION_ORDER
    network_tools: tuple[str, ...] = ()
    gpu_tools: tuple[str, ...] = ()
    tool_packages: dict[str, str] = Field(default_factory=dict)

    @property
    def label(self) -> str:
        """Human label for placeholders (``FreeBSD``, ``Darwin``, ...)."""
        return self.system or self.family.value
