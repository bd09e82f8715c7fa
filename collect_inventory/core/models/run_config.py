"""
Run configuration — the three CLI toggles, frozen after parsing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from collect_inventory.core.models.platform import SectionKind

# Sections that can be switched off from the command line.
OPTIONAL_SECTIONS: frozenset[SectionKind] = frozenset(
    {SectionKind.GPU, SectionKind.NETWORK}
)


class RunConfig(BaseModel):
    """What this run collects and whether it may install helpers."""

    model_config = ConfigDict(frozen=True)

    include_network: bool = True
    include_gpu: bool = True
    allow_install: bool = True

    def section_enabled(self, kind: SectionKind) -> bool:
        if kind not in OPTIONAL_SECTIONS:
            return True
        return self.include_network if kind == SectionKind.NETWORK else self.include_gpu
