"""
Report model — header, rendered sections, footer.

The rendered text is what lands in the file *and* on the terminal,
so ``render()`` is the single source of truth for both.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from collect_inventory.core.models.platform import SectionKind

FOOTER = "# End of report"


class RenderedSection(BaseModel):
    """One collector's output, already formatted."""

    kind: SectionKind
    body: str = ""

    def render(self) -> str:
        text = f"\n== {self.kind.heading} ==\n"
        if self.body:
            text += self.body if self.body.endswith("\n") else self.body + "\n"
        return text


class Report(BaseModel):
    """A complete inventory snapshot."""

    label: str
    timestamp: str                  # ISO-8601, second precision
    file_stamp: str                 # YYYYMMDD_HHMMSS, used in the file name
    sections: list[RenderedSection] = Field(default_factory=list)

    @property
    def filename(self) -> str:
        return f"{self.label}_{self.file_stamp}.txt"

    def header(self) -> str:
        return (
            f"# Inventory Snapshot - {self.timestamp}\n"
            f"# Script: {self.label}\n"
            "\n"
        )

    @staticmethod
    def footer() -> str:
        return f"\n{FOOTER}\n"

    def chunks(self) -> list[str]:
        """Header, each section, footer — in write order."""
        return [self.header()] + [s.render() for s in self.sections] + [self.footer()]

    def render(self) -> str:
        return "".join(self.chunks())

    def section_kinds(self) -> list[SectionKind]:
        return [s.kind for s in self.sections]
