"""
Probe base — the contract between collectors and the host.

Collectors never call subprocess, open() or shutil.which directly.
They ask a Probe, which lets tests swap in canned host output and
lets every failure mode collapse to ``None`` in one place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Probe(ABC):
    """Abstract read-only view of the host.

    Probes NEVER raise. A missing binary, a non-zero exit, a timeout
    or an unreadable file all come back as ``None``.
    """

    @abstractmethod
    def run(self, cmd: list[str]) -> str | None:
        """Run a command and return its stripped stdout.

        Returns None if the command is missing, fails, or prints nothing.
        """

    @abstractmethod
    def read(self, path: str) -> str | None:
        """Return the stripped text of a file, or None if unreadable/empty."""

    @abstractmethod
    def which(self, tool: str) -> bool:
        """Whether *tool* resolves on the executable search path."""

    @abstractmethod
    def is_root(self) -> bool:
        """Whether the current process has superuser privilege."""

    # ── Generic interpreter-level facts (fallbacks for unknown OSes) ──

    @abstractmethod
    def node(self) -> str:
        """Network node name as the interpreter sees it."""

    @abstractmethod
    def system(self) -> str:
        """OS name as reported by ``uname -s`` (e.g. ``Linux``)."""

    @abstractmethod
    def machine(self) -> str:
        """Hardware architecture (e.g. ``x86_64``)."""

    @abstractmethod
    def cpu_count(self) -> int | None:
        """Logical CPU count, or None if undeterminable."""

    @abstractmethod
    def physical_memory(self) -> int:
        """Physical memory in bytes, 0 if undeterminable."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
