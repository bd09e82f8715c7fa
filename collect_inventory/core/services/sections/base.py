"""
Section collector base — formatting, fallback chains, per-family dispatch.

Every collector maps each ``PlatformFamily`` to a handler that returns
report lines. ``run`` never raises: a handler blowing up turns into a
single explanatory line.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile, SectionKind
from collect_inventory.core.models.run_config import RunConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

NA = "n/a"

Handler = Callable[[PlatformProfile, RunConfig], list[str]]


# ── Formatting ──────────────────────────────────────────────────


def kv(key: str, value: str | None) -> str:
    """One ``  Key:               value`` report line."""
    return f"  {key + ':':<18} {value or NA}"


def row(name: str, value: str) -> str:
    """One indented ``name  value`` line inside a sub-listing."""
    return f"    {name:<12} {value}"


def not_implemented(profile: PlatformProfile) -> list[str]:
    return [f"  Not implemented for this OS ({profile.label})."]


def table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    """Left-aligned text table, columns as wide as their widest cell."""
    widths = [len(h) for h in headers]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(cell))
    lines = []
    for r in [list(headers), *rows]:
        cells = [cell.ljust(widths[i]) for i, cell in enumerate(r)]
        lines.append(" ".join(cells).rstrip())
    return lines


# ── Fallback chains ─────────────────────────────────────────────


@dataclass(frozen=True)
class Strategy(Generic[T]):
    """One way of obtaining a value. Returns None/empty when it cannot."""

    name: str
    fn: Callable[[Probe], T | None]


def first_result(
    probe: Probe,
    strategies: Sequence[Strategy[T]],
) -> tuple[str | None, T | None]:
    """Try strategies in order; the first non-empty result wins.

    Returns:
        ``(strategy_name, value)``, or ``(None, None)`` if all came up empty.
    """
    for strategy in strategies:
        try:
            value = strategy.fn(probe)
        except Exception as e:
            logger.debug("Strategy %s failed: %s", strategy.name, e)
            continue
        if value:
            logger.debug("Strategy %s succeeded", strategy.name)
            return strategy.name, value
    return None, None


def first_value(probe: Probe, strategies: Sequence[Strategy[str]]) -> str | None:
    """``first_result`` for the common single-string case."""
    return first_result(probe, strategies)[1]


def from_cmd(*argv: str) -> Strategy[str]:
    """Strategy: stdout of a command."""
    return Strategy(" ".join(argv), lambda p: p.run(list(argv)))


def from_file(path: str) -> Strategy[str]:
    """Strategy: contents of a file."""
    return Strategy(path, lambda p: p.read(path))


# ── Collector base ──────────────────────────────────────────────


class SectionCollector(ABC):
    """Produces one labelled block of the report."""

    kind: SectionKind

    def __init__(self, probe: Probe):
        self.probe = probe

    @abstractmethod
    def handlers(self) -> dict[PlatformFamily, Handler]:
        """One handler per ``PlatformFamily`` — all of them."""

    def run(self, profile: PlatformProfile, config: RunConfig) -> str:
        """Render this section's body. Never raises."""
        handler = self.handlers().get(profile.family)
        if handler is None:
            return "\n".join(not_implemented(profile))
        try:
            lines = handler(profile, config)
        except Exception as e:
            logger.warning("%s section failed: %s", self.kind.heading, e)
            lines = [kv("Status", f"collection failed ({e})")]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} kind={self.kind.value!r}>"
