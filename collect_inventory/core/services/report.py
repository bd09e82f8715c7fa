"""
Report assembly — run the enabled collectors in order and persist the result.

``stream_to`` is what the CLI uses: each chunk (header, every section,
footer) is written to the report file and echoed to the terminal as
soon as it is produced, the way ``tee`` would. Both sinks receive the
same UTF-8 bytes, whatever the terminal locale. An interrupted run
leaves a truncated file, never an interleaved one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from collect_inventory import SCRIPT_LABEL
from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.platform import PlatformProfile, SectionKind
from collect_inventory.core.models.report import RenderedSection, Report
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.sections import SectionCollector, build_collectors

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ReportAssembler:
    """Collects enabled sections for one run.

    Args:
        profile: Resolved platform.
        config: CLI toggles.
        probe: Host probe shared by all collectors.
        label: Script label for the header and file name.
        clock: Returns the (timezone-aware) report time.
        collectors: Override the default collectors (tests).
    """

    def __init__(
        self,
        profile: PlatformProfile,
        config: RunConfig,
        probe: Probe,
        *,
        label: str = SCRIPT_LABEL,
        clock: Clock = _local_now,
        collectors: dict[SectionKind, SectionCollector] | None = None,
    ):
        self.profile = profile
        self.config = config
        self.label = label
        self._clock = clock
        self._collectors = collectors if collectors is not None else build_collectors(probe)

    def enabled_sections(self) -> list[SectionKind]:
        """Sections this run will render, in report order."""
        return [k for k in self.profile.section_order if self.config.section_enabled(k)]

    def new_report(self) -> Report:
        """An empty report stamped with the current time."""
        now = self._clock()
        return Report(
            label=self.label,
            timestamp=now.isoformat(timespec="seconds"),
            file_stamp=now.strftime("%Y%m%d_%H%M%S"),
        )

    def collect(self, kind: SectionKind) -> RenderedSection:
        collector = self._collectors[kind]
        logger.info("Collecting %s", kind.heading)
        return RenderedSection(kind=kind, body=collector.run(self.profile, self.config))

    def iter_sections(self) -> Iterator[RenderedSection]:
        for kind in self.enabled_sections():
            yield self.collect(kind)

    def assemble(self) -> Report:
        """Collect every enabled section into a report."""
        report = self.new_report()
        report.sections.extend(self.iter_sections())
        return report

    def persist(self, report: Report, directory: Path | None = None) -> Path:
        """Write a finished report; returns the file path."""
        path = (directory or Path.cwd()) / report.filename
        path.write_text(report.render(), encoding="utf-8")
        logger.info("Report written to %s", path)
        return path

    def stream_to(self, out: BinaryIO, directory: Path | None = None) -> tuple[Report, Path]:
        """Collect, writing each chunk to the file and *out* as it is ready."""
        report = self.new_report()
        path = (directory or Path.cwd()) / report.filename

        with open(path, "wb") as fh:
            def emit(chunk: str) -> None:
                data = chunk.encode("utf-8")
                fh.write(data)
                fh.flush()
                out.write(data)
                out.flush()

            emit(report.header())
            for section in self.iter_sections():
                report.sections.append(section)
                emit(section.render())
            emit(report.footer())

        logger.info("Report written to %s", path)
        return report, path
