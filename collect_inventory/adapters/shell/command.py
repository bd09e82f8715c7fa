"""
Host probe — run commands and read files on the local machine.

This is the most fundamental adapter: every collector gets its data
through it. Failures are logged at DEBUG and returned as ``None``.
"""

from __future__ import annotations

import logging
import os
import platform
import subprocess
import time

from collect_inventory.adapters.base import Probe
from collect_inventory.core.services.tool_install.detection.availability import exists

logger = logging.getLogger(__name__)


class HostProbe(Probe):
    """Read-only probe against the running host.

    Args:
        timeout: Seconds before a command is abandoned.
    """

    def __init__(self, timeout: int = 10):
        self.timeout = timeout

    def run(self, cmd: list[str]) -> str | None:
        logger.debug("Executing: %s", " ".join(cmd))
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                # SMBIOS and disk MODEL/SERIAL strings are not guaranteed UTF-8
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            logger.debug("Command not found: %s", cmd[0])
            return None
        except subprocess.TimeoutExpired:
            logger.debug("Command timed out after %ss: %s", self.timeout, " ".join(cmd))
            return None
        except OSError as e:
            logger.debug("Command execution error: %s: %s", " ".join(cmd), e)
            return None

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode != 0:
            logger.debug(
                "Command exited with code %d (%dms): %s — %s",
                result.returncode, elapsed_ms, " ".join(cmd), result.stderr.strip(),
            )
            return None

        output = result.stdout.strip()
        return output or None

    def read(self, path: str) -> str | None:
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                # device-tree strings are NUL-terminated
                text = f.read().replace("\x00", "").strip()
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            return None
        return text or None

    def which(self, tool: str) -> bool:
        return exists(tool)

    def is_root(self) -> bool:
        geteuid = getattr(os, "geteuid", None)
        return geteuid is not None and geteuid() == 0

    def node(self) -> str:
        return platform.node()

    def system(self) -> str:
        return platform.system()

    def machine(self) -> str:
        return platform.machine()

    def cpu_count(self) -> int | None:
        return os.cpu_count()

    def physical_memory(self) -> int:
        try:
            return os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
        except (AttributeError, ValueError, OSError):
            return 0
