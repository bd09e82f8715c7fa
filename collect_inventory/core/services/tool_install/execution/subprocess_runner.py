"""
L4 Execution — Install subprocess runner.

The SINGLE PLACE where package-manager commands are executed.
Elevation, logging and error handling are centralised here.

Unlike probes, install commands inherit the terminal: sudo/doas may
need to ask for a password, and the package manager's own progress
output is shown to the user as it happens.
"""

from __future__ import annotations

import logging
import subprocess
import time
from collections.abc import Callable
from typing import Any

from collect_inventory.core.models.platform import PlatformFamily

logger = logging.getLogger(__name__)


def elevation_prefix(
    family: PlatformFamily,
    *,
    is_root: bool,
    which: Callable[[str], bool],
) -> list[str]:
    """Pick the privilege wrapper for install commands.

    Root needs none. On FreeBSD, ``doas`` is used when ``sudo`` is not
    installed but ``doas`` is; everywhere else it is ``sudo``.
    """
    if is_root:
        return []
    if family == PlatformFamily.FREEBSD and not which("sudo") and which("doas"):
        return ["doas"]
    return ["sudo"]


def run_install_command(cmd: list[str], *, timeout: int | None = None) -> dict[str, Any]:
    """Run an (already elevated) install command attached to the terminal.

    Args:
        cmd: Full command list, elevation prefix included.
        timeout: Seconds before ``TimeoutExpired``; None waits forever.

    Returns:
        ``{"ok": True, "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "..."}`` on failure.
    """
    logger.info("Running: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        result = subprocess.run(cmd, timeout=timeout, check=False)
    except FileNotFoundError:
        return {"ok": False, "error": f"Command not found: {cmd[0]}"}
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        logger.exception("Subprocess error: %s", cmd)
        return {"ok": False, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if result.returncode == 0:
        return {"ok": True, "elapsed_ms": elapsed_ms}
    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "elapsed_ms": elapsed_ms,
    }
