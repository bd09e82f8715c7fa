"""
Logging configuration — one call from the CLI before anything is probed.

Every module logs through ``logging.getLogger(__name__)``. Missing
tools, declined or failed installs and unreadable sources are WARNING
records, so at the default level stderr shows just the message text,
next to the install prompts and apart from the report on stdout.

Console level, highest precedence first:
    --debug, --verbose, $INVENTORY_LOG_LEVEL, settings ``log_level``, WARNING

$INVENTORY_LOG_FILE adds a detailed log file; $INVENTORY_LOG_FILE_LEVEL
sets its level (default: the console level).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LEVEL = "INVENTORY_LOG_LEVEL"
ENV_FILE = "INVENTORY_LOG_FILE"
ENV_FILE_LEVEL = "INVENTORY_LOG_FILE_LEVEL"

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

# (highest numeric level served, format, datefmt), checked in order
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, _DETAILED, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = (_DETAILED, "%Y-%m-%d %H:%M:%S")


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    env_level: str | None = None,
    settings_level: str | None = None,
) -> str:
    """Pick the console level name from flags, env and settings."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return env_level or settings_level or "WARNING"


def console_formatter(level: int) -> logging.Formatter:
    """Terse at WARNING and above, more context the lower the level."""
    for ceiling, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= ceiling:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter("%(message)s")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with ours.

    Args:
        level: Console level name.
        log_file: Optional path for a detailed log file.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(*_FILE_FORMAT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    # a closed stderr must not turn a log call into a traceback
    logging.raiseExceptions = False


def setup_from_environment(
    *,
    debug: bool = False,
    verbose: bool = False,
    settings_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """``setup_logging`` driven by CLI flags and INVENTORY_LOG_* variables.

    Returns:
        The console level name that was applied.
    """
    env = os.environ if environ is None else environ
    level = resolve_level(
        debug=debug,
        verbose=verbose,
        env_level=env.get(ENV_LEVEL),
        settings_level=settings_level,
    )
    setup_logging(level, log_file=env.get(ENV_FILE), log_file_level=env.get(ENV_FILE_LEVEL))
    return level


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
