"""
L2 Resolver — Missing-tool detection and interactive installation.

One ``DependencyResolver`` lives for one run. It walks the required
tool list before any section is collected, so every prompt appears up
front and a user who declines everything still gets a (gappy) report.

The resolver owns the only mutable state in a run: whether the apt
package index has been refreshed. apt-family installs refresh it once,
before the first install, however many tools end up being installed.
Callers that ever parallelise around this class must serialise calls
to ``ensure``; concurrent package-manager runs corrupt the database.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import click

from collect_inventory.adapters.base import Probe
from collect_inventory.core.models.dependency import (
    DependencyDecision,
    InstallAction,
    PackageManager,
)
from collect_inventory.core.models.platform import PlatformProfile
from collect_inventory.core.services.platform_profile import package_for
from collect_inventory.core.services.tool_install.execution.subprocess_runner import (
    elevation_prefix,
    run_install_command,
)

logger = logging.getLogger(__name__)

_YES_ANSWERS = frozenset({"y", "yes"})

Runner = Callable[[list[str]], dict[str, Any]]
Prompter = Callable[[str], str]


def decide_install(answer: str | None, tool: str, pm: PackageManager) -> InstallAction:
    """Turn a prompt answer into an action.

    Only ``y``/``yes`` (any case) installs. Empty input, end-of-input
    and anything else skip. Without a package manager the answer is
    irrelevant: the user has to install by hand.
    """
    if pm == PackageManager.NONE:
        return InstallAction.MANUAL
    if answer is not None and answer.strip().lower() in _YES_ANSWERS:
        return InstallAction.INSTALL
    return InstallAction.SKIP


def install_commands(
    pm: PackageManager,
    package: str,
    *,
    refresh_index: bool = False,
) -> list[list[str]]:
    """Commands (without elevation) that install *package* with *pm*.

    Args:
        refresh_index: Prepend the apt index refresh. Ignored for
            non-apt managers; pacman refreshes with ``-Sy`` every time.
    """
    if pm.is_apt_family:
        cmds: list[list[str]] = []
        if refresh_index:
            cmds.append([pm.value, "update"])
        cmds.append([pm.value, "install", "-y", package])
        return cmds
    if pm in (PackageManager.DNF, PackageManager.YUM):
        return [[pm.value, "install", "-y", package]]
    if pm == PackageManager.ZYPPER:
        return [["zypper", "--non-interactive", "install", package]]
    if pm == PackageManager.PACMAN:
        return [["pacman", "-Sy", "--noconfirm", package]]
    if pm == PackageManager.PKG:
        return [["pkg", "install", "-y", package]]
    return []


def prompt_user(question: str) -> str:
    """Ask on stderr, read one line from stdin.

    End-of-input reads as an empty answer. Ctrl-C is not swallowed.
    """
    click.echo(question, nl=False, err=True)
    line = click.get_text_stream("stdin").readline()
    return line.strip()


class DependencyResolver:
    """Ensure each required tool is present, installing on request.

    Args:
        profile: Resolved platform.
        pm: Selected package manager (``PackageManager.NONE`` if none).
        probe: Host probe, used for PATH and privilege checks.
        runner: Executes one install command; returns ``{"ok": bool, ...}``.
        prompt: Asks the user a question and returns the raw answer.
        package_overrides: tool → package names from the settings file.
    """

    def __init__(
        self,
        profile: PlatformProfile,
        pm: PackageManager,
        probe: Probe,
        *,
        runner: Runner = run_install_command,
        prompt: Prompter = prompt_user,
        package_overrides: dict[str, str] | None = None,
    ):
        self.profile = profile
        self.pm = pm
        self.probe = probe
        self._runner = runner
        self._prompt = prompt
        self._overrides = dict(package_overrides or {})
        self._index_refreshed = False

    @property
    def index_refreshed(self) -> bool:
        """Whether the apt package index has been refreshed this run."""
        return self._index_refreshed

    def package_for(self, tool: str) -> str:
        return package_for(tool, self.profile, self.pm, self._overrides)

    def ensure(self, tool: str, allow_install: bool) -> DependencyDecision:
        """Make sure *tool* is available, prompting to install it if allowed."""
        if self.probe.which(tool):
            return DependencyDecision(tool=tool, package="", present=True, outcome="present")

        package = self.package_for(tool)

        if not allow_install:
            logger.warning("Warning: '%s' unavailable; skip-install mode active.", tool)
            return DependencyDecision(tool=tool, package=package, outcome="missing")

        logger.warning("Dependency '%s' is missing.", tool)

        if self.pm == PackageManager.NONE:
            logger.warning(
                "Missing command '%s'. Install package '%s' manually and rerun.",
                tool, package,
            )
            return DependencyDecision(tool=tool, package=package, outcome="manual")

        answer = self._prompt(
            f"Install package '{package}' with {self.pm.value} to enable '{tool}'? [y/N]: "
        )
        action = decide_install(answer, tool, self.pm)
        if action != InstallAction.INSTALL:
            logger.warning(
                "Skipping installation of '%s'. Some sections may be incomplete.", package,
            )
            return DependencyDecision(tool=tool, package=package, outcome="declined")

        self._install(package)

        if self.probe.which(tool):
            logger.info("'%s' is now available.", tool)
            return DependencyDecision(
                tool=tool, package=package, present=True,
                user_chose_install=True, install_succeeded=True, outcome="installed",
            )

        logger.warning("  -> '%s' still unavailable after attempted install.", tool)
        return DependencyDecision(
            tool=tool, package=package, user_chose_install=True, outcome="failed",
        )

    def ensure_all(self, tools: list[str], allow_install: bool) -> list[DependencyDecision]:
        """Resolve every tool in order. Never raises for a missing tool."""
        return [self.ensure(tool, allow_install) for tool in tools]

    def _install(self, package: str) -> None:
        prefix = elevation_prefix(
            self.profile.family,
            is_root=self.probe.is_root(),
            which=self.probe.which,
        )
        refresh = self.pm.is_apt_family and not self._index_refreshed
        for cmd in install_commands(self.pm, package, refresh_index=refresh):
            is_refresh = cmd[1:] == ["update"]
            result = self._runner(prefix + cmd)
            if is_refresh:
                # Refresh once per run, even if the refresh itself failed.
                self._index_refreshed = True
            if not result.get("ok"):
                logger.warning(
                    "'%s' failed: %s", " ".join(prefix + cmd), result.get("error", "unknown error"),
                )
                if not is_refresh:
                    break
