"""
Dependency models — package managers and per-tool resolution outcomes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PackageManager(str, Enum):
    """System package managers we know how to drive."""

    APT = "apt"
    APT_GET = "apt-get"
    DNF = "dnf"
    YUM = "yum"
    PACMAN = "pacman"
    ZYPPER = "zypper"
    PKG = "pkg"
    NONE = "none"

    @property
    def is_apt_family(self) -> bool:
        return self in (PackageManager.APT, PackageManager.APT_GET)


class InstallAction(str, Enum):
    """What to do about a missing tool once the user has answered."""

    INSTALL = "install"
    SKIP = "skip"
    MANUAL = "manual"


class DependencyDecision(BaseModel):
    """Outcome of ensuring one required tool.

    ``outcome`` names the bucket the tool landed in:

        present    already on PATH
        missing    absent, installs disabled (``--skip-install``)
        manual     absent, no package manager to install with
        declined   absent, user said no at the prompt
        installed  absent, install ran and the tool is now on PATH
        failed     absent, install ran but the tool is still missing
    """

    model_config = ConfigDict(frozen=True)

    tool: str
    package: str = ""
    required: bool = True
    present: bool = False
    user_chose_install: bool = False
    install_succeeded: bool = False
    outcome: str = "missing"
