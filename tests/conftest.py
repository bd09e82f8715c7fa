"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from collect_inventory.core.models.platform import PlatformFamily, PlatformProfile
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.services.platform_profile import build_profile
from tests.simulated_hosts import freebsd_host, linux_host, unknown_host


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo setup_logging() between tests."""
    yield
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)


@pytest.fixture
def full_config() -> RunConfig:
    return RunConfig()


@pytest.fixture
def linux_profile() -> PlatformProfile:
    return build_profile(PlatformFamily.LINUX, "Linux")


@pytest.fixture
def freebsd_profile() -> PlatformProfile:
    return build_profile(PlatformFamily.FREEBSD, "FreeBSD")


@pytest.fixture
def unknown_profile() -> PlatformProfile:
    return build_profile(PlatformFamily.UNKNOWN, "Darwin")


@pytest.fixture
def linux_probe():
    return linux_host()


@pytest.fixture
def freebsd_probe():
    return freebsd_host()


@pytest.fixture
def unknown_probe():
    return unknown_host()
