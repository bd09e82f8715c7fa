"""
Tests for the dependency workflow — prompts, decisions, installs.

The runner and prompt are injected, so nothing here touches a real
package manager. A fake runner can "install" a tool by adding it to
the MockProbe's PATH.
"""

import pytest

from collect_inventory.adapters.mock import MockProbe
from collect_inventory.core.models.dependency import InstallAction, PackageManager
from collect_inventory.core.models.platform import PlatformFamily
from collect_inventory.core.services.platform_profile import build_profile
from collect_inventory.core.services.tool_install.resolver.dependency_resolver import (
    DependencyResolver,
    decide_install,
    install_commands,
)


class FakeRunner:
    """Records commands; ``install`` makes the named tools appear."""

    def __init__(self, probe: MockProbe, installs: dict[str, str] | None = None, ok: bool = True):
        self.probe = probe
        self.installs = installs or {}   # package → tool it provides
        self.ok = ok
        self.calls: list[list[str]] = []

    def __call__(self, cmd: list[str]) -> dict:
        self.calls.append(cmd)
        if not self.ok:
            return {"ok": False, "error": "Command failed (exit 1)"}
        package = cmd[-1]
        if package in self.installs:
            self.probe.add_tool(self.installs[package])
        return {"ok": True}


class FakePrompt:
    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.questions: list[str] = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else ""


def _resolver(probe, pm=PackageManager.APT, family=PlatformFamily.LINUX, *, runner=None, prompt=None, **kw):
    runner = runner or FakeRunner(probe)
    prompt = prompt or FakePrompt()
    resolver = DependencyResolver(
        build_profile(family), pm, probe, runner=runner, prompt=prompt, **kw,
    )
    return resolver, runner, prompt


# ── Decision ──────────────────────────────────────────────────────


class TestDecideInstall:
    @pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", "Yes", " y "])
    def test_yes(self, answer):
        assert decide_install(answer, "lspci", PackageManager.APT) == InstallAction.INSTALL

    @pytest.mark.parametrize("answer", ["", "n", "no", "yep", "sure", None])
    def test_everything_else_skips(self, answer):
        assert decide_install(answer, "lspci", PackageManager.APT) == InstallAction.SKIP

    def test_no_package_manager_is_manual(self):
        assert decide_install("y", "lspci", PackageManager.NONE) == InstallAction.MANUAL


# ── Commands ──────────────────────────────────────────────────────


class TestInstallCommands:
    def test_apt_with_refresh(self):
        assert install_commands(PackageManager.APT, "pciutils", refresh_index=True) == [
            ["apt", "update"],
            ["apt", "install", "-y", "pciutils"],
        ]

    def test_apt_get_without_refresh(self):
        assert install_commands(PackageManager.APT_GET, "pciutils") == [
            ["apt-get", "install", "-y", "pciutils"],
        ]

    def test_dnf(self):
        assert install_commands(PackageManager.DNF, "iproute") == [["dnf", "install", "-y", "iproute"]]

    def test_pacman_refreshes_inline(self):
        assert install_commands(PackageManager.PACMAN, "pciutils", refresh_index=True) == [
            ["pacman", "-Sy", "--noconfirm", "pciutils"],
        ]

    def test_zypper(self):
        assert install_commands(PackageManager.ZYPPER, "pciutils") == [
            ["zypper", "--non-interactive", "install", "pciutils"],
        ]

    def test_pkg(self):
        assert install_commands(PackageManager.PKG, "dmidecode") == [
            ["pkg", "install", "-y", "dmidecode"],
        ]

    def test_none(self):
        assert install_commands(PackageManager.NONE, "dmidecode") == []


# ── Workflow ──────────────────────────────────────────────────────


class TestEnsure:
    def test_present_tool_never_prompts(self):
        probe = MockProbe(tools={"lspci"})
        resolver, runner, prompt = _resolver(probe)
        decision = resolver.ensure("lspci", allow_install=True)
        assert decision.present
        assert decision.outcome == "present"
        assert prompt.questions == []
        assert runner.calls == []

    def test_skip_install_never_runs_anything(self, caplog):
        probe = MockProbe(tools=set())
        resolver, runner, prompt = _resolver(probe, prompt=FakePrompt("y"))
        decision = resolver.ensure("lspci", allow_install=False)
        assert decision.outcome == "missing"
        assert prompt.questions == []
        assert runner.calls == []
        assert "skip-install mode active" in caplog.text

    def test_no_package_manager_is_manual(self, caplog):
        probe = MockProbe(tools=set())
        resolver, runner, prompt = _resolver(probe, pm=PackageManager.NONE)
        decision = resolver.ensure("lspci", allow_install=True)
        assert decision.outcome == "manual"
        assert prompt.questions == []
        assert runner.calls == []
        assert "pciutils" in caplog.text

    @pytest.mark.parametrize("answer", ["n", "", "maybe"])
    def test_declined(self, answer, caplog):
        probe = MockProbe(tools=set())
        resolver, runner, _ = _resolver(probe, prompt=FakePrompt(answer))
        decision = resolver.ensure("lspci", allow_install=True)
        assert decision.outcome == "declined"
        assert not decision.user_chose_install
        assert runner.calls == []
        assert "Skipping installation of 'pciutils'" in caplog.text

    def test_prompt_names_package_and_manager(self):
        probe = MockProbe(tools=set())
        resolver, _, prompt = _resolver(probe, pm=PackageManager.DNF)
        resolver.ensure("ip", allow_install=True)
        assert "'iproute'" in prompt.questions[0]
        assert "dnf" in prompt.questions[0]

    def test_installed(self):
        probe = MockProbe(tools=set())
        runner = FakeRunner(probe, installs={"pciutils": "lspci"})
        resolver, _, _ = _resolver(probe, runner=runner, prompt=FakePrompt("y"))
        decision = resolver.ensure("lspci", allow_install=True)
        assert decision.outcome == "installed"
        assert decision.present and decision.install_succeeded
        assert runner.calls == [
            ["sudo", "apt", "update"],
            ["sudo", "apt", "install", "-y", "pciutils"],
        ]

    def test_still_missing_after_install(self, caplog):
        probe = MockProbe(tools=set())
        resolver, _, _ = _resolver(probe, prompt=FakePrompt("yes"))
        decision = resolver.ensure("lspci", allow_install=True)
        assert decision.outcome == "failed"
        assert decision.user_chose_install
        assert not decision.install_succeeded
        assert "still unavailable after attempted install" in caplog.text

    def test_runner_failure(self):
        probe = MockProbe(tools=set())
        runner = FakeRunner(probe, ok=False)
        resolver, _, _ = _resolver(probe, runner=runner, prompt=FakePrompt("y"))
        decision = resolver.ensure("lspci", allow_install=True)
        assert decision.outcome == "failed"
        # refresh failed, install still attempted
        assert runner.calls[-1] == ["sudo", "apt", "install", "-y", "pciutils"]

    def test_root_runs_without_prefix(self):
        probe = MockProbe(tools=set(), root=True)
        resolver, runner, _ = _resolver(
            probe, pm=PackageManager.PACMAN, prompt=FakePrompt("y"),
        )
        resolver.ensure("lspci", allow_install=True)
        assert runner.calls == [["pacman", "-Sy", "--noconfirm", "pciutils"]]

    def test_freebsd_doas(self):
        probe = MockProbe(system="FreeBSD", tools={"doas"})
        resolver, runner, _ = _resolver(
            probe, pm=PackageManager.PKG, family=PlatformFamily.FREEBSD, prompt=FakePrompt("y"),
        )
        resolver.ensure("dmidecode", allow_install=True)
        assert runner.calls == [["doas", "pkg", "install", "-y", "dmidecode"]]

    def test_package_override(self):
        probe = MockProbe(tools=set())
        resolver, runner, _ = _resolver(
            probe, prompt=FakePrompt("y"), package_overrides={"lspci": "pciutils-ng"},
        )
        resolver.ensure("lspci", allow_install=True)
        assert runner.calls[-1][-1] == "pciutils-ng"


class TestEnsureAll:
    def test_apt_refreshes_once(self):
        probe = MockProbe(tools=set())
        runner = FakeRunner(probe, installs={
            "util-linux": "lsblk", "pciutils": "lspci", "dmidecode": "dmidecode",
        })
        resolver, _, _ = _resolver(probe, runner=runner, prompt=FakePrompt("y", "y", "y"))

        decisions = resolver.ensure_all(["lsblk", "lspci", "dmidecode"], allow_install=True)

        assert [d.outcome for d in decisions] == ["installed"] * 3
        updates = [c for c in runner.calls if c[-1] == "update"]
        installs = [c for c in runner.calls if "install" in c]
        assert len(updates) == 1
        assert len(installs) == 3
        assert runner.calls[0] == ["sudo", "apt", "update"]
        assert resolver.index_refreshed

    def test_refresh_not_repeated_after_failure(self):
        probe = MockProbe(tools=set())
        runner = FakeRunner(probe, ok=False)
        resolver, _, _ = _resolver(probe, runner=runner, prompt=FakePrompt("y", "y"))
        resolver.ensure_all(["lsblk", "lspci"], allow_install=True)
        assert sum(1 for c in runner.calls if c[-1] == "update") == 1

    def test_declined_tool_does_not_refresh(self):
        probe = MockProbe(tools=set())
        resolver, runner, _ = _resolver(probe, prompt=FakePrompt("n", "n"))
        resolver.ensure_all(["lsblk", "lspci"], allow_install=True)
        assert runner.calls == []
        assert not resolver.index_refreshed

    def test_non_apt_never_refreshes(self):
        probe = MockProbe(tools=set())
        resolver, runner, _ = _resolver(probe, pm=PackageManager.DNF, prompt=FakePrompt("y", "y"))
        resolver.ensure_all(["lsblk", "lspci"], allow_install=True)
        assert all(c[-1] != "update" for c in runner.calls)
        assert not resolver.index_refreshed

    def test_mixed_outcomes_keep_order(self):
        probe = MockProbe(tools={"hostname"})
        resolver, _, _ = _resolver(probe, prompt=FakePrompt("n"))
        decisions = resolver.ensure_all(["hostname", "lspci"], allow_install=True)
        assert [(d.tool, d.outcome) for d in decisions] == [
            ("hostname", "present"),
            ("lspci", "declined"),
        ]
