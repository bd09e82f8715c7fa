"""
Tests for the probe contract — mock and host probes.
"""

import shutil
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from collect_inventory.adapters.mock import MockProbe
from collect_inventory.adapters.shell.command import HostProbe
from collect_inventory.core.services.sections.storage import StorageCollector

# ── Mock Probe Tests ─────────────────────────────────────────────────


class TestMockProbe:
    def test_canned_command(self):
        probe = MockProbe(commands={"uname -sr": "Linux 6.8.0\n"})
        assert probe.run(["uname", "-sr"]) == "Linux 6.8.0"
        assert probe.call_log == [["uname", "-sr"]]

    def test_unknown_command_is_none(self):
        assert MockProbe().run(["lsblk"]) is None

    def test_blank_output_is_none(self):
        probe = MockProbe(commands={"lspci": "  \n"})
        assert probe.run(["lspci"]) is None

    def test_read_strips_nul(self):
        probe = MockProbe(files={"/proc/device-tree/model": "Raspberry Pi 5\x00"})
        assert probe.read("/proc/device-tree/model") == "Raspberry Pi 5"

    def test_tools(self):
        probe = MockProbe(tools={"lsblk"})
        assert probe.which("lsblk")
        probe.remove_tool("lsblk")
        probe.add_tool("lspci")
        assert not probe.which("lsblk")
        assert probe.which("lspci")

    def test_reset(self):
        probe = MockProbe()
        probe.run(["hostname"])
        probe.reset()
        assert probe.call_log == []


# ── Host Probe Tests ─────────────────────────────────────────────────


class TestHostProbe:
    def test_run_success(self):
        completed = MagicMock(returncode=0, stdout="web01\n", stderr="")
        with patch("subprocess.run", return_value=completed) as run:
            assert HostProbe(timeout=3).run(["hostname"]) == "web01"
        assert run.call_args.kwargs["timeout"] == 3
        assert run.call_args.kwargs["capture_output"] is True

    def test_run_non_zero_exit(self):
        completed = MagicMock(returncode=1, stdout="partial", stderr="permission denied")
        with patch("subprocess.run", return_value=completed):
            assert HostProbe().run(["dmidecode", "-s", "system-serial-number"]) is None

    def test_run_empty_output(self):
        completed = MagicMock(returncode=0, stdout="\n", stderr="")
        with patch("subprocess.run", return_value=completed):
            assert HostProbe().run(["lspci"]) is None

    def test_run_missing_binary(self):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert HostProbe().run(["lscpu"]) is None

    def test_run_timeout(self):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("lsblk", 10)):
            assert HostProbe().run(["lsblk"]) is None

    def test_run_decodes_with_replacement(self):
        completed = MagicMock(returncode=0, stdout="ok", stderr="")
        with patch("subprocess.run", return_value=completed) as run:
            HostProbe().run(["lsblk"])
        assert run.call_args.kwargs["encoding"] == "utf-8"
        assert run.call_args.kwargs["errors"] == "replace"

    @pytest.mark.skipif(shutil.which("printf") is None, reason="needs printf")
    def test_run_undecodable_output(self):
        out = HostProbe().run(["printf", "MODEL \\377\\376 disk"])
        assert out is not None
        assert out.startswith("MODEL ")
        assert out.endswith(" disk")
        assert "\ufffd" in out

    def test_read(self, tmp_path):
        path = tmp_path / "model"
        path.write_bytes(b"Raspberry Pi 4 Model B\x00")
        assert HostProbe().read(str(path)) == "Raspberry Pi 4 Model B"

    def test_read_missing(self, tmp_path):
        assert HostProbe().read(str(tmp_path / "absent")) is None

    def test_which(self):
        with patch("shutil.which", return_value="/usr/sbin/dmidecode"):
            assert HostProbe().which("dmidecode")

    def test_repr(self):
        assert "HostProbe" in repr(HostProbe())


class TestHostProbeStorage:
    @pytest.mark.skipif(shutil.which("sh") is None, reason="needs a POSIX shell")
    def test_latin1_disk_model(self, tmp_path, monkeypatch, linux_profile, full_config):
        lsblk = tmp_path / "lsblk"
        lsblk.write_bytes(
            b"#!/bin/sh\n"
            b"printf 'NAME SIZE TYPE FSTYPE MOUNTPOINT MODEL SERIAL\\n'\n"
            b"printf 'sda 1.8T disk   Caf\\351 Disk S1\\n'\n"
        )
        lsblk.chmod(0o755)
        monkeypatch.setenv("PATH", f"{tmp_path}:/usr/bin:/bin")

        body = StorageCollector(HostProbe()).run(linux_profile, full_config)
        assert "collection failed" not in body
        assert "Caf\ufffd Disk" in body
