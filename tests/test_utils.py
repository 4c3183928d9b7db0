"""Tests for vmsetup.utils module."""

from __future__ import annotations

import subprocess
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from vmsetup.exceptions import SetupError
from vmsetup.utils import launch_file, log, machine_dir, parse_disk_size, run, timestamp


class TestLog:
    def test_info_level(self, capsys):
        log("INFO", "test message")
        captured = capsys.readouterr()
        assert "[INFO]" in captured.out
        assert "test message" in captured.out

    def test_step_preceded_by_blank_line(self, capsys):
        log("STEP", "Creating VM")
        out = capsys.readouterr().out
        assert out.startswith("\n")
        assert "[STEP]" in out

    def test_error_goes_to_stderr(self, capsys):
        log("ERROR", "broken")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "broken" in captured.err

    def test_debug_suppressed_by_default(self, capsys):
        log("DEBUG", "should not appear")
        captured = capsys.readouterr()
        assert captured.out == ""


class TestTimestamp:
    def test_format(self):
        assert timestamp(datetime(2025, 7, 24, 13, 42, 5)) == "20250724_134205"


class TestParseDiskSize:
    @pytest.mark.parametrize("raw, expected", [("10", 10), ("1", 1), ("250", 250), (" 20 ", 20), (10, 10)])
    def test_valid(self, raw, expected):
        assert parse_disk_size(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "-5", "abc", "", "10.5", "1e3", "²"])
    def test_invalid(self, raw):
        with pytest.raises(SetupError, match="Invalid disk size"):
            parse_disk_size(raw)


class TestRun:
    def test_passes_text_and_check(self):
        completed = subprocess.CompletedProcess(["x"], 0, stdout="ok", stderr="")
        with patch("vmsetup.utils.subprocess.run", return_value=completed) as mock_run:
            result = run(["x"], capture_output=True)
        assert result.stdout == "ok"
        mock_run.assert_called_once_with(["x"], check=True, text=True, capture_output=True)


class TestLaunchFile:
    @pytest.mark.parametrize(
        "platform, prefix",
        [("win32", ["cmd", "/c", "start", ""]), ("darwin", ["open"]), ("linux", ["xdg-open"])],
    )
    def test_command_per_platform(self, platform, prefix):
        target = Path("/vms/vm1/vm1.vbox")
        with patch("vmsetup.utils.subprocess.Popen") as mock_popen:
            launch_file(target, platform=platform)
        cmd = mock_popen.call_args[0][0]
        assert cmd == prefix + [str(target)]

    def test_launch_failure_raises(self):
        with patch("vmsetup.utils.subprocess.Popen", side_effect=FileNotFoundError("xdg-open")):
            with pytest.raises(SetupError, match="Failed to launch"):
                launch_file(Path("/vms/vm1/vm1.vbox"), platform="linux")


class TestMachineDir:
    def test_joins_name(self):
        assert machine_dir(Path("/vms"), "vm1") == Path("/vms/vm1")
