"""Shared test fixtures and a recording stand-in for VBoxManage invocations."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from vmsetup.models import MachineProfile, SetupConfig
from vmsetup.vboxmanage import VBoxManage

MUTATING_SUBCOMMANDS = {
    "createvm",
    "modifyvm",
    "convertfromraw",
    "storagectl",
    "storageattach",
    "createmedium",
}


def _key(cmd: List[str]) -> str:
    if len(cmd) > 2 and cmd[1] == "list":
        return f"list {cmd[2]}"
    return cmd[1]


class FakeRunner:
    """Replacement for ``vmsetup.vboxmanage.run`` that records every command."""

    def __init__(
        self,
        outputs: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, Tuple[int, str]]] = None,
    ) -> None:
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.calls: List[List[str]] = []

    def __call__(self, cmd, check=True, **kwargs):
        self.calls.append(list(cmd))
        key = _key(cmd)
        if key in self.failures:
            returncode, stderr = self.failures[key]
            raise subprocess.CalledProcessError(returncode, cmd, output="", stderr=stderr)
        return subprocess.CompletedProcess(cmd, 0, stdout=self.outputs.get(key, ""), stderr="")

    def launch(self, path) -> None:
        """Stand-in for ``launch_file`` that logs the launch alongside VBoxManage calls."""
        self.calls.append(["<open>", "launch", str(path)])

    @property
    def subcommands(self) -> List[str]:
        return [_key(cmd) for cmd in self.calls]

    @property
    def mutating(self) -> List[List[str]]:
        return [cmd for cmd in self.calls if cmd[1] in MUTATING_SUBCOMMANDS]


@pytest.fixture
def machine_profile() -> MachineProfile:
    return MachineProfile(
        name="TwinCAT/BSD",
        ostype="FreeBSD_64",
        memory_mb=1024,
        vram_mb=128,
        acpi=True,
        hpet=True,
        graphics_controller="vmsvga",
        firmware="efi64",
        controller_name="SATA",
        controller_bus="sata",
        controller_type="IntelAhci",
        host_io_cache=True,
        installer_disk="TcBSD_installer.vdi",
        installer_format="VDI",
        runtime_disk="TcBSD.vhd",
        runtime_format="VHD",
    )


@pytest.fixture
def vboxmanage_path(tmp_path) -> Path:
    path = tmp_path / "VirtualBox" / "VBoxManage"
    path.parent.mkdir()
    path.write_text("")
    return path


@pytest.fixture
def image_dir(tmp_path) -> Path:
    directory = tmp_path / "iso"
    directory.mkdir()
    (directory / "tcbsd.iso").write_bytes(b"\0" * 16)
    return directory


@pytest.fixture
def setup_config(tmp_path, vboxmanage_path, image_dir, machine_profile) -> SetupConfig:
    return SetupConfig(
        vboxmanage_path=vboxmanage_path,
        image_dir=image_dir,
        image_extensions=(".iso", ".img"),
        default_disk_size_gb=10,
        name_prefix="TwinCAT_BSD",
        fallback_machine_folder=tmp_path / "home" / "VirtualBox VMs",
        profile=machine_profile,
    )


@pytest.fixture
def fake_runner(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr("vmsetup.vboxmanage.run", runner)
    return runner


@pytest.fixture
def tool(vboxmanage_path) -> VBoxManage:
    return VBoxManage(vboxmanage_path)
