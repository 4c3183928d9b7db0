"""VBoxManage invocation and output parsing for tcbsd-vm-setup."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

from vmsetup.constants import BRIDGED_NAME_RE, DEFAULT_MACHINE_FOLDER_RE
from vmsetup.exceptions import CommandError, SetupError
from vmsetup.utils import log, run


def parse_default_machine_folder(output: str) -> Optional[str]:
    match = DEFAULT_MACHINE_FOLDER_RE.search(output)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def parse_bridged_adapters(output: str) -> List[str]:
    """Collect adapter names from ``list bridgedifs`` output, in listing order."""
    names = []
    for match in BRIDGED_NAME_RE.finditer(output):
        name = match.group(1).strip()
        if name:
            names.append(name)
    return names


def is_vm_listed(output: str, name: str) -> bool:
    return f'"{name}"' in output


def _on_off(flag: bool) -> str:
    return "on" if flag else "off"


class VBoxManage:
    """Thin wrapper around the VBoxManage executable."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def locate(cls, path: Path) -> "VBoxManage":
        if not Path(path).is_file():
            raise SetupError(
                f"VBoxManage not found at: {path}\n"
                "Please install VirtualBox or provide the correct path."
            )
        return cls(path)

    def _run(self, *args: str) -> str:
        cmd = [str(self.path), *args]
        try:
            result = run(cmd, check=True, capture_output=True, errors="replace")
        except subprocess.CalledProcessError as exc:
            output = exc.stderr or exc.stdout or ""
            raise CommandError(cmd, exc.returncode, output) from exc
        except OSError as exc:
            raise SetupError(f"Failed to execute {self.path}: {exc}") from exc
        return result.stdout or ""

    # Queries

    def default_machine_folder(self, fallback: Path) -> Path:
        try:
            output = self._run("list", "systemproperties")
        except SetupError as exc:
            log("DEBUG", str(exc))
            output = ""
        folder = parse_default_machine_folder(output)
        if folder is None:
            log("WARN", "Could not detect default VirtualBox VM folder. Falling back.")
            return fallback
        return Path(folder)

    def bridged_adapters(self) -> List[str]:
        try:
            output = self._run("list", "bridgedifs")
        except SetupError as exc:
            log("WARN", f"Could not list bridged adapters: {exc}")
            return []
        return parse_bridged_adapters(output)

    def vm_registered(self, name: str) -> bool:
        return is_vm_listed(self._run("list", "vms"), name)

    # Mutations

    def create_vm(self, name: str, base_folder: Path, ostype: str) -> None:
        self._run(
            "createvm",
            "--name",
            name,
            "--basefolder",
            str(base_folder),
            "--ostype",
            ostype,
            "--register",
        )

    def modify_vm(self, name: str, options: List[str]) -> None:
        self._run("modifyvm", name, *options)

    def convert_from_raw(self, source: Path, destination: Path, disk_format: str) -> None:
        self._run("convertfromraw", "--format", disk_format, str(source), str(destination))

    def add_storage_controller(
        self,
        vm_name: str,
        controller_name: str,
        bus: str,
        controller_type: str,
        host_io_cache: bool = True,
        bootable: bool = True,
    ) -> None:
        self._run(
            "storagectl",
            vm_name,
            "--name",
            controller_name,
            "--add",
            bus,
            "--controller",
            controller_type,
            "--hostiocache",
            _on_off(host_io_cache),
            "--bootable",
            _on_off(bootable),
        )

    def attach_disk(self, vm_name: str, controller_name: str, port: int, medium: Path, device: int = 0) -> None:
        self._run(
            "storageattach",
            vm_name,
            "--storagectl",
            controller_name,
            "--port",
            str(port),
            "--device",
            str(device),
            "--type",
            "hdd",
            "--medium",
            str(medium),
        )

    def create_medium(self, filename: Path, size_mb: int, disk_format: str) -> None:
        self._run("createmedium", "--filename", str(filename), "--size", str(size_mb), "--format", disk_format)
