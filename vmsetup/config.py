"""Configuration defaults and machine profile loading for tcbsd-vm-setup."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import yaml  # type: ignore
except ImportError as exc:  # pragma: no cover
    raise SystemExit("PyYAML is required but not installed") from exc

from vmsetup.constants import (
    DEFAULT_DISK_SIZE_GB,
    DEFAULT_PROFILE_PATH,
    FALLBACK_MACHINE_FOLDER_NAME,
    IMAGE_DIR_NAME,
    IMAGE_EXTENSIONS,
    VBOXMANAGE_PATHS,
    VM_NAME_PREFIX,
)
from vmsetup.exceptions import SetupError
from vmsetup.models import MachineProfile, SetupConfig


def _require(section: Dict[str, Any], key: str, where: str) -> Any:
    field = f"{where}.{key}" if where else key
    if not isinstance(section, dict) or key not in section:
        raise SetupError(f"Machine profile is missing '{field}'")
    value = section[key]
    if value is None or (isinstance(value, str) and not value.strip()):
        raise SetupError(f"Machine profile field '{field}' must not be empty")
    return value


def _as_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SetupError(f"Machine profile field '{where}' must be a positive integer (got {value!r})")
    return value


def load_machine_profile(path: Optional[Path] = None) -> MachineProfile:
    if path is None:
        path = DEFAULT_PROFILE_PATH
    if not path.exists():
        raise SetupError(f"Machine profile missing: {path}")
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise SetupError(f"Machine profile {path} contains invalid YAML: {exc}")

    machine = _require(data or {}, "machine", "")
    storage = _require(machine, "storage", "machine")
    disks = _require(machine, "disks", "machine")
    installer = _require(disks, "installer", "machine.disks")
    runtime = _require(disks, "runtime", "machine.disks")

    return MachineProfile(
        name=str(machine.get("name") or "VM"),
        ostype=str(_require(machine, "ostype", "machine")),
        memory_mb=_as_int(_require(machine, "memory_mb", "machine"), "machine.memory_mb"),
        vram_mb=_as_int(_require(machine, "vram_mb", "machine"), "machine.vram_mb"),
        acpi=bool(machine.get("acpi", True)),
        hpet=bool(machine.get("hpet", True)),
        graphics_controller=str(_require(machine, "graphics_controller", "machine")),
        firmware=str(_require(machine, "firmware", "machine")),
        controller_name=str(_require(storage, "controller_name", "machine.storage")),
        controller_bus=str(_require(storage, "bus", "machine.storage")),
        controller_type=str(_require(storage, "controller", "machine.storage")),
        host_io_cache=bool(storage.get("host_io_cache", True)),
        installer_disk=str(_require(installer, "filename", "machine.disks.installer")),
        installer_format=str(_require(installer, "format", "machine.disks.installer")),
        runtime_disk=str(_require(runtime, "filename", "machine.disks.runtime")),
        runtime_format=str(_require(runtime, "format", "machine.disks.runtime")),
    )


def vboxmanage_path_for(platform: str) -> Path:
    """Return the fixed VBoxManage location for a ``sys.platform`` value."""
    for prefix, path in VBOXMANAGE_PATHS.items():
        if platform.startswith(prefix):
            return path
    return VBOXMANAGE_PATHS["linux"]


def build_config(
    cwd: Optional[Path] = None,
    home: Optional[Path] = None,
    platform: Optional[str] = None,
    profile_path: Optional[Path] = None,
) -> SetupConfig:
    """Assemble the run configuration; images are looked up in ``<cwd>/iso``."""
    if cwd is None:
        cwd = Path.cwd()
    if home is None:
        home = Path.home()
    if platform is None:
        platform = sys.platform

    return SetupConfig(
        vboxmanage_path=vboxmanage_path_for(platform),
        image_dir=cwd / IMAGE_DIR_NAME,
        image_extensions=IMAGE_EXTENSIONS,
        default_disk_size_gb=DEFAULT_DISK_SIZE_GB,
        name_prefix=VM_NAME_PREFIX,
        fallback_machine_folder=home / FALLBACK_MACHINE_FOLDER_NAME,
        profile=load_machine_profile(profile_path),
    )
