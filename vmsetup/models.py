"""Data models for tcbsd-vm-setup."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from vmsetup.constants import MB_PER_GB, NETWORK_MODES, NETWORK_NAT
from vmsetup.exceptions import SetupError


@dataclass
class NicConfig:
    mode: str = NETWORK_NAT
    bridge_adapter: Optional[str] = None


@dataclass(frozen=True)
class MachineProfile:
    """Hardware and disk layout applied to every provisioned machine."""

    name: str
    ostype: str
    memory_mb: int
    vram_mb: int
    acpi: bool
    hpet: bool
    graphics_controller: str
    firmware: str
    controller_name: str
    controller_bus: str
    controller_type: str
    host_io_cache: bool
    installer_disk: str
    installer_format: str
    runtime_disk: str
    runtime_format: str


@dataclass
class SetupConfig:
    vboxmanage_path: Path
    image_dir: Path
    image_extensions: Tuple[str, ...]
    default_disk_size_gb: int
    name_prefix: str
    fallback_machine_folder: Path
    profile: MachineProfile


@dataclass(frozen=True)
class ProvisionRequest:
    name: str
    image_file: str
    disk_size_gb: int
    destination_folder: Path
    network_mode: str = NETWORK_NAT
    bridge_adapter: Optional[str] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise SetupError("VM name must not be empty")
        if isinstance(self.disk_size_gb, bool) or not isinstance(self.disk_size_gb, int) or self.disk_size_gb <= 0:
            raise SetupError(f"Disk size must be a positive integer (got {self.disk_size_gb!r})")
        if self.network_mode not in NETWORK_MODES:
            raise SetupError(f"Unsupported network mode: {self.network_mode}")

    @property
    def disk_size_mb(self) -> int:
        return self.disk_size_gb * MB_PER_GB

    @property
    def nic(self) -> NicConfig:
        return NicConfig(mode=self.network_mode, bridge_adapter=self.bridge_adapter)
