"""VirtualBox VM provisioning workflow for tcbsd-vm-setup."""

from __future__ import annotations

from pathlib import Path

from vmsetup.exceptions import SetupError
from vmsetup.models import MachineProfile, ProvisionRequest
from vmsetup.network import nic_arguments
from vmsetup.utils import launch_file, log, machine_dir
from vmsetup.vboxmanage import VBoxManage

INSTALLER_PORT = 1
RUNTIME_PORT = 0


class Provisioner:
    """Runs the fixed VBoxManage command sequence for one request.

    Commands are issued strictly in order and stop at the first failure.
    Nothing is rolled back: a partially configured VM has to be removed
    through VirtualBox by the operator.
    """

    def __init__(self, tool: VBoxManage, profile: MachineProfile, image_dir: Path) -> None:
        self.tool = tool
        self.profile = profile
        self.image_dir = image_dir

    def check_preconditions(self, request: ProvisionRequest) -> Path:
        """Validate the request against the filesystem and the VM registry; returns the image path."""
        image_path = self.image_dir / request.image_file
        if not image_path.is_file():
            raise SetupError(f"Missing installer image: {request.image_file}")

        if self.tool.vm_registered(request.name):
            raise SetupError(
                f"Virtual machine '{request.name}' already exists.\n"
                "To recreate it, delete it from VirtualBox first."
            )
        return image_path

    def provision(self, request: ProvisionRequest) -> Path:
        image_path = self.check_preconditions(request)
        base_folder = Path(request.destination_folder).expanduser()
        vm_dir = machine_dir(base_folder, request.name)
        installer_disk = vm_dir / self.profile.installer_disk
        runtime_disk = vm_dir / self.profile.runtime_disk

        log("STEP", f"Creating {self.profile.name} VM: {request.name}")
        self.tool.create_vm(request.name, base_folder, self.profile.ostype)
        self._configure_hardware(request.name)
        self._configure_network(request)

        log("STEP", f"Converting {request.image_file} to installer {self.profile.installer_format}...")
        self.tool.convert_from_raw(image_path, installer_disk, self.profile.installer_format)

        self.tool.add_storage_controller(
            request.name,
            self.profile.controller_name,
            self.profile.controller_bus,
            self.profile.controller_type,
            host_io_cache=self.profile.host_io_cache,
            bootable=True,
        )
        self.tool.attach_disk(request.name, self.profile.controller_name, INSTALLER_PORT, installer_disk)

        log("STEP", f"Creating runtime HDD: {request.disk_size_gb}GB")
        self.tool.create_medium(runtime_disk, request.disk_size_mb, self.profile.runtime_format)
        self.tool.attach_disk(request.name, self.profile.controller_name, RUNTIME_PORT, runtime_disk)

        descriptor = vm_dir / f"{request.name}.vbox"
        log("STEP", "Starting Virtual Machine...")
        launch_file(descriptor)
        log("SUCCESS", f"Virtual Machine '{request.name}' ({self.profile.name}) setup complete.")
        return descriptor

    def _configure_hardware(self, name: str) -> None:
        profile = self.profile
        self.tool.modify_vm(
            name,
            [
                "--memory",
                str(profile.memory_mb),
                "--vram",
                str(profile.vram_mb),
                "--acpi",
                "on" if profile.acpi else "off",
                "--hpet",
                "on" if profile.hpet else "off",
                "--graphicscontroller",
                profile.graphics_controller,
                "--firmware",
                profile.firmware,
            ],
        )

    def _configure_network(self, request: ProvisionRequest) -> None:
        nic = request.nic
        options = nic_arguments(nic)
        if options is None:
            log("INFO", "No bridged adapter selected. Network adapter will not be configured.")
            return
        if nic.bridge_adapter:
            log("INFO", f"Setting bridged network adapter to: {nic.bridge_adapter}")
        else:
            log("INFO", "Setting network adapter to NAT")
        self.tool.modify_vm(request.name, options)
