"""Global constants and default paths for tcbsd-vm-setup."""

from __future__ import annotations

import os
import re
from pathlib import Path

# Fixed install locations of VBoxManage; PATH is never searched.
VBOXMANAGE_PATHS = {
    "win32": Path(r"C:\Program Files\Oracle\VirtualBox\VBoxManage.exe"),
    "darwin": Path("/Applications/VirtualBox.app/Contents/MacOS/VBoxManage"),
    "linux": Path("/usr/bin/VBoxManage"),
}

IMAGE_DIR_NAME = "iso"
IMAGE_EXTENSIONS = (".iso", ".img")
DEFAULT_DISK_SIZE_GB = 10
VM_NAME_PREFIX = "TwinCAT_BSD"
FALLBACK_MACHINE_FOLDER_NAME = "VirtualBox VMs"
DEFAULT_PROFILE_PATH = Path(__file__).with_name("machine.yaml")

NETWORK_NAT = "nat"
NETWORK_BRIDGED = "bridged"
NETWORK_MODES = {
    NETWORK_NAT: "NAT",
    NETWORK_BRIDGED: "Bridged",
}

MB_PER_GB = 1024

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

DEFAULT_MACHINE_FOLDER_RE = re.compile(r"^Default machine folder:\s+(.*)$", re.MULTILINE)
BRIDGED_NAME_RE = re.compile(r"^Name:\s+(.*)$", re.MULTILINE)
DISK_SIZE_RE = re.compile(r"^\d+$", re.ASCII)

# Exit status used when the operator aborts a prompt (128 + SIGINT).
EXIT_CANCELLED = 130

_LOG_VERBOSE = os.environ.get("LOG_VERBOSE", "").lower() in {"1", "true", "yes", "on"}
