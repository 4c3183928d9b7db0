"""Utility functions for tcbsd-vm-setup."""

from __future__ import annotations

import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from vmsetup.constants import _LOG_VERBOSE, DISK_SIZE_RE, TIMESTAMP_FORMAT
from vmsetup.exceptions import SetupError


def log(level: str, message: str) -> None:
    """Lightweight levelled logging with colour prefixes."""
    if level == "DEBUG" and not _LOG_VERBOSE:
        return
    colours = {
        "INFO": "\033[0;34m",
        "STEP": "\033[1;36m",
        "WARN": "\033[1;33m",
        "ERROR": "\033[0;31m",
        "SUCCESS": "\033[0;32m",
        "DEBUG": "\033[0;90m",
    }
    colour = colours.get(level, "")
    reset = "\033[0m" if colour else ""
    stream = sys.stderr if level == "ERROR" else sys.stdout
    if level == "STEP":
        print(file=stream, flush=True)
    print(f"{colour}[{level}]{reset} {message}", file=stream, flush=True)


def timestamp(now: Optional[datetime] = None) -> str:
    """Local wall-clock time as ``YYYYMMDD_HHMMSS``."""
    if now is None:
        now = datetime.now()
    return now.strftime(TIMESTAMP_FORMAT)


def parse_disk_size(raw: str) -> int:
    value = str(raw).strip()
    if not DISK_SIZE_RE.match(value) or int(value) <= 0:
        raise SetupError(f"Invalid disk size '{raw}'. Use a whole number of gigabytes greater than 0")
    return int(value)


def run(cmd: List[str], check: bool = True, **kwargs) -> subprocess.CompletedProcess:
    """Run command with logging."""
    log("DEBUG", f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, check=check, text=True, **kwargs)
    return result


def launch_file(path: Path, platform: Optional[str] = None) -> subprocess.Popen:
    """Open ``path`` with its associated application as a detached process."""
    if platform is None:
        platform = sys.platform
    if platform.startswith("win"):
        cmd = ["cmd", "/c", "start", "", str(path)]
    elif platform == "darwin":
        cmd = ["open", str(path)]
    else:
        cmd = ["xdg-open", str(path)]
    log("DEBUG", f"Launching: {' '.join(cmd)}")
    kwargs = {}
    if platform.startswith("win"):
        kwargs["creationflags"] = getattr(subprocess, "DETACHED_PROCESS", 0)
    else:
        kwargs["start_new_session"] = True
    try:
        return subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            **kwargs,
        )
    except OSError as exc:
        raise SetupError(f"Failed to launch {path}: {exc}") from exc


def machine_dir(destination_folder: Path, name: str) -> Path:
    """Directory VirtualBox creates for a VM under its base folder."""
    return Path(destination_folder).expanduser() / name
