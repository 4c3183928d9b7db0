"""Installer image discovery for tcbsd-vm-setup."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Sequence

from vmsetup.exceptions import SetupError
from vmsetup.utils import log


def discover_images(directory: Path, extensions: Sequence[str]) -> List[str]:
    """Return image file names in ``directory`` in listing order (no sorting)."""
    if not directory.is_dir():
        raise SetupError(
            f"'{directory.name}' folder not found at {directory}. "
            f"Please create a folder named '{directory.name}' and place your installer images there."
        )
    suffixes = tuple(extensions)
    images = [
        entry
        for entry in os.listdir(directory)
        if entry.endswith(suffixes) and (directory / entry).is_file()
    ]
    if not images:
        kinds = ", ".join(suffixes)
        raise SetupError(
            f"No installer images ({kinds}) found in the '{directory.name}' folder. Please add some images."
        )
    log("DEBUG", f"Found {len(images)} installer image(s) in {directory}")
    return images
