"""CLI entry point for tcbsd-vm-setup."""

from __future__ import annotations

import argparse
from typing import List, Optional

from vmsetup.config import build_config
from vmsetup.constants import EXIT_CANCELLED
from vmsetup.exceptions import PromptCancelled, SetupError
from vmsetup.images import discover_images
from vmsetup.prompts import prompt_request
from vmsetup.provisioner import Provisioner
from vmsetup.utils import log
from vmsetup.vboxmanage import VBoxManage


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Interactively create and boot a TwinCAT/BSD virtual machine in VirtualBox",
    )
    parser.parse_args(argv)

    try:
        config = build_config()
        tool = VBoxManage.locate(config.vboxmanage_path)
        images = discover_images(config.image_dir, config.image_extensions)
        request = prompt_request(config, tool, images)
        Provisioner(tool, config.profile, config.image_dir).provision(request)
        return 0
    except PromptCancelled:
        log("ERROR", "Exiting")
        return EXIT_CANCELLED
    except SetupError as exc:
        log("ERROR", f"Failed: {exc}")
        return 1
    except Exception as exc:
        log("ERROR", f"Unexpected error: {exc}")
        import traceback

        traceback.print_exc()
        return 1
