"""Interactive collection of provisioning parameters."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

try:
    import questionary  # type: ignore
except ImportError as exc:  # pragma: no cover
    raise SystemExit("questionary is required but not installed") from exc

from vmsetup.constants import NETWORK_BRIDGED, NETWORK_MODES
from vmsetup.exceptions import PromptCancelled, SetupError
from vmsetup.models import ProvisionRequest, SetupConfig
from vmsetup.network import resolve_nic
from vmsetup.utils import parse_disk_size, timestamp
from vmsetup.vboxmanage import VBoxManage

DISK_SIZE_ERROR = "Please enter a valid number greater than 0."


def default_vm_name(prefix: str, now: Optional[datetime] = None) -> str:
    return f"{prefix}_{timestamp(now)}"


def validate_disk_size(text: str) -> Union[bool, str]:
    try:
        parse_disk_size(text)
    except SetupError:
        return DISK_SIZE_ERROR
    return True


def _validate_not_blank(text: str) -> Union[bool, str]:
    return True if text and text.strip() else "A value is required."


def _ask(question):
    """Run a questionary prompt, turning an operator abort into PromptCancelled."""
    try:
        return question.unsafe_ask()
    except (KeyboardInterrupt, EOFError) as exc:
        raise PromptCancelled() from exc


def prompt_request(
    config: SetupConfig,
    tool: VBoxManage,
    images: Sequence[str],
    now: Optional[datetime] = None,
) -> ProvisionRequest:
    name = _ask(
        questionary.text(
            "Enter Virtual Machine Name:",
            default=default_vm_name(config.name_prefix, now),
            validate=_validate_not_blank,
        )
    )

    image_file = _ask(
        questionary.select(
            "Select an installer image from the available list:",
            choices=list(images),
        )
    )
    if image_file not in images:
        raise SetupError(f"Unknown installer image: {image_file}")

    disk_size = _ask(
        questionary.text(
            "Enter HDD size (GB):",
            default=str(config.default_disk_size_gb),
            validate=validate_disk_size,
        )
    )

    folder = _ask(
        questionary.text(
            "Enter folder to store VM:",
            default=str(tool.default_machine_folder(config.fallback_machine_folder)),
            validate=_validate_not_blank,
        )
    )

    mode = _ask(
        questionary.select(
            "Select network mode:",
            choices=[questionary.Choice(label, value=key) for key, label in NETWORK_MODES.items()],
        )
    )

    adapters: Sequence[str] = []
    chosen = None
    if mode == NETWORK_BRIDGED:
        adapters = tool.bridged_adapters()
        if adapters:
            chosen = _ask(questionary.select("Select bridged network adapter:", choices=list(adapters)))
    nic = resolve_nic(mode, adapters, chosen)

    return ProvisionRequest(
        name=name.strip(),
        image_file=image_file,
        disk_size_gb=parse_disk_size(disk_size),
        destination_folder=Path(folder.strip()).expanduser(),
        network_mode=nic.mode,
        bridge_adapter=nic.bridge_adapter,
    )
