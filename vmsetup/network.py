"""Network adapter selection and modifyvm arguments for tcbsd-vm-setup."""

from __future__ import annotations

from typing import List, Optional, Sequence

from vmsetup.constants import NETWORK_BRIDGED, NETWORK_NAT
from vmsetup.exceptions import SetupError
from vmsetup.models import NicConfig
from vmsetup.utils import log


def resolve_nic(mode: str, adapters: Sequence[str], chosen: Optional[str] = None) -> NicConfig:
    """Build the first-adapter config, falling back to NAT when no bridged adapter exists."""
    if mode == NETWORK_NAT:
        return NicConfig(mode=NETWORK_NAT)
    if mode == NETWORK_BRIDGED:
        if not adapters:
            log("INFO", "No bridged adapters found. Falling back to NAT.")
            return NicConfig(mode=NETWORK_NAT)
        if chosen is not None and chosen not in adapters:
            raise SetupError(f"Unknown bridged adapter '{chosen}'")
        return NicConfig(mode=NETWORK_BRIDGED, bridge_adapter=chosen or adapters[0])
    raise SetupError(f"Unsupported network mode: {mode}")


def nic_arguments(config: NicConfig) -> Optional[List[str]]:
    """Render ``modifyvm`` options for adapter 1; None when nothing can be configured."""
    if config.mode == NETWORK_NAT:
        return ["--nic1", "nat"]

    if config.mode == NETWORK_BRIDGED:
        if not config.bridge_adapter:
            return None
        return ["--nic1", "bridged", "--bridgeadapter1", config.bridge_adapter]

    raise SetupError(f"Unsupported network mode: {config.mode}")
