"""tcbsd-vm-setup package."""

__all__ = [
    "cli",
    "config",
    "constants",
    "exceptions",
    "images",
    "models",
    "network",
    "prompts",
    "provisioner",
    "utils",
    "vboxmanage",
]
