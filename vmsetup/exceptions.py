"""Custom exceptions for tcbsd-vm-setup."""

from __future__ import annotations

from typing import List


class SetupError(RuntimeError):
    """Raised on unrecoverable configuration, precondition or provisioning errors."""


class CommandError(SetupError):
    """A VBoxManage invocation exited with a non-zero status."""

    def __init__(self, cmd: List[str], returncode: int, output: str = "") -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.output = output.strip()
        message = f"Command failed with exit code {returncode}: {' '.join(cmd)}"
        if self.output:
            message += f"\n{self.output}"
        super().__init__(message)


class PromptCancelled(Exception):
    """The operator aborted an interactive prompt (Ctrl+C / Ctrl+D)."""
