"""Printing subsystem exceptions."""

from __future__ import annotations

from typing import Optional


class PrintingError(RuntimeError):
    """Base error for printing subsystem."""


class ProcessError(PrintingError):
    """A shell command failed to spawn or exited non-zero."""

    def __init__(self, command: str, returncode: Optional[int], stderr: str = "", reason: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = reason or (stderr.strip() if stderr else "") or f"exit status {returncode}"
        super().__init__(f"{command!r} failed: {detail}")


class PrintDispatchError(PrintingError):
    """Raised when submitting a document to the print spool fails."""


class PrinterNotFoundError(PrintDispatchError):
    """Raised when the OS does not recognize the requested printer."""


__all__ = ["PrintDispatchError", "PrinterNotFoundError", "PrintingError", "ProcessError"]
