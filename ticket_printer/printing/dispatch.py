"""
Print dispatch: hand a rendered PDF to the OS print spool.

Paths, in order of preference:
- pycups (Linux/macOS with CUPS bindings installed)
- pywin32 ShellExecute ``printto`` / ``print`` verbs (Windows)
- ``lp`` through the shell runner
"""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import sys
from typing import Optional

from . import native
from .errors import PrintDispatchError, PrinterNotFoundError, ProcessError
from .shell import run_command

logger = logging.getLogger(__name__)

_LP_UNKNOWN_PRINTER = ("does not exist", "unknown destination", "not found")


def _print_with_cups(path: str, printer: Optional[str], title: str) -> int:
    conn = native.cups.Connection()
    if printer:
        if printer not in conn.getPrinters():
            raise PrinterNotFoundError(f"Printer not found: {printer}")
        dest = printer
    else:
        dest = conn.getDefault()
        if not dest:
            raise PrinterNotFoundError("No default printer configured")
    return conn.printFile(dest, path, title, {})


def _print_with_win32(path: str, printer: Optional[str]) -> None:
    if printer:
        flags = native.win32print.PRINTER_ENUM_LOCAL | native.win32print.PRINTER_ENUM_CONNECTIONS
        installed = [item[2] for item in native.win32print.EnumPrinters(flags)]
        if printer not in installed:
            raise PrinterNotFoundError(f"Printer not found: {printer}")
        native.win32api.ShellExecute(0, "printto", path, f'"{printer}"', os.path.dirname(path) or ".", 0)
    else:
        native.win32api.ShellExecute(0, "print", path, None, os.path.dirname(path) or ".", 0)


async def _print_with_lp(path: str, printer: Optional[str], title: str) -> None:
    parts = ["lp", "-t", shlex.quote(title)]
    if printer:
        parts += ["-d", shlex.quote(printer)]
    parts.append(shlex.quote(path))
    try:
        result = await run_command(" ".join(parts))
    except ProcessError as e:
        stderr = (e.stderr or "").lower()
        if printer and any(marker in stderr for marker in _LP_UNKNOWN_PRINTER):
            raise PrinterNotFoundError(f"Printer not found: {printer}") from e
        raise PrintDispatchError(str(e)) from e
    if result.stdout.strip():
        logger.info("lp: %s", result.stdout.strip())


async def print_file(path: str, printer: Optional[str] = None, title: str = "ticket") -> None:
    """
    Submit ``path`` to the print spool, on ``printer`` or the system default.

    Raises:
        PrinterNotFoundError: the OS does not know ``printer``.
        PrintDispatchError: the spool rejected the job.
    """
    if not os.path.isfile(path):
        raise PrintDispatchError(f"File not found: {path}")
    printer = (printer or "").strip() or None
    logger.info("Dispatching %s to printer=%s", path, printer or "<default>")

    if sys.platform != "win32" and native.cups is not None:
        try:
            job_id = await asyncio.to_thread(_print_with_cups, path, printer, title)
        except PrintDispatchError:
            raise
        except Exception as e:
            raise PrintDispatchError(f"CUPS rejected the job: {e}") from e
        logger.info("CUPS job %s submitted", job_id)
        return
    if sys.platform == "win32" and native.win32api is not None and native.win32print is not None:
        try:
            await asyncio.to_thread(_print_with_win32, path, printer)
        except PrintDispatchError:
            raise
        except Exception as e:
            raise PrintDispatchError(f"Windows spooler rejected the job: {e}") from e
        return
    await _print_with_lp(path, printer, title)


__all__ = ["print_file"]
