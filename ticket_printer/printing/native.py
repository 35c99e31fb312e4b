"""
Native printer capabilities.

Wraps the platform printing libraries when they are installed:
- Windows: pywin32 (win32print / win32api)
- Linux/macOS: pycups

Either may be missing, in which case native_backend() returns None and the
shell strategies are used instead.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

try:
    import win32print  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    win32print = None

try:
    import win32api  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    win32api = None

try:
    import cups  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    cups = None

logger = logging.getLogger(__name__)

ListPrinters = Callable[[], List[Any]]
DefaultPrinter = Callable[[], Any]


@dataclass(frozen=True)
class NativeBackend:
    """Platform listing/default capabilities; either callable may be None."""

    name: str
    list_printers: Optional[ListPrinters] = None
    default_printer: Optional[DefaultPrinter] = None


def _win32_list_printers() -> List[Dict[str, Any]]:
    flags = win32print.PRINTER_ENUM_LOCAL | win32print.PRINTER_ENUM_CONNECTIONS
    # Level 1 entries are (flags, description, name, comment)
    return [{"Name": item[2], "Description": item[1]} for item in win32print.EnumPrinters(flags)]


def _win32_default_printer() -> Optional[str]:
    return win32print.GetDefaultPrinter() or None


def _cups_list_printers() -> List[Dict[str, Any]]:
    conn = cups.Connection()
    return [dict(attrs, name=name) for name, attrs in conn.getPrinters().items()]


def _cups_default_printer() -> Optional[str]:
    return cups.Connection().getDefault() or None


def native_backend() -> Optional[NativeBackend]:
    """
    Return the native backend for this runtime, or None when no printing
    library is importable.
    """
    if sys.platform == "win32" and win32print is not None:
        return NativeBackend("win32print", _win32_list_printers, _win32_default_printer)
    if cups is not None:
        return NativeBackend("cups", _cups_list_printers, _cups_default_printer)
    return None


__all__ = ["NativeBackend", "native_backend"]
