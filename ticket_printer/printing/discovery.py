"""
Printer discovery service.

discover_printers() answers "which printers exist" and "which one is default"
for the printer picker. It always returns a DiscoveryResult: an empty list
means "unknown", not "no printers installed".
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ticket_printer.core.config import get_settings

from .names import resolve_printer_name, resolve_printer_names
from .native import NativeBackend, native_backend
from .strategies import default_printer, list_printers

logger = logging.getLogger(__name__)

# Sentinel: detect the native backend for this runtime
DETECT: Any = object()


@dataclass(frozen=True)
class DiscoveryResult:
    printers: Tuple[str, ...] = ()
    default_printer: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"printers": list(self.printers), "defaultPrinter": self.default_printer}

    def has_printer(self, name: str) -> bool:
        """Case-insensitive membership test."""
        wanted = (name or "").strip().lower()
        return any(p.lower() == wanted for p in self.printers)


EMPTY_RESULT = DiscoveryResult()


async def discover_printers(
    native: Optional[NativeBackend] = DETECT,
    settings: Optional[Mapping[str, Any]] = None,
    platform: Optional[str] = None,
) -> DiscoveryResult:
    """
    Discover installed printers and the system default. Never raises.

    The native backend (when present) is tried first for both questions, the
    shell strategies follow when it fails or comes back empty.
    """
    try:
        if native is DETECT:
            native = native_backend()
        if settings is None:
            settings = get_settings()

        raw_list = await list_printers(native, settings, platform)
        raw_default = await default_printer(native, settings, platform)

        result = DiscoveryResult(
            printers=tuple(resolve_printer_names(raw_list)),
            default_printer=resolve_printer_name(raw_default),
        )
        logger.info(
            "Discovered %d printer(s), default=%s (native=%s)",
            len(result.printers),
            result.default_printer,
            native.name if native else None,
        )
        return result
    except Exception:
        logger.exception("Unexpected error while discovering printers")
        return EMPTY_RESULT


def discover_printers_sync(**kwargs: Any) -> DiscoveryResult:
    """Blocking wrapper for callers without a running event loop (CLI, MCP tools)."""
    return asyncio.run(discover_printers(**kwargs))


__all__ = ["DETECT", "DiscoveryResult", "EMPTY_RESULT", "discover_printers", "discover_printers_sync"]
