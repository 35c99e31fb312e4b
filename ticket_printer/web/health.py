from __future__ import annotations

"""
Health endpoints for Ticket Printer.

This blueprint exposes `/healthz`, reporting:
- Overall status ("ok" or "degraded")
- Number of discovered printers and the system default
- Which native printing backend is loaded, if any
"""

from typing import Any, Dict

from flask import Blueprint

from ticket_printer.printing.discovery import discover_printers
from ticket_printer.printing.native import native_backend

health_bp = Blueprint("health", __name__)


@health_bp.get("/healthz")
async def healthz():
    backend = native_backend()
    result = await discover_printers(native=backend)
    status: Dict[str, Any] = {
        "status": "ok",
        "printers": len(result.printers),
        "default_printer": result.default_printer,
        "native_backend": backend.name if backend else None,
    }
    if not result.printers:
        status["status"] = "degraded"
        status["reason"] = "no_printers_discovered"
    return status, 200
