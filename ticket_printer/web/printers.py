from __future__ import annotations

"""
Printer listing endpoint.

GET /printers always answers 200 with {"ok": true, "printers": [...],
"defaultPrinter": ...}. Discovery never fails; an empty list tells the client
the printers are unknown so it can fall back to "system default".
"""

from flask import Blueprint, current_app, jsonify

from ticket_printer.printing.discovery import DiscoveryResult, discover_printers
from . import schemas

printers_bp = Blueprint("printers", __name__)


@printers_bp.get("/printers")
async def list_printers():
    try:
        result = await discover_printers()
    except Exception:
        # discover_printers() is total; keep the endpoint total as well
        current_app.logger.exception("Unexpected error listing printers")
        result = DiscoveryResult()
    current_app.logger.info("GET /printers count=%d default=%s", len(result.printers), result.default_printer)
    body = schemas.PrintersResponse(printers=list(result.printers), defaultPrinter=result.default_printer)
    return jsonify(body.model_dump())
