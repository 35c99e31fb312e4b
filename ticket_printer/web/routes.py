from __future__ import annotations

"""
Main UI routes and ticket submission for Ticket Printer.

This blueprint provides:
- GET  /         : The single-page UI (static/index.html)
- POST /print    : Render a ticket to PDF and send it to the print spool
- POST /preview  : Render a ticket and return the PDF inline

Both POST endpoints take multipart form data: title, description, an optional
printer (print only) and an optional image file field named "image".
"""

import os
from typing import Optional, Tuple

from flask import Blueprint, Response, abort, current_app, jsonify, request
from pydantic import ValidationError

from ticket_printer import csrf
from ticket_printer.core.assets import IMAGE_EXTS, is_supported_image, remove_quietly, save_upload, temp_pdf_path
from ticket_printer.core.config import get_settings
from ticket_printer.printing.discovery import discover_printers
from ticket_printer.printing.dispatch import print_file
from ticket_printer.printing.errors import PrinterNotFoundError
from ticket_printer.printing.imaging import prepare_thermal_image
from ticket_printer.printing.render import render_ticket_pdf, render_ticket_to_file
from . import schemas

web_bp = Blueprint("web", __name__)

PRINTER_UNAVAILABLE_MSG = "The selected printer is not available."


# Limits (env-driven)
def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except Exception:
        return default


MAX_TITLE_LEN = _env_int("TICKETPRINTER_MAX_TITLE_LEN", 200)
MAX_DESCRIPTION_LEN = _env_int("TICKETPRINTER_MAX_DESCRIPTION_LEN", 5000)


class UnsupportedImage(ValueError):
    pass


def _json_error(msg: str, code: int = 400):
    return jsonify(schemas.ErrorResponse(error=msg).model_dump()), code


def _parse_ticket() -> schemas.TicketRequest:
    return schemas.TicketRequest.model_validate(
        {
            "title": request.form.get("title"),
            "description": request.form.get("description"),
            "printer": request.form.get("printer"),
        },
        context={"limits": {"MAX_TITLE_LEN": MAX_TITLE_LEN, "MAX_DESCRIPTION_LEN": MAX_DESCRIPTION_LEN}},
    )


def _store_image() -> Optional[str]:
    upload = request.files.get("image")
    if upload is None or not upload.filename:
        return None
    if not is_supported_image(upload.filename):
        raise UnsupportedImage(f"Unsupported image type. Use one of: {', '.join(IMAGE_EXTS)}")
    return save_upload(upload)


def _prepare_image(image_path: Optional[str], settings) -> Optional[bytes]:
    if not image_path:
        return None
    return prepare_thermal_image(image_path, threshold=int(settings.get("image_threshold", 180)))


def _read_ticket() -> Tuple[Optional[schemas.TicketRequest], Optional[str], Optional[str]]:
    """Return (ticket, image_path, error); image_path is set even when validation fails."""
    image_path = None
    try:
        image_path = _store_image()
    except UnsupportedImage as e:
        return None, None, str(e)
    try:
        return _parse_ticket(), image_path, None
    except ValidationError as e:
        return None, image_path, schemas.first_error_message(e)


@web_bp.get("/")
def index():
    static_folder = current_app.static_folder
    if not static_folder or not os.path.isfile(os.path.join(static_folder, "index.html")):
        abort(404)
    return current_app.send_static_file("index.html")


@csrf.exempt
@web_bp.post("/print")
async def print_ticket():
    """
    Render the ticket and dispatch it. When a printer is named and discovery
    knows the installed printers, the name must be one of them; an empty
    discovery result is treated as unknown and the job is attempted anyway.
    """
    image_path: Optional[str] = None
    pdf_path: Optional[str] = None
    try:
        ticket, image_path, error = _read_ticket()
        if ticket is None:
            return _json_error(error or schemas.REQUIRED_FIELDS_MSG, 400)

        settings = get_settings()
        if ticket.printer:
            discovered = await discover_printers(settings=settings)
            if discovered.printers and not discovered.has_printer(ticket.printer):
                current_app.logger.info("POST /print rejected unknown printer %r", ticket.printer)
                return _json_error(PRINTER_UNAVAILABLE_MSG, 400)

        image = _prepare_image(image_path, settings)
        pdf_path = temp_pdf_path()
        render_ticket_to_file(pdf_path, ticket.title, ticket.description, image, settings)

        await print_file(pdf_path, ticket.printer, title=ticket.title)
        current_app.logger.info("POST /print ok printer=%s", ticket.printer or "<default>")
        return jsonify(schemas.PrintAcceptedResponse().model_dump())
    except PrinterNotFoundError as e:
        current_app.logger.warning("POST /print printer not found: %s", e)
        return _json_error(PRINTER_UNAVAILABLE_MSG, 400)
    except Exception as e:
        current_app.logger.exception("Printing failed: %s", e)
        return _json_error(f"Printing failed: {e!s}", 500)
    finally:
        remove_quietly(pdf_path)
        remove_quietly(image_path)


@csrf.exempt
@web_bp.post("/preview")
def preview_ticket():
    """Render the ticket and return it inline as application/pdf."""
    image_path: Optional[str] = None
    try:
        ticket, image_path, error = _read_ticket()
        if ticket is None:
            return _json_error(error or schemas.REQUIRED_FIELDS_MSG, 400)

        settings = get_settings()
        image = _prepare_image(image_path, settings)
        pdf = render_ticket_pdf(ticket.title, ticket.description, image, settings)
        current_app.logger.info("POST /preview ok bytes=%d", len(pdf))
        return Response(
            pdf,
            mimetype="application/pdf",
            headers={"Content-Disposition": 'inline; filename="preview.pdf"'},
        )
    except Exception as e:
        current_app.logger.exception("Preview failed: %s", e)
        return _json_error(f"Preview failed: {e!s}", 500)
    finally:
        remove_quietly(image_path)
