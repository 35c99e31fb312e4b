"""
MCP tools for Ticket Printer operations.

- list_printers: installed printers and the system default
- print_ticket: render and dispatch a ticket
- preview_ticket: render a ticket and return the PDF (base64)
"""

from __future__ import annotations

import base64
import logging
import os
from typing import List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from ticket_printer.core.assets import remove_quietly, temp_pdf_path
from ticket_printer.core.config import get_settings
from ticket_printer.printing.discovery import discover_printers
from ticket_printer.printing.dispatch import print_file
from ticket_printer.printing.errors import PrintingError
from ticket_printer.printing.imaging import prepare_thermal_image
from ticket_printer.printing.render import render_ticket_pdf, render_ticket_to_file
from ticket_printer.web.schemas import TicketRequest

logger = logging.getLogger(__name__)


class PrinterList(BaseModel):
    """Installed printers as seen by the print server."""
    printers: List[str] = Field(default_factory=list, description="Printer names in discovery order")
    default_printer: Optional[str] = Field(default=None, description="System default printer, if known")


class PrintResult(BaseModel):
    """Result of printing a ticket via MCP."""
    printer: Optional[str] = Field(default=None, description="Target printer; None means system default")
    message: str = Field(description="Human-readable status message", examples=["Ticket sent to printer."])


class PreviewResult(BaseModel):
    """Rendered ticket PDF."""
    size_bytes: int = Field(description="PDF size in bytes", ge=0)
    pdf_base64: str = Field(description="Base64-encoded PDF document")


class TicketInput(BaseModel):
    """Ticket content for MCP tools."""
    title: str = Field(description="Ticket heading")
    description: str = Field(description="Ticket body; newlines are kept")
    printer: Optional[str] = Field(default=None, description="Printer name; omit for the system default")
    image_path: Optional[str] = Field(default=None, description="Path of an image on the print server")


def _validated(ticket: TicketInput) -> TicketRequest:
    try:
        return TicketRequest.model_validate(ticket.model_dump(exclude={"image_path"}))
    except Exception as e:
        raise ToolError(f"Invalid ticket: {e}") from e


def _image_bytes(ticket: TicketInput, settings) -> Optional[bytes]:
    if not ticket.image_path:
        return None
    if not os.path.isfile(ticket.image_path):
        raise ToolError(f"Image not found: {ticket.image_path}")
    return prepare_thermal_image(ticket.image_path, threshold=int(settings.get("image_threshold", 180)))


def register_tools(server: FastMCP) -> None:
    """
    Register all MCP tools with the server.
    """

    @server.tool()
    async def list_printers() -> PrinterList:
        """List installed printers and the system default printer."""
        result = await discover_printers()
        return PrinterList(printers=list(result.printers), default_printer=result.default_printer)

    @server.tool()
    async def print_ticket(ticket: TicketInput) -> PrintResult:
        """
        Render a ticket (title, description, optional image) on an 80mm PDF and
        send it to a printer.
        """
        req = _validated(ticket)
        settings = get_settings()
        if req.printer:
            discovered = await discover_printers(settings=settings)
            if discovered.printers and not discovered.has_printer(req.printer):
                raise ToolError("The selected printer is not available.")

        pdf_path = temp_pdf_path()
        try:
            image = _image_bytes(ticket, settings)
            render_ticket_to_file(pdf_path, req.title, req.description, image, settings)
            await print_file(pdf_path, req.printer, title=req.title)
        except PrintingError as e:
            logger.warning("MCP print_ticket failed: %s", e)
            raise ToolError(f"Printing failed: {e}") from e
        finally:
            remove_quietly(pdf_path)
        return PrintResult(printer=req.printer, message="Ticket sent to printer.")

    @server.tool()
    def preview_ticket(ticket: TicketInput) -> PreviewResult:
        """Render a ticket and return the PDF without printing it."""
        req = _validated(ticket)
        settings = get_settings()
        pdf = render_ticket_pdf(req.title, req.description, _image_bytes(ticket, settings), settings)
        return PreviewResult(size_bytes=len(pdf), pdf_base64=base64.b64encode(pdf).decode("ascii"))
