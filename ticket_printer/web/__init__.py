"""
Web module for Ticket Printer.

Exposes blueprints for:
- Main UI, print and preview routes: web_bp
- Printer listing: printers_bp
- Health endpoint: health_bp
"""

from .health import health_bp
from .printers import printers_bp
from .routes import web_bp

__all__ = ["health_bp", "printers_bp", "web_bp"]
