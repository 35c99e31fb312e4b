"""
Ticket Printer package

This module provides an application factory with minimal wiring:
- Configures logging via ticket_printer.core.logging
- Creates a Flask app with the static folder pointing at the repository-level dir
- Enables CORS so the UI can be served from another origin (e.g. Apache)
- Initializes CSRF protection; the JSON/multipart API views are exempt
- Registers the web, printers and health blueprints
- Optionally attaches an MCP server
"""

from __future__ import annotations

import importlib
import logging
import os
import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from flask import Flask, g
from flask_cors import CORS
from flask_wtf import CSRFProtect

__version__ = "0.3.0"

csrf = CSRFProtect()

DEFAULT_BLUEPRINTS: Sequence[tuple[str, str]] = (
    ("ticket_printer.web.routes", "web_bp"),  # UI, print, preview
    ("ticket_printer.web.printers", "printers_bp"),  # printer listing
    ("ticket_printer.web.health", "health_bp"),  # health endpoint
)


def _default_secret_key() -> str:
    return os.environ.get("TICKETPRINTER_SECRET_KEY", "ticketprinter_dev_secret_key")


def _register_blueprint(app: Flask, import_path: str, attr: str) -> None:
    """
    Import a blueprint from import_path and register it.
    """
    mod = importlib.import_module(import_path)
    bp = getattr(mod, attr)
    app.register_blueprint(bp)
    app.logger.debug("Registered blueprint: %s.%s", import_path, attr)


def _set_request_id() -> None:
    """
    Assign a request ID for logging if not set by a filter elsewhere.
    """
    g.request_id = getattr(g, "request_id", uuid.uuid4().hex)


def create_app(
    config_overrides: Optional[dict] = None,
    blueprints: Optional[Sequence[tuple[str, str]]] = None,
    enable_mcp: bool = False,
) -> Flask:
    """
    Application factory.

    Parameters:
    - config_overrides: values to inject into app.config after defaults
    - blueprints: optional list of (import_path, attribute) tuples to register.
      If None, DEFAULT_BLUEPRINTS are registered.
    - enable_mcp: if True, creates and attaches an MCP server instance to the app

    Returns:
    - Flask app instance
    """
    pkg_dir = Path(__file__).resolve().parent
    repo_root = pkg_dir.parent
    static_dir = repo_root / "static"

    app = Flask(
        "ticket_printer",
        static_folder=str(static_dir) if static_dir.exists() else None,
    )

    app.secret_key = _default_secret_key()
    # Uploaded images are the largest part of a request
    app.config["MAX_CONTENT_LENGTH"] = int(os.environ.get("TICKETPRINTER_MAX_CONTENT_LENGTH", 10 * 1024 * 1024))

    csrf.init_app(app)
    CORS(app)

    from ticket_printer.core.logging import configure_logging

    configure_logging()
    app.logger.info("Ticket Printer app created")

    app.url_map.strict_slashes = False

    @app.before_request
    def _before_request():
        _set_request_id()

    for import_path, attr in blueprints or DEFAULT_BLUEPRINTS:
        _register_blueprint(app, import_path, attr)

    if enable_mcp:
        from .mcp import create_mcp_server_if_available

        mcp_server = create_mcp_server_if_available(app)
        if mcp_server:
            app.mcp_server = mcp_server
            app.logger.info("MCP server created and attached to app")
        else:
            app.logger.warning("MCP server creation failed or unavailable")

    if config_overrides:
        app.config.update(config_overrides)

    return app


__all__ = ["__version__", "create_app", "csrf"]
