"""
Main MCP server implementation for Ticket Printer.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from .tools import register_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "TicketPrinter"


def create_mcp_server() -> FastMCP:
    """
    Create and configure the MCP server with Ticket Printer tools.

    Raises:
        Exception: If tool registration fails.
    """
    server = FastMCP(SERVER_NAME)
    try:
        register_tools(server)
    except Exception as e:
        logger.error(f"Failed to register MCP components: {e}")
        raise
    logger.info("MCP server created - tools registered")
    return server
