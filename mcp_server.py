#!/usr/bin/env python3
"""
Standalone MCP server for Ticket Printer.

Runs the MCP tools without the Flask app.
"""

import argparse
import asyncio
import logging
import os
import sys

from ticket_printer.core.logging import configure_logging
from ticket_printer.mcp import MCP_AVAILABLE


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Standalone Ticket Printer MCP Server")
    parser.add_argument(
        "--host",
        default=os.environ.get("TICKETPRINTER_MCP_HOST", "localhost"),
        help="Host to bind to (default: localhost)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("TICKETPRINTER_MCP_PORT", "5451")),
        help="Port to bind to (default: 5451)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default=os.environ.get("TICKETPRINTER_MCP_TRANSPORT", "http"),
        help="Transport protocol (default: http)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args()


async def main():
    """Main entry point for the standalone MCP server."""
    args = parse_args()

    configure_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    logger = logging.getLogger(__name__)

    if not MCP_AVAILABLE:
        logger.error("FastMCP is not available. Install with: pip install fastmcp")
        sys.exit(1)

    from ticket_printer.mcp.server import create_mcp_server

    try:
        server = create_mcp_server()
        logger.info("Available tools: list_printers, print_ticket, preview_ticket")
        if args.transport == "stdio":
            logger.info("Starting MCP server with STDIO transport")
            await server.run_async(transport="stdio")
        else:
            logger.info(f"Starting MCP server on {args.host}:{args.port} with {args.transport} transport")
            await server.run_async(transport=args.transport, host=args.host, port=args.port)
    except KeyboardInterrupt:
        logger.info("Shutting down MCP server...")
    except Exception as e:
        logger.error(f"Error running MCP server: {e}")
        if args.debug:
            logger.exception("Full traceback:")
        sys.exit(1)
    finally:
        logger.info("MCP server shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
