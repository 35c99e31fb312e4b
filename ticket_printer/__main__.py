"""
Command line entry point.

    python -m ticket_printer                 # run the HTTP server
    python -m ticket_printer --list-printers # print discovered printers as JSON
    python -m ticket_printer --init-config   # write the settings file with every key
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Ticket Printer server")
    parser.add_argument(
        "--host",
        default=os.environ.get("TICKETPRINTER_HOST", "0.0.0.0"),
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("TICKETPRINTER_PORT", "5450")),
        help="Port to bind to (default: 5450)",
    )
    parser.add_argument("--list-printers", action="store_true", help="Print discovered printers and exit")
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write the effective settings to the config file and exit",
    )
    parser.add_argument("--mcp", action="store_true", help="Attach the MCP server to the app")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.init_config:
        from ticket_printer.core.config import get_config_path, get_settings, save_config

        path = get_config_path()
        save_config(get_settings(path), path=path)
        sys.stdout.write(f"{path}\n")
        return 0

    if args.list_printers:
        from ticket_printer.core.logging import configure_logging
        from ticket_printer.printing.discovery import discover_printers_sync

        configure_logging(logging.DEBUG if args.debug else logging.WARNING)
        result = discover_printers_sync()
        json.dump(result.to_dict(), sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return 0

    from ticket_printer import create_app

    app = create_app(enable_mcp=args.mcp)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    app.logger.info("Server started at http://localhost:%d/", args.port)
    app.run(host=args.host, port=args.port, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
