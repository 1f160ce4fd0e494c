"""Command-line interface for the print gateway."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional

from common.interface import DrawerRequest, PrintRequest
from config import settings
from config.log import setup_logging
from printer.backends import build_service
from printer.errors import GatewayError
from server.app import create_app


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="print-gateway",
        description="Local print gateway CLI"
    )
    parser.add_argument(
        "--serve",
        nargs="?",
        const="",
        help="Run the HTTP API server (optionally specify host:port)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the printers installed on this host",
    )
    parser.add_argument(
        "--print",
        dest="url",
        help="Download the PDF at URL and print it (requires --printer)",
    )
    parser.add_argument(
        "--printer",
        help="Target printer name for --print",
    )
    parser.add_argument(
        "--open-drawer",
        dest="drawer_printer",
        metavar="PRINTER",
        help="Open the cash drawer attached to PRINTER",
    )
    return parser.parse_args(argv)


def parse_serve_address(value: Optional[str]) -> tuple[str, int]:
    default_host = settings.SERVICE.get("host", "0.0.0.0")
    default_port = settings.SERVICE.get("port", 8080)

    if value in (None, ""): return default_host, default_port
    if ":" not in value: raise ValueError("--serve expects host:port")

    host, port_str = value.split(":", 1)
    host = host or default_host
    try:
        port = int(port_str)
    except ValueError as exc:
        raise ValueError("Port in --serve must be an integer") from exc
    if port <= 0 or port > 65535:
        raise ValueError("Port in --serve must be between 1 and 65535")
    return host, port


def main(argv: Optional[list] = None) -> int:
    args = parse_arguments(argv)
    logger = setup_logging(settings.LOGGING)

    if args.serve is not None:
        try:
            host, port = parse_serve_address(args.serve)
        except ValueError as exc:
            print(f"[ERROR] {exc}", file=sys.stderr)
            return 2

        app = create_app(logger=logger)
        cert, key = settings.SERVICE.get("tls_cert_path"), settings.SERVICE.get("tls_key_path")
        app.run(
            host=host,
            port=port,
            debug=settings.SERVICE.get("debug", False),
            threaded=True,
            ssl_context=(cert, key) if cert and key else None,
        )
        return 0

    if not (args.list or args.url or args.drawer_printer):
        print("[ERROR] one of --serve, --list, --print or --open-drawer is required", file=sys.stderr)
        return 2

    if args.printer and not args.url:
        print("[ERROR] --printer is only valid together with --print", file=sys.stderr)
        return 2

    try:
        request = PrintRequest.from_dict({"url": args.url, "printer": args.printer}) if args.url else None
    except GatewayError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    try:
        service = build_service(settings.TOOLS, settings.FETCH, logger=logger)
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    try:
        if args.list:
            print(json.dumps(service.list_printers(), indent=2, ensure_ascii=False))
        if request is not None:
            service.print_from_url(request)
            print(f"[OK] {request.url} sent to {request.printer}")
        if args.drawer_printer:
            service.open_drawer(DrawerRequest.from_dict({"printer": args.drawer_printer}))
            print(f"[OK] Cash drawer opened on {args.drawer_printer}")
    except GatewayError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
