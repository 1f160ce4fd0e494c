"""Command-line interface for opening a cash drawer without HTTP."""
from __future__ import annotations

import argparse
import sys
from typing import Optional

from common.interface import DrawerRequest
from config import settings
from config.log import setup_logging
from printer.backends import build_service
from printer.errors import GatewayError


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="open-drawer", description="Cash drawer cli")
    parser.add_argument(
        "--printer",
        required=True,
        help="Name of the printer the drawer is attached to (e.g., XP-58)",
    )
    parser.add_argument(
        "--backend",
        choices=["script", "escpos"],
        help="Override the configured drawer backend",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    args = parse_arguments(argv)
    logger = setup_logging(settings.LOGGING)

    tools = dict(settings.TOOLS)
    if args.backend:
        tools["drawer_backend"] = args.backend

    try:
        request = DrawerRequest.from_dict({"printer": args.printer})
        service = build_service(tools, settings.FETCH, logger=logger)
    except (GatewayError, ValueError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    try:
        service.open_drawer(request)
    except GatewayError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    print("[OK] Cash drawer opened successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
