"""Error types raised by the print gateway core."""
from __future__ import annotations

from typing import Optional


class GatewayError(RuntimeError):
    """Base class for every failure the gateway reports to callers."""


class InvalidRequest(GatewayError):
    """Raised when a request is missing required fields."""


class EnumerationError(GatewayError):
    """Raised when the host printer list cannot be obtained."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class UnknownPrinter(GatewayError):
    """Raised when the requested printer is not installed on the host."""

    def __init__(self, printer_name: str) -> None:
        super().__init__(f"la impresora '{printer_name}' no existe")
        self.printer_name = printer_name


class FetchError(GatewayError):
    """Raised when a remote document cannot be downloaded."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidURL(FetchError):
    """Raised for URLs that are not absolute http(s) addresses."""


class PrintError(GatewayError):
    """Raised when the external print tool fails."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class DrawerError(GatewayError):
    """Raised when the drawer command fails."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class ParseError(GatewayError):
    """Raised for a malformed enumeration line; recovered during listing."""


__all__ = [
    "GatewayError",
    "InvalidRequest",
    "EnumerationError",
    "UnknownPrinter",
    "FetchError",
    "InvalidURL",
    "PrintError",
    "DrawerError",
    "ParseError",
]
