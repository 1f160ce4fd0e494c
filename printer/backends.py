"""Pick concrete printer backends for the host from configuration."""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

from printer.directory import CupsPrinterDirectory, PowerShellPrinterDirectory, PrinterDirectory
from printer.dispatcher import CupsDocumentPrinter, DocumentPrinter, ExternalDocumentPrinter
from printer.drawer import DrawerOpener, EscposDrawerOpener, ScriptDrawerOpener
from printer.fetcher import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT, RemoteFetcher
from printer.service import PrintOrchestrator

BACKENDS = ("windows", "cups")
DRAWER_BACKENDS = ("script", "escpos")


def resolve_backend(name: str = "auto", platform: Optional[str] = None) -> str:
    name = (name or "auto").lower()
    if name == "auto":
        return "windows" if (platform or sys.platform).startswith("win") else "cups"
    if name not in BACKENDS:
        raise ValueError(f"Unknown printer backend: {name!r} (expected auto, {', '.join(BACKENDS)})")
    return name


def _timeout(tools: Dict[str, Any]) -> Optional[float]:
    value = float(tools.get("process_timeout") or 0)
    return value if value > 0 else None


def build_directory(tools: Dict[str, Any], logger: Optional[logging.Logger] = None) -> PrinterDirectory:
    if resolve_backend(tools.get("backend", "auto")) == "windows":
        return PowerShellPrinterDirectory(timeout=_timeout(tools), logger=logger)
    return CupsPrinterDirectory(timeout=_timeout(tools), logger=logger)


def build_document_printer(tools: Dict[str, Any], logger: Optional[logging.Logger] = None) -> DocumentPrinter:
    if resolve_backend(tools.get("backend", "auto")) == "windows":
        return ExternalDocumentPrinter(tools["pdf_printer_path"], timeout=_timeout(tools), logger=logger)
    return CupsDocumentPrinter(timeout=_timeout(tools), logger=logger)


def build_drawer_opener(tools: Dict[str, Any], logger: Optional[logging.Logger] = None) -> DrawerOpener:
    kind = (tools.get("drawer_backend") or "script").lower()
    if kind == "escpos":
        return EscposDrawerOpener(pin=int(tools.get("drawer_pin", 2)), logger=logger)
    if kind != "script":
        raise ValueError(f"Unknown drawer backend: {kind!r} (expected {', '.join(DRAWER_BACKENDS)})")
    return ScriptDrawerOpener(
        tools["drawer_command_path"],
        interpreter=tools.get("drawer_interpreter", "powershell"),
        timeout=_timeout(tools),
        logger=logger,
    )


def build_service(
        tools: Dict[str, Any],
        fetch: Optional[Dict[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
) -> PrintOrchestrator:
    """Wire a PrintOrchestrator from the TOOLS and FETCH settings sections."""
    fetch = fetch or {}
    return PrintOrchestrator(
        directory=build_directory(tools, logger),
        document_printer=build_document_printer(tools, logger),
        drawer_opener=build_drawer_opener(tools, logger),
        fetcher=RemoteFetcher(
            timeout=float(fetch.get("timeout", DEFAULT_TIMEOUT)),
            chunk_size=int(fetch.get("chunk_size", DEFAULT_CHUNK_SIZE)),
            logger=logger,
        ),
        logger=logger,
    )


__all__ = [
    "resolve_backend",
    "build_directory",
    "build_document_printer",
    "build_drawer_opener",
    "build_service",
]
