"""Print orchestration: list printers, print remote PDFs, open drawers."""
from __future__ import annotations

import logging
from typing import List, Optional

from common.interface import DrawerRequest, PrintRequest
from printer.directory import PrinterDirectory, PrinterRecord
from printer.dispatcher import DocumentPrinter
from printer.drawer import DrawerOpener
from printer.errors import UnknownPrinter
from printer.fetcher import RemoteFetcher, TemporaryDocument, validate_url

LOGGER = logging.getLogger(__name__)


class PrintOrchestrator:
    """
    Composes the printer directory, fetcher, dispatcher and drawer opener.

    Holds no per-request state, so one instance can serve concurrent requests.
    Every operation checks that the printer exists before any download,
    print job or drawer signal.
    """

    def __init__(
            self,
            directory: PrinterDirectory,
            document_printer: DocumentPrinter,
            drawer_opener: DrawerOpener,
            fetcher: Optional[RemoteFetcher] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.directory = directory
        self.document_printer = document_printer
        self.drawer_opener = drawer_opener
        self.fetcher = fetcher or RemoteFetcher()
        self.logger = logger or LOGGER

    def list_printers(self) -> List[PrinterRecord]:
        return self.directory.list_printers()

    def _require_printer(self, name: str) -> None:
        if not self.directory.exists(name):
            self.logger.warning("Printer %r not found", name)
            raise UnknownPrinter(name)

    def print_from_url(self, request: PrintRequest) -> None:
        url = validate_url(request.url)
        self._require_printer(request.printer)

        path = self.fetcher.fetch(url)
        self.logger.info("Downloaded %s to %s", url, path)
        with TemporaryDocument(path, self.logger) as document:
            self.document_printer.print_file(document, request.printer)
        self.logger.info("Sent %s to %s", url, request.printer)

    def open_drawer(self, request: DrawerRequest) -> None:
        self._require_printer(request.printer)
        self.drawer_opener.open_drawer(request.printer)
        self.logger.info("Drawer opened on %s", request.printer)


__all__ = ["PrintOrchestrator"]
