"""Hand local documents to an external print tool."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from printer.errors import PrintError
from printer.process import CommandResult, run_hidden

LOGGER = logging.getLogger(__name__)


class DocumentPrinter(ABC):
    """
    Sends an existing file to a named printer.

    Implementations make exactly one tool invocation per call and raise
    PrintError on failure. Nothing should be assumed printed after a failure.
    """

    def __init__(self, timeout: Optional[float] = None, logger: Optional[logging.Logger] = None) -> None:
        self.timeout = timeout
        self.logger = logger or LOGGER

    @abstractmethod
    def _command(self, file_path: Path, printer_name: str) -> Sequence[str]:
        raise NotImplementedError

    def print_file(self, file_path: Path, printer_name: str) -> None:
        file_path = Path(file_path)
        if not file_path.is_file():
            raise PrintError(f"Print file does not exist: {file_path}")

        self.logger.info("Printing %s on %s", file_path, printer_name)
        result: CommandResult = run_hidden(self._command(file_path, printer_name), timeout=self.timeout)
        if not result.ok:
            raise PrintError(
                f"error al ejecutar {result.args[0]} (rc={result.returncode}): {result.output.strip()}",
                output=result.output,
            )


class ExternalDocumentPrinter(DocumentPrinter):
    """Runs ``<tool> <file> <printer>``, e.g. PDFtoPrinter.exe on Windows."""

    def __init__(
            self,
            tool_path: str,
            timeout: Optional[float] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(timeout, logger)
        self.tool_path = tool_path

    def _command(self, file_path: Path, printer_name: str) -> Sequence[str]:
        return [self.tool_path, str(file_path), printer_name]


class CupsDocumentPrinter(DocumentPrinter):
    """CUPS-backed dispatch using ``lp -d <printer> <file>``."""

    def __init__(
            self,
            lp_path: str = "lp",
            extra_args: Optional[Sequence[str]] = None,
            timeout: Optional[float] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(timeout, logger)
        self.lp_path = lp_path
        self.extra_args = list(extra_args or [])

    def _command(self, file_path: Path, printer_name: str) -> Sequence[str]:
        return [self.lp_path, "-d", printer_name, *self.extra_args, str(file_path)]


__all__ = ["DocumentPrinter", "ExternalDocumentPrinter", "CupsDocumentPrinter"]
