"""Printer enumeration and lookup against the host print subsystem."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from printer.errors import EnumerationError, ParseError
from printer.process import CommandResult, run_hidden

LOGGER = logging.getLogger(__name__)

PrinterRecord = Dict[str, str]

NAME_KEY = "Name"

GET_PRINTER_SCRIPT = (
    "Get-Printer | Select-Object Name, DriverName, PortName, PrinterStatus, Location | "
    "ForEach-Object { \"Name=$($_.Name);DriverName=$($_.DriverName);PortName=$($_.PortName);"
    "PrinterStatus=$($_.PrinterStatus);Location=$($_.Location)\" }"
)


def parse_printer_line(line: str) -> PrinterRecord:
    """Turn ``Key=Value;Key=Value`` into a record; the first ``=`` of each pair wins.

    Keys and values are kept verbatim so printer names match exactly.
    """
    record: PrinterRecord = {}
    for token in line.split(";"):
        parts = token.split("=", 1)
        if len(parts) != 2:
            raise ParseError(f"Invalid property format: {token!r}")
        record[parts[0]] = parts[1]
    if not record.get(NAME_KEY):
        raise ParseError(f"Printer entry without a {NAME_KEY}: {line!r}")
    return record


def parse_printer_listing(lines: Iterable[str], logger: Optional[logging.Logger] = None) -> List[PrinterRecord]:
    """Parse every non-blank line, logging and skipping malformed ones."""
    log = logger or LOGGER
    printers: List[PrinterRecord] = []
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        try:
            printers.append(parse_printer_line(line))
        except ParseError as exc:
            log.warning("Skipping printer entry: %s", exc)
    return printers


class PrinterDirectory(ABC):
    """Enumerates installed printers. Every call re-queries the host."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or LOGGER

    @abstractmethod
    def _enumerate(self) -> CommandResult:
        raise NotImplementedError

    def _listing_lines(self, output: str) -> List[str]:
        return output.splitlines()

    def list_printers(self) -> List[PrinterRecord]:
        result = self._enumerate()
        if not result.ok:
            raise EnumerationError(
                f"Printer enumeration failed (rc={result.returncode}): {result.output.strip()}",
                output=result.output,
            )
        return parse_printer_listing(self._listing_lines(result.output), self.logger)

    def exists(self, name: str) -> bool:
        return any(record.get(NAME_KEY) == name for record in self.list_printers())


class PowerShellPrinterDirectory(PrinterDirectory):
    """Windows enumeration through ``Get-Printer``."""

    def __init__(
            self,
            powershell_path: str = "powershell",
            timeout: Optional[float] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger)
        self._powershell_path = powershell_path
        self._timeout = timeout

    def _enumerate(self) -> CommandResult:
        return run_hidden(
            [self._powershell_path, "-NoProfile", "-Command", GET_PRINTER_SCRIPT],
            timeout=self._timeout,
        )


class CupsPrinterDirectory(PrinterDirectory):
    """CUPS enumeration through ``lpstat -p``.

    Each ``printer NAME is idle.  enabled since ...`` line is rewritten into the
    ``Name=...;Status=...`` form so both backends share one parser. Indented
    continuation lines (alert reasons) are dropped.
    """

    def __init__(
            self,
            lpstat_path: str = "lpstat",
            timeout: Optional[float] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger)
        self._lpstat_path = lpstat_path
        self._timeout = timeout

    def _enumerate(self) -> CommandResult:
        # the status parser below only understands the C locale wording
        return run_hidden([self._lpstat_path, "-p"], timeout=self._timeout, env={"LC_ALL": "C"})

    def _listing_lines(self, output: str) -> List[str]:
        lines = []
        for raw_line in output.splitlines():
            if not raw_line.strip() or raw_line[:1].isspace():
                continue
            words = raw_line.split()
            if words[0] != "printer" or len(words) < 3:
                # not an lpstat entry; leave it for the parser to reject
                lines.append(raw_line)
                continue
            name = words[1]
            detail = " ".join(words[2:]).replace(";", ",")
            status = detail.split(".", 1)[0]
            if status.startswith("is "):
                status = status[3:]
            elif status.startswith("now printing"):
                status = "printing"
            else:
                status = status.split(" ", 1)[0]
            lines.append(f"{NAME_KEY}={name};Status={status};Description={detail}")
        return lines


__all__ = [
    "PrinterRecord",
    "PrinterDirectory",
    "PowerShellPrinterDirectory",
    "CupsPrinterDirectory",
    "parse_printer_line",
    "parse_printer_listing",
]
