"""Cash drawer signalling for receipt printers."""
from __future__ import annotations

import importlib
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from printer.errors import DrawerError
from printer.process import run_hidden

try:  # pragma: no cover - resolved only when optional dependency installed
    escpos_printer = importlib.import_module("escpos.printer")
except ModuleNotFoundError:  # pragma: no cover - library might not be installed locally
    escpos_printer = None

LOGGER = logging.getLogger(__name__)

# ESC p m t1 t2: m selects the connector pin, t1/t2 the pulse timing
DRAWER_KICK = {
    2: "\x1b\x70\x00\x19\xfa",
    5: "\x1b\x70\x01\x19\xfa",
}


class DrawerOpener(ABC):
    """Opens the cash drawer attached to a named printer."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or LOGGER

    @abstractmethod
    def open_drawer(self, printer_name: str) -> None:
        """Raise DrawerError if the drawer could not be signalled."""
        raise NotImplementedError


class ScriptDrawerOpener(DrawerOpener):
    """Runs a drawer-open script with the printer name as its parameter.

    With the default ``powershell`` interpreter this is
    ``powershell -NoProfile -ExecutionPolicy Bypass -File <script> -Printer <name>``.
    Any other interpreter gets ``<interpreter> <script> <name>``; an empty one
    executes the script directly.
    """

    def __init__(
            self,
            command_path: str,
            interpreter: str = "powershell",
            timeout: Optional[float] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger)
        self.command_path = command_path
        self.interpreter = interpreter
        self.timeout = timeout

    def _command(self, printer_name: str) -> List[str]:
        if not self.interpreter:
            return [self.command_path, printer_name]
        if Path(self.interpreter).stem.lower() in ("powershell", "pwsh"):
            return [
                self.interpreter,
                "-NoProfile",
                "-ExecutionPolicy", "Bypass",
                "-File", self.command_path,
                "-Printer", printer_name,
            ]
        return [self.interpreter, self.command_path, printer_name]

    def open_drawer(self, printer_name: str) -> None:
        self.logger.info("Opening drawer on %s", printer_name)
        result = run_hidden(self._command(printer_name), timeout=self.timeout)
        if not result.ok:
            raise DrawerError(
                f"error al ejecutar comando de apertura de cajón (rc={result.returncode}): "
                f"{result.output.strip()}",
                output=result.output,
            )


class EscposDrawerOpener(DrawerOpener):
    """Kicks the drawer through python-escpos' Win32Raw queue access."""

    def __init__(self, pin: int = 2, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(logger)
        if pin not in DRAWER_KICK:
            raise ValueError("Invalid pin for cash drawer kick; must be 2 or 5")
        self.pin = pin

    def _connect(self, printer_name: str):
        if escpos_printer is None:
            raise DrawerError("python-escpos is not installed; cannot send data to printer")
        try:
            return escpos_printer.Win32Raw(printer_name)
        except Exception as exc:  # pragma: no cover - hardware specific
            self.logger.exception("Unable to connect to printer %s", printer_name)
            raise DrawerError(f"Failed to connect to printer {printer_name}", output=str(exc)) from exc

    def open_drawer(self, printer_name: str) -> None:
        self.logger.info("Kicking drawer on %s (pin %d)", printer_name, self.pin)
        device = self._connect(printer_name)
        try:
            try:
                device.cashdraw(self.pin)
            except AttributeError:
                self.logger.debug("Using raw ESC/POS command for drawer kick")
                device.text(DRAWER_KICK[self.pin])
        except Exception as exc:
            self.logger.exception("Drawer kick failed on %s", printer_name)
            raise DrawerError(f"Failed to open drawer on {printer_name}", output=str(exc)) from exc
        finally:
            close_fn = getattr(device, "close", None)
            if callable(close_fn):
                try:
                    close_fn()
                except Exception:  # pragma: no cover - best-effort cleanup
                    self.logger.debug("Failed to close printer device", exc_info=True)


__all__ = ["DrawerOpener", "ScriptDrawerOpener", "EscposDrawerOpener"]
