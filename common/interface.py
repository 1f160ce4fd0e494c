from dataclasses import dataclass
from typing import Any

from printer.errors import InvalidRequest


@dataclass(frozen=True)
class PrintRequest:
    url: str
    printer: str

    @classmethod
    def from_dict(cls, payload: Any) -> "PrintRequest":
        """Create a PrintRequest from a decoded JSON body."""

        if not isinstance(payload, dict):
            raise InvalidRequest("Solicitud JSON inválida")

        url = _clean(payload.get("url"))
        printer = _clean(payload.get("printer"))
        if not url or not printer:
            raise InvalidRequest("URL o impresora no especificados")

        return cls(url=url, printer=printer)


@dataclass(frozen=True)
class DrawerRequest:
    printer: str

    @classmethod
    def from_dict(cls, payload: Any) -> "DrawerRequest":
        """Create a DrawerRequest from a decoded JSON body."""

        if not isinstance(payload, dict):
            raise InvalidRequest("Solicitud JSON inválida")

        printer = _clean(payload.get("printer"))
        if not printer:
            raise InvalidRequest("No se especificó la impresora")

        return cls(printer=printer)


def _clean(value) -> str:
    # non-string and blank values count as missing; others are kept verbatim
    if not isinstance(value, str) or not value.strip():
        return ""
    return value
