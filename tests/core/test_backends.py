import pytest

from printer.backends import (
    build_directory,
    build_document_printer,
    build_drawer_opener,
    build_service,
    resolve_backend,
)
from printer.directory import CupsPrinterDirectory, PowerShellPrinterDirectory
from printer.dispatcher import CupsDocumentPrinter, ExternalDocumentPrinter
from printer.drawer import EscposDrawerOpener, ScriptDrawerOpener

TOOLS = {
    "backend": "windows",
    "pdf_printer_path": "./PDFtoPrinter.exe",
    "drawer_command_path": "./drawer_open_command.ps1",
    "drawer_backend": "script",
    "drawer_interpreter": "powershell",
    "drawer_pin": 2,
    "process_timeout": 0,
}


@pytest.mark.parametrize(
    "name, platform, expected",
    [("auto", "win32", "windows"), ("auto", "linux", "cups"), ("auto", "darwin", "cups"), ("CUPS", "win32", "cups"), ("", "win32", "windows")],
)
def test_resolve_backend(name, platform, expected):
    assert resolve_backend(name, platform) == expected


def test_resolve_backend_rejects_unknown():
    with pytest.raises(ValueError, match="Unknown printer backend"):
        resolve_backend("lpd")


def test_windows_backend():
    directory = build_directory(TOOLS)
    document_printer = build_document_printer(TOOLS)

    assert isinstance(directory, PowerShellPrinterDirectory)
    assert isinstance(document_printer, ExternalDocumentPrinter)
    assert document_printer.tool_path == "./PDFtoPrinter.exe"
    assert document_printer.timeout is None


def test_cups_backend_with_timeout():
    tools = dict(TOOLS, backend="cups", process_timeout=45)

    assert isinstance(build_directory(tools), CupsPrinterDirectory)
    document_printer = build_document_printer(tools)
    assert isinstance(document_printer, CupsDocumentPrinter)
    assert document_printer.timeout == 45.0


def test_drawer_backends():
    script = build_drawer_opener(TOOLS)
    assert isinstance(script, ScriptDrawerOpener)
    assert script.command_path == "./drawer_open_command.ps1"

    escpos = build_drawer_opener(dict(TOOLS, drawer_backend="escpos", drawer_pin=5))
    assert isinstance(escpos, EscposDrawerOpener)
    assert escpos.pin == 5

    with pytest.raises(ValueError, match="Unknown drawer backend"):
        build_drawer_opener(dict(TOOLS, drawer_backend="serial"))


def test_build_service_applies_fetch_settings():
    service = build_service(TOOLS, {"timeout": 10, "chunk_size": 1024})

    assert service.fetcher.timeout == 10.0
    assert service.fetcher.chunk_size == 1024
    assert isinstance(service.directory, PowerShellPrinterDirectory)
    assert isinstance(service.drawer_opener, ScriptDrawerOpener)
