import pytest

from printer.dispatcher import CupsDocumentPrinter, ExternalDocumentPrinter
from printer.errors import PrintError
from printer.process import CommandResult


@pytest.fixture
def pdf(tmp_path):
    f = tmp_path / "doc.pdf"
    f.write_bytes(b"%PDF-1.4 fake")
    return f


def record_runs(monkeypatch, returncode=0, output=""):
    calls = []

    def fake_run(args, timeout=None):
        calls.append((list(args), timeout))
        return CommandResult(tuple(args), returncode, output)

    monkeypatch.setattr("printer.dispatcher.run_hidden", fake_run)
    return calls


def test_external_printer_passes_file_and_printer_positionally(monkeypatch, pdf):
    calls = record_runs(monkeypatch)

    ExternalDocumentPrinter("./PDFtoPrinter.exe", timeout=60).print_file(pdf, "HP LaserJet")

    assert calls == [(["./PDFtoPrinter.exe", str(pdf), "HP LaserJet"], 60)]


def test_external_printer_failure_includes_tool_output(monkeypatch, pdf):
    calls = record_runs(monkeypatch, returncode=1, output="Printer not ready\n")

    with pytest.raises(PrintError, match=r"rc=1.*Printer not ready") as excinfo:
        ExternalDocumentPrinter("./PDFtoPrinter.exe").print_file(pdf, "HP")

    assert excinfo.value.output == "Printer not ready\n"
    assert len(calls) == 1


def test_external_printer_missing_file_never_spawns(monkeypatch, tmp_path):
    calls = record_runs(monkeypatch)

    with pytest.raises(PrintError, match="does not exist"):
        ExternalDocumentPrinter("./PDFtoPrinter.exe").print_file(tmp_path / "missing.pdf", "HP")

    assert calls == []


def test_cups_printer_submits_lp_command(monkeypatch, pdf):
    calls = record_runs(monkeypatch)

    CupsDocumentPrinter(extra_args=["-o", "fit-to-page"]).print_file(pdf, "SELPHY")

    args, _ = calls[0]
    assert args[0] == "lp"
    assert args[1:3] == ["-d", "SELPHY"]
    assert "fit-to-page" in args
    assert args[-1] == str(pdf)


def test_cups_printer_raises_on_lp_failure(monkeypatch, pdf):
    record_runs(monkeypatch, returncode=1, output="lp: The printer or class does not exist.")

    with pytest.raises(PrintError, match="lp"):
        CupsDocumentPrinter().print_file(pdf, "GHOST")
