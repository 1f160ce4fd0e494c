import json

import pytest

import cli
import drawer_cli
from printer.service import PrintOrchestrator
from tests.fakes.fake_backends import FakeDirectory, FakeDocumentPrinter, FakeDrawerOpener, FakeFetcher


@pytest.fixture
def service(monkeypatch, tmp_path):
    orchestrator = PrintOrchestrator(
        directory=FakeDirectory.with_printers("HP", "XP-58"),
        document_printer=FakeDocumentPrinter(),
        drawer_opener=FakeDrawerOpener(),
        fetcher=FakeFetcher(tmp_path),
    )
    monkeypatch.setattr("cli.build_service", lambda *a, **k: orchestrator)
    monkeypatch.setattr("drawer_cli.build_service", lambda *a, **k: orchestrator)
    return orchestrator


@pytest.mark.parametrize(
    "value, expected",
    [(None, ("0.0.0.0", 8080)), ("", ("0.0.0.0", 8080)), ("127.0.0.1:9000", ("127.0.0.1", 9000)), (":9001", ("0.0.0.0", 9001))],
)
def test_parse_serve_address(value, expected):
    assert cli.parse_serve_address(value) == expected


@pytest.mark.parametrize("value", ["localhost", "localhost:http", "localhost:70000"])
def test_parse_serve_address_rejects_bad_values(value):
    with pytest.raises(ValueError):
        cli.parse_serve_address(value)


def test_cli_requires_an_action(capsys):
    assert cli.main([]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_cli_lists_printers(service, capsys):
    assert cli.main(["--list"]) == 0
    printers = json.loads(capsys.readouterr().out)
    assert [p["Name"] for p in printers] == ["HP", "XP-58"]


def test_cli_print_requires_printer(service, capsys):
    assert cli.main(["--print", "http://x/doc.pdf"]) == 2
    assert "URL o impresora no especificados" in capsys.readouterr().err


def test_cli_printer_without_print_is_rejected(service, capsys):
    assert cli.main(["--list", "--printer", "HP"]) == 2
    assert "--printer is only valid together with --print" in capsys.readouterr().err
    assert service.directory.calls == 0


def test_cli_prints_document(service, capsys):
    assert cli.main(["--print", "http://x/doc.pdf", "--printer", "HP"]) == 0
    assert "[OK]" in capsys.readouterr().out
    assert service.document_printer.calls[0][1] == "HP"


def test_cli_reports_unknown_printer(service, capsys):
    assert cli.main(["--open-drawer", "Ghost"]) == 1
    assert "la impresora 'Ghost' no existe" in capsys.readouterr().err


def test_drawer_cli_opens_drawer(service, capsys):
    assert drawer_cli.main(["--printer", "XP-58"]) == 0
    assert service.drawer_opener.calls == ["XP-58"]
    assert "[OK] Cash drawer opened successfully" in capsys.readouterr().out


def test_drawer_cli_failure_exit_code(service):
    service.drawer_opener.fail = True
    assert drawer_cli.main(["--printer", "HP"]) == 1
