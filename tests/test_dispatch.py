import sys

import pytest

from ticket_printer.printing import dispatch, native
from ticket_printer.printing.errors import PrintDispatchError, PrinterNotFoundError, ProcessError

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="lp/CUPS paths are POSIX only")


@pytest.fixture
def pdf(tmp_path):
    path = tmp_path / "ticket.pdf"
    path.write_bytes(b"%PDF-1.4\n%%EOF\n")
    return str(path)


class FakeCupsConnection:
    printers = {"EPSON_TM_T20": {"printer-state": 3}}
    default = "EPSON_TM_T20"
    submitted = []

    def getPrinters(self):
        return self.printers

    def getDefault(self):
        return self.default

    def printFile(self, dest, path, title, options):
        self.submitted.append((dest, path, title, options))
        return 17


class FakeCups:
    class IPPError(Exception):
        pass

    Connection = FakeCupsConnection


@posix_only
@pytest.mark.asyncio
async def test_lp_with_named_printer(monkeypatch, fake_runner, pdf):
    calls = []
    monkeypatch.setattr(native, "cups", None)
    lp = f"lp -t Table -d 'Kitchen Printer' {pdf}"
    monkeypatch.setattr(dispatch, "run_command", fake_runner({lp: "request id is Kitchen-1 (1 file(s))\n"}, calls))

    await dispatch.print_file(pdf, "Kitchen Printer", title="Table")

    assert calls == [lp]


@posix_only
@pytest.mark.asyncio
async def test_lp_default_printer(monkeypatch, fake_runner, pdf):
    calls = []
    monkeypatch.setattr(native, "cups", None)
    monkeypatch.setattr(dispatch, "run_command", fake_runner({f"lp -t ticket {pdf}": ""}, calls))

    await dispatch.print_file(pdf, "  ")

    assert calls == [f"lp -t ticket {pdf}"]


@posix_only
@pytest.mark.asyncio
async def test_lp_unknown_printer(monkeypatch, fake_runner, pdf):
    monkeypatch.setattr(native, "cups", None)
    lp = f"lp -t ticket -d Nope {pdf}"
    err = ProcessError(lp, 1, stderr="lp: The printer or class does not exist.")
    monkeypatch.setattr(dispatch, "run_command", fake_runner({lp: err}))

    with pytest.raises(PrinterNotFoundError):
        await dispatch.print_file(pdf, "Nope")


@posix_only
@pytest.mark.asyncio
async def test_lp_other_failure(monkeypatch, fake_runner, pdf):
    monkeypatch.setattr(native, "cups", None)
    monkeypatch.setattr(dispatch, "run_command", fake_runner({}))

    with pytest.raises(PrintDispatchError) as excinfo:
        await dispatch.print_file(pdf)
    assert not isinstance(excinfo.value, PrinterNotFoundError)


@posix_only
@pytest.mark.asyncio
async def test_cups_submits_to_named_printer(monkeypatch, pdf):
    FakeCupsConnection.submitted = []
    monkeypatch.setattr(native, "cups", FakeCups)

    await dispatch.print_file(pdf, "EPSON_TM_T20", title="Table 4")

    assert FakeCupsConnection.submitted == [("EPSON_TM_T20", pdf, "Table 4", {})]


@posix_only
@pytest.mark.asyncio
async def test_cups_uses_default_printer(monkeypatch, pdf):
    FakeCupsConnection.submitted = []
    monkeypatch.setattr(native, "cups", FakeCups)

    await dispatch.print_file(pdf)

    assert FakeCupsConnection.submitted[0][0] == "EPSON_TM_T20"


@posix_only
@pytest.mark.asyncio
async def test_cups_unknown_printer(monkeypatch, pdf):
    monkeypatch.setattr(native, "cups", FakeCups)
    with pytest.raises(PrinterNotFoundError):
        await dispatch.print_file(pdf, "Ghost")


@pytest.mark.asyncio
async def test_missing_file_is_rejected(tmp_path):
    with pytest.raises(PrintDispatchError):
        await dispatch.print_file(str(tmp_path / "nope.pdf"))
