import logging

import pytest

from ticket_printer.printing import strategies as st
from ticket_printer.printing.errors import ProcessError
from ticket_printer.printing.native import NativeBackend


def _cmd(table, key):
    return dict((k, c) for k, c, _ in table)[key]


WIN_GET_PRINTER = _cmd(st.WINDOWS_LIST_COMMANDS, "get_printer")
WIN_WMI = _cmd(st.WINDOWS_LIST_COMMANDS, "wmi")
WIN_WMIC = _cmd(st.WINDOWS_LIST_COMMANDS, "wmic")
WIN_DEFAULT_WMI = _cmd(st.WINDOWS_DEFAULT_COMMANDS, "wmi_default")
WIN_DEFAULT_TABLE = _cmd(st.WINDOWS_DEFAULT_COMMANDS, "wmic_table")


def test_parse_lines_trims_and_drops_blank_lines():
    assert st.parse_lines("HP\r\n\r\n  Canon  \n\n") == ["HP", "Canon"]


def test_parse_name_column_drops_header_any_case():
    out = "Name      \r\nHP LaserJet\r\n\r\nCanon MX\r\n"
    assert st.parse_name_column(out) == ["HP LaserJet", "Canon MX"]
    assert st.parse_name_column("NAME\nEpson\n") == ["Epson"]


def test_parse_default_table_picks_true_row():
    out = "Default  Name\nHP LaserJet   FALSE\nCanon MX       TRUE\n"
    assert st.parse_default_table(out) == "Canon MX"


def test_parse_default_table_skips_single_token_rows():
    out = "Lonely\nTRUE\nEpson   true\n"
    assert st.parse_default_table(out) == "Epson"


def test_parse_default_table_without_default():
    assert st.parse_default_table("HP LaserJet   FALSE\n") is None
    assert st.parse_default_table("") is None


@pytest.mark.asyncio
async def test_first_strategy_with_results_wins(monkeypatch, fake_runner):
    calls = []
    monkeypatch.setattr(st, "run_command", fake_runner({WIN_GET_PRINTER: "HP\nCanon\n"}, calls))

    result = await st.list_printers(settings={}, platform="win32")

    assert result == ["HP", "Canon"]
    assert calls == [WIN_GET_PRINTER]


@pytest.mark.asyncio
async def test_failures_and_empty_output_fall_through(monkeypatch, fake_runner):
    calls = []
    outputs = {
        WIN_GET_PRINTER: ProcessError(WIN_GET_PRINTER, 1, stderr="Get-Printer not found"),
        WIN_WMI: "\r\n\r\n",
        WIN_WMIC: "Name\r\nEPSON TM-T20\r\n",
    }
    monkeypatch.setattr(st, "run_command", fake_runner(outputs, calls))

    result = await st.list_printers(settings={}, platform="win32")

    assert result == ["EPSON TM-T20"]
    assert calls == [WIN_GET_PRINTER, WIN_WMI, WIN_WMIC]


@pytest.mark.asyncio
async def test_all_strategies_failing_yields_empty_list(monkeypatch, fake_runner, caplog):
    monkeypatch.setattr(st, "run_command", fake_runner({}))

    with caplog.at_level(logging.WARNING, logger="ticket_printer.printing.strategies"):
        result = await st.list_printers(settings={}, platform="win32")

    assert result == []
    assert sum("failed" in r.getMessage() for r in caplog.records) == 3


@pytest.mark.asyncio
async def test_native_listing_is_tried_first(monkeypatch, fake_runner):
    calls = []
    monkeypatch.setattr(st, "run_command", fake_runner({WIN_GET_PRINTER: "Shell\n"}, calls))
    native = NativeBackend("fake", list_printers=lambda: [{"Name": "Native"}])

    result = await st.list_printers(native, settings={}, platform="win32")

    assert result == [{"Name": "Native"}]
    assert calls == []


@pytest.mark.asyncio
async def test_native_failure_falls_back_to_shell(monkeypatch, fake_runner):
    def _boom():
        raise RuntimeError("spooler down")

    monkeypatch.setattr(st, "run_command", fake_runner({WIN_GET_PRINTER: "Shell\n"}))
    native = NativeBackend("fake", list_printers=_boom, default_printer=_boom)

    assert await st.list_printers(native, settings={}, platform="win32") == ["Shell"]


@pytest.mark.asyncio
async def test_command_overrides_replace_and_disable(monkeypatch, fake_runner):
    calls = []
    monkeypatch.setattr(st, "run_command", fake_runner({"my-lister": "Custom\n"}, calls))
    settings = {"list_commands": {"get_printer": None, "wmi": "my-lister"}}

    result = await st.list_printers(settings=settings, platform="win32")

    assert result == ["Custom"]
    assert calls == ["my-lister"]


@pytest.mark.asyncio
async def test_default_filter_query(monkeypatch, fake_runner):
    monkeypatch.setattr(st, "run_command", fake_runner({WIN_DEFAULT_WMI: "  Canon MX \r\n"}))
    assert await st.default_printer(settings={}, platform="win32") == "Canon MX"


@pytest.mark.asyncio
async def test_default_blank_output_falls_back_to_table(monkeypatch, fake_runner):
    outputs = {
        WIN_DEFAULT_WMI: "   \r\n",
        WIN_DEFAULT_TABLE: "Name           Default\r\nHP LaserJet   FALSE\r\nCanon MX       TRUE\r\n",
    }
    monkeypatch.setattr(st, "run_command", fake_runner(outputs))
    assert await st.default_printer(settings={}, platform="win32") == "Canon MX"


@pytest.mark.asyncio
async def test_default_total_failure_is_none(monkeypatch, fake_runner):
    monkeypatch.setattr(st, "run_command", fake_runner({}))
    assert await st.default_printer(settings={}, platform="win32") is None


@pytest.mark.asyncio
async def test_posix_default_table_is_disabled(monkeypatch, fake_runner):
    calls = []
    monkeypatch.setattr(st, "run_command", fake_runner({}, calls))

    assert await st.default_printer(settings={}, platform="linux") is None
    assert len(calls) == 1
    assert calls[0].startswith("lpstat -d")


def test_build_list_strategies_order():
    native = NativeBackend("fake", list_printers=list)
    names = [s.name for s in st.build_list_strategies(native, {}, platform="win32")]
    assert names == ["fake.list_printers", "get_printer", "wmi", "wmic"]


def test_build_strategies_without_native_capability():
    native = NativeBackend("partial", list_printers=None, default_printer=None)
    names = [s.name for s in st.build_default_strategies(native, {}, platform="win32")]
    assert names == ["wmi_default", "wmic_table"]


@pytest.mark.asyncio
async def test_native_listing_that_is_not_a_sequence_yields_no_printers(monkeypatch, fake_runner):
    monkeypatch.setattr(st, "run_command", fake_runner({}))
    native = NativeBackend("fake", list_printers=lambda: "Solo Printer")

    assert await st.list_printers(native, settings={}, platform="win32") == []
