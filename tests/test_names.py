from collections import OrderedDict

import pytest

from ticket_printer.printing.names import resolve_printer_name, resolve_printer_names


@pytest.mark.parametrize(
    "value,expected",
    [
        ("HP LaserJet", "HP LaserJet"),
        ("  EPSON TM-T20  ", "EPSON TM-T20"),
        ("\tPOS-80\r\n", "POS-80"),
        ("", None),
        ("   ", None),
    ],
)
def test_strings_are_trimmed(value, expected):
    assert resolve_printer_name(value) == expected


@pytest.mark.parametrize("value", [None, 0, 42, 3.5, True, False, ("A",), ["A"], b"A"])
def test_non_records_resolve_to_none(value):
    assert resolve_printer_name(value) is None


def test_known_key_beats_other_string_fields():
    assert resolve_printer_name({"note": "B", "Name": "A"}) == "A"


def test_known_keys_checked_in_order():
    assert resolve_printer_name({"deviceId": "id-1", "name": "by-name"}) == "by-name"
    assert resolve_printer_name({"DeviceID": "USB001", "PRINTER": "upper"}) == "USB001"


def test_known_key_with_blank_value_is_skipped():
    assert resolve_printer_name({"name": "  ", "printerName": " Kitchen "}) == "Kitchen"


def test_known_key_with_non_string_value_is_skipped():
    assert resolve_printer_name({"Name": 7, "deviceName": "Bar"}) == "Bar"


def test_falls_back_to_first_string_field_in_order():
    record = OrderedDict([("status", "ok"), ("label", "LPT1")])
    assert resolve_printer_name(record) == "ok"


def test_fallback_skips_non_strings_and_blanks():
    assert resolve_printer_name({"port": 9100, "blank": " ", "label": " LPT1 "}) == "LPT1"


def test_record_without_strings_resolves_to_none():
    assert resolve_printer_name({"port": 9100, "default": True}) is None
    assert resolve_printer_name({}) is None


def test_resolve_many_drops_unresolvable_and_keeps_order():
    raw = [{"Name": "X"}, None, "Y", 12, {"deviceId": "Z"}, "  ", "Y"]
    assert resolve_printer_names(raw) == ["X", "Y", "Z", "Y"]


def test_resolve_many_requires_a_sequence():
    assert resolve_printer_names("HP") == []
    assert resolve_printer_names({"Name": "X"}) == []
    assert resolve_printer_names(None) == []
