"""
Printer name resolution.

Enumeration mechanisms return printers in whatever shape they like: plain
strings from shell output, records from native libraries with the name under
a platform-specific key. resolve_printer_name() maps any of those to a clean
name or None.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Sequence

# Checked in order; the case variants come from different driver layers.
NAME_KEYS: Sequence[str] = (
    "name",
    "Name",
    "printerName",
    "PrinterName",
    "deviceName",
    "DeviceName",
    "deviceId",
    "DeviceId",
    "DeviceID",
    "Printer",
    "PRINTER",
)


def _clean(value: Any) -> Optional[str]:
    if isinstance(value, str):
        value = value.strip()
        if value:
            return value
    return None


def resolve_printer_name(descriptor: Any) -> Optional[str]:
    """
    Extract a printer name from a descriptor of unknown shape.

    - str: stripped, None if blank
    - Mapping: first non-blank string under NAME_KEYS, else the first non-blank
      string value in the mapping's iteration order
    - anything else: None

    Known keys always win over the first-string scan, which could otherwise
    pick up an unrelated field such as a status message.
    """
    if not descriptor:
        return None
    if isinstance(descriptor, str):
        return _clean(descriptor)
    if not isinstance(descriptor, Mapping):
        return None

    for key in NAME_KEYS:
        name = _clean(descriptor.get(key))
        if name:
            return name

    for value in descriptor.values():
        name = _clean(value)
        if name:
            return name
    return None


def resolve_printer_names(descriptors: Any) -> list[str]:
    """Resolve a sequence of descriptors, dropping unresolvable ones and keeping order."""
    if isinstance(descriptors, (str, bytes, Mapping)) or not isinstance(descriptors, (list, tuple)):
        return []
    names: list[str] = []
    for d in descriptors:
        name = resolve_printer_name(d)
        if name:
            names.append(name)
    return names


__all__ = ["NAME_KEYS", "resolve_printer_name", "resolve_printer_names"]
