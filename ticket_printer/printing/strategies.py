"""
Strategy chains for printer discovery.

Each strategy is a small object with a uniform ``attempt()`` coroutine that
returns a value or something empty. A chain tries its strategies in order and
stops at the first non-empty value; failures are logged and the next strategy
is tried. Chains never raise.

Printer listing:  native -> shell A (modern) -> shell B (management) -> shell C (legacy table)
Default printer:  native -> shell "is default" filter -> shell two-column table
"""

from __future__ import annotations

import asyncio
import logging
import re
import sys
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .native import NativeBackend
from .shell import output_lines, run_command

logger = logging.getLogger(__name__)

Parser = Callable[[str], Any]

# Columns in `wmic printer get Name,Default` are padded with 2+ spaces.
_COLUMN_SPLIT = re.compile(r"\s{2,}")


def parse_lines(stdout: str) -> List[str]:
    return output_lines(stdout)


def parse_name_column(stdout: str) -> List[str]:
    """Like parse_lines, but drops the ``Name`` column header of tabular output."""
    return [line for line in output_lines(stdout) if line.lower() != "name"]


def parse_single_value(stdout: str) -> Optional[str]:
    return (stdout or "").strip() or None


def parse_default_table(stdout: str) -> Optional[str]:
    """
    Pick the printer flagged as default from a two-column (name, flag) table.

    >>> parse_default_table("Name        Default\\nHP LaserJet   FALSE\\nCanon MX       TRUE")
    'Canon MX'
    """
    for line in output_lines(stdout):
        parts = _COLUMN_SPLIT.split(line)
        if len(parts) < 2:
            continue
        name, flag = parts[0], parts[1]
        if "true" in (flag or "").lower():
            return (name or "").strip()
    return None


# (key, default command, parser) per platform family, in chain order
WINDOWS_LIST_COMMANDS: Sequence[Tuple[str, str, Parser]] = (
    ("get_printer", 'powershell -NoProfile -Command "Get-Printer | Select-Object -ExpandProperty Name"', parse_lines),
    (
        "wmi",
        'powershell -NoProfile -Command "Get-WmiObject -Class Win32_Printer | Select-Object -ExpandProperty Name"',
        parse_lines,
    ),
    ("wmic", "wmic printer get Name", parse_name_column),
)
POSIX_LIST_COMMANDS: Sequence[Tuple[str, str, Parser]] = (
    ("lpstat_e", "lpstat -e", parse_lines),
    ("lpstat_a", "lpstat -a | cut -d' ' -f1", parse_lines),
    ("lpc", "lpc status all | grep ':$' | tr -d ':'", parse_name_column),
)

WINDOWS_DEFAULT_COMMANDS: Sequence[Tuple[str, Optional[str], Parser]] = (
    (
        "wmi_default",
        'powershell -NoProfile -Command "(Get-WmiObject -Class Win32_Printer '
        '| Where-Object {$_.Default -eq $true} | Select-Object -ExpandProperty Name)"',
        parse_single_value,
    ),
    ("wmic_table", "wmic printer get Name,Default", parse_default_table),
)
POSIX_DEFAULT_COMMANDS: Sequence[Tuple[str, Optional[str], Parser]] = (
    ("lpstat_d", "lpstat -d | sed -n 's/^system default destination: //p'", parse_single_value),
    ("wmic_table", None, parse_default_table),
)


class Strategy:
    """One way of obtaining a value; ``attempt()`` may raise or return empty."""

    name = "strategy"

    async def attempt(self) -> Any:  # pragma: no cover - interface
        raise NotImplementedError


class NativeStrategy(Strategy):
    def __init__(self, name: str, func: Callable[[], Any]):
        self.name = name
        self.func = func

    async def attempt(self) -> Any:
        # Native printing libraries block; keep them off the event loop.
        return await asyncio.to_thread(self.func)


class ShellStrategy(Strategy):
    def __init__(self, name: str, command: str, parser: Parser, *, windows_hide: bool = True):
        self.name = name
        self.command = command
        self.parser = parser
        self.windows_hide = windows_hide

    async def attempt(self) -> Any:
        result = await run_command(self.command, windows_hide=self.windows_hide)
        return self.parser(result.stdout)

    def __repr__(self) -> str:
        return f"ShellStrategy({self.name!r}, {self.command!r})"


async def first_result(strategies: Sequence[Strategy], label: str) -> Any:
    """
    Run strategies in order and return the first non-empty value, or None.
    """
    for strategy in strategies:
        try:
            value = await strategy.attempt()
        except Exception as e:
            logger.warning("%s: strategy %s failed: %s", label, strategy.name, e)
            continue
        if value:
            logger.debug("%s: answered by %s", label, strategy.name)
            return value
        logger.debug("%s: %s returned nothing", label, strategy.name)
    return None


def _is_windows(platform: Optional[str]) -> bool:
    return (platform or sys.platform) == "win32"


def _shell_strategies(
    table: Sequence[Tuple[str, Optional[str], Parser]],
    overrides: Optional[Mapping[str, Optional[str]]],
    windows_hide: bool,
) -> List[Strategy]:
    strategies: List[Strategy] = []
    for key, command, parser in table:
        if overrides and key in overrides:
            command = overrides[key]
        if not command:
            continue
        strategies.append(ShellStrategy(key, command, parser, windows_hide=windows_hide))
    return strategies


def build_list_strategies(
    native: Optional[NativeBackend] = None,
    settings: Optional[Mapping[str, Any]] = None,
    platform: Optional[str] = None,
) -> List[Strategy]:
    settings = settings or {}
    strategies: List[Strategy] = []
    if native is not None and native.list_printers is not None:
        strategies.append(NativeStrategy(f"{native.name}.list_printers", native.list_printers))
    table = WINDOWS_LIST_COMMANDS if _is_windows(platform) else POSIX_LIST_COMMANDS
    strategies.extend(
        _shell_strategies(table, settings.get("list_commands"), bool(settings.get("windows_hide", True)))
    )
    return strategies


def build_default_strategies(
    native: Optional[NativeBackend] = None,
    settings: Optional[Mapping[str, Any]] = None,
    platform: Optional[str] = None,
) -> List[Strategy]:
    settings = settings or {}
    strategies: List[Strategy] = []
    if native is not None and native.default_printer is not None:
        strategies.append(NativeStrategy(f"{native.name}.default_printer", native.default_printer))
    table = WINDOWS_DEFAULT_COMMANDS if _is_windows(platform) else POSIX_DEFAULT_COMMANDS
    strategies.extend(
        _shell_strategies(table, settings.get("default_commands"), bool(settings.get("windows_hide", True)))
    )
    return strategies


async def list_printers(
    native: Optional[NativeBackend] = None,
    settings: Optional[Mapping[str, Any]] = None,
    platform: Optional[str] = None,
) -> List[Any]:
    """Raw printer descriptors from the first productive strategy, or []."""
    value = await first_result(build_list_strategies(native, settings, platform), "list_printers")
    # A backend answering with anything but a sequence has no usable listing.
    if not isinstance(value, (list, tuple)):
        return []
    return list(value)


async def default_printer(
    native: Optional[NativeBackend] = None,
    settings: Optional[Mapping[str, Any]] = None,
    platform: Optional[str] = None,
) -> Any:
    """Raw default printer descriptor from the first productive strategy, or None."""
    return await first_result(build_default_strategies(native, settings, platform), "default_printer")


__all__ = [
    "NativeStrategy",
    "ShellStrategy",
    "Strategy",
    "build_default_strategies",
    "build_list_strategies",
    "default_printer",
    "first_result",
    "list_printers",
    "parse_default_table",
    "parse_lines",
    "parse_name_column",
    "parse_single_value",
]
