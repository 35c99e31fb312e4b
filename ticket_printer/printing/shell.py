"""
Shell command runner used by the discovery fallbacks and the `lp` dispatcher.

Commands run through the OS shell with asyncio so the awaiting request is
suspended while other requests keep being served. No timeout is applied: a
command that never exits blocks the request that awaited it.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
import sys
from dataclasses import dataclass

from .errors import ProcessError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    stdout: str
    stderr: str


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


async def run_command(command: str, *, windows_hide: bool = True) -> CommandResult:
    """
    Run ``command`` through the shell and wait for it to exit.

    Raises:
        ProcessError: the command could not be spawned or exited non-zero.
    """
    kwargs = {}
    if windows_hide and sys.platform == "win32":
        kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW  # type: ignore[attr-defined]

    logger.debug("Running shell command: %s", command)
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            **kwargs,
        )
    except OSError as e:
        raise ProcessError(command, None, reason=str(e)) from e

    out, err = await proc.communicate()
    result = CommandResult(stdout=_decode(out), stderr=_decode(err))
    if proc.returncode != 0:
        raise ProcessError(command, proc.returncode, stderr=result.stderr)
    return result


def output_lines(text: str) -> list[str]:
    """Split command output into stripped, non-empty lines (CRLF tolerant)."""
    return [line.strip() for line in text.splitlines() if line.strip()]


__all__ = ["CommandResult", "output_lines", "run_command"]
