# Ensure the repository root is on sys.path so `ticket_printer` can be imported in tests.

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    # This file lives at: <repo_root>/tests/conftest.py
    # We want to add <repo_root> to sys.path (if not already present).
    here = Path(__file__).resolve()
    repo_root = here.parent.parent
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


_ensure_repo_root_on_syspath()


@pytest.fixture(autouse=True)
def _isolated_paths(tmp_path, monkeypatch):
    # Keep config reads and uploads/temp PDFs out of the real home directory.
    monkeypatch.setenv("TICKETPRINTER_CONFIG_PATH", str(tmp_path / "config.json"))
    monkeypatch.setenv("TICKETPRINTER_MEDIA_PATH", str(tmp_path / "media"))


def _make_fake_runner(outputs, calls=None):
    """
    Build a stand-in for run_command.

    outputs maps an exact command line to either stdout text or an exception
    instance to raise. Unknown commands raise ProcessError.
    """
    from ticket_printer.printing.errors import ProcessError
    from ticket_printer.printing.shell import CommandResult

    async def _run(command, *, windows_hide=True):
        if calls is not None:
            calls.append(command)
        out = outputs.get(command)
        if out is None:
            raise ProcessError(command, 1, stderr="not recognized")
        if isinstance(out, BaseException):
            raise out
        return CommandResult(stdout=out, stderr="")

    return _run


@pytest.fixture
def fake_runner():
    return _make_fake_runner
