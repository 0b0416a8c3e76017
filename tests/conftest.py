from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


class FakeRun:
    """Stand-in for subprocess.run that records qdb-cli invocations."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.returncode = 0
        self.error: Exception | None = None

    def __call__(self, cmd, check=False):
        self.calls.append(list(cmd))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(cmd, self.returncode)

    @property
    def sql(self) -> list[str]:
        """SQL text of every recorded call (the argument after -q)."""
        return [cmd[cmd.index("-q") + 1] for cmd in self.calls]


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    from qdbtools.core.adapters import qdbcli

    fake = FakeRun()
    monkeypatch.setattr(qdbcli.subprocess, "run", fake)
    monkeypatch.delenv("QDBTOOLS_CLI", raising=False)
    monkeypatch.delenv("QDBTOOLS_CLI_ARGS", raising=False)
    return fake


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
