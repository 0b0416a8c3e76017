"""Executor that delegates queries to the ``qdb-cli`` client as a subprocess."""

from __future__ import annotations

import os
import shlex
import subprocess

from qdbtools.core.dispatch import ExecutorNotExecutable, ExecutorNotFound
from qdbtools.core.queries import Invocation, OutputMode


class ConfigError(ValueError):
    """Raised when the adapter configuration from the environment is invalid."""


class QdbCliAdapter:
    """Adapter around the ``qdb-cli`` command-line client."""

    _BIN_ENV = "QDBTOOLS_CLI"
    _ARGS_ENV = "QDBTOOLS_CLI_ARGS"
    _DEFAULT_BIN = "qdb-cli"

    def __init__(self, binary: str = _DEFAULT_BIN, global_args: list[str] | None = None):
        """Create an adapter invoking `binary` with optional global options."""
        self.binary = binary
        self.global_args = list(global_args or [])

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> QdbCliAdapter:
        """Build an adapter from QDBTOOLS_CLI / QDBTOOLS_CLI_ARGS."""
        env = os.environ if environ is None else environ
        binary = env.get(cls._BIN_ENV, "").strip() or cls._DEFAULT_BIN
        raw_args = env.get(cls._ARGS_ENV, "")
        try:
            global_args = shlex.split(raw_args)
        except ValueError as exc:
            raise ConfigError(f"Invalid {cls._ARGS_ENV}: {exc}") from exc
        return cls(binary, global_args)

    def _base(self, sql: str) -> list[str]:
        return [self.binary, *self.global_args, "exec", "-q", sql]

    def command_for(self, invocation: Invocation) -> list[str]:
        """Return the full qdb-cli argument list for an invocation."""
        cmd = self._base(invocation.sql)
        if invocation.output is OutputMode.FIELD:
            cmd.extend(["-x", invocation.field])
        else:
            cmd.append("--psql")
        if invocation.limit is not None:
            cmd.extend(["-l", str(invocation.limit)])
        return cmd

    def _run(self, cmd: list[str]) -> int:
        # stdout/stderr are inherited: the client's output passes through untouched
        try:
            return subprocess.run(cmd, check=False).returncode
        except FileNotFoundError as exc:
            raise ExecutorNotFound(
                f"'{self.binary}' command not found. "
                f"Install it or point {self._BIN_ENV} at it."
            ) from exc
        except PermissionError as exc:
            raise ExecutorNotExecutable(f"'{self.binary}' is not executable.") from exc

    def render(self, sql: str, *, limit: int | None = None) -> int:
        """Execute sql and let qdb-cli render a psql-style table."""
        return self._run(
            self.command_for(Invocation(sql=sql, output=OutputMode.TABLE, limit=limit))
        )

    def extract(self, sql: str, field: str, *, limit: int | None = None) -> int:
        """Execute sql and let qdb-cli print one field per row."""
        return self._run(
            self.command_for(
                Invocation(sql=sql, output=OutputMode.FIELD, field=field, limit=limit)
            )
        )
