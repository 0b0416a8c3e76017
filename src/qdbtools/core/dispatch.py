"""Delegation of invocations to a query executor.

The executor is whatever actually runs SQL and prints results; in
production that is the ``qdb-cli`` binary (see
``qdbtools.core.adapters.qdbcli``). Exit codes are returned as-is: no
retries, no interpretation.
"""

from __future__ import annotations

from typing import Protocol

from qdbtools.core.queries import Invocation, OutputMode


class ExecutorError(RuntimeError):
    """Raised when the executor itself cannot be started."""


class ExecutorNotFound(ExecutorError):
    """Raised when the client binary cannot be located."""


class ExecutorNotExecutable(ExecutorError):
    """Raised when the client binary exists but cannot be executed."""


class QueryExecutor(Protocol):
    """Interface for running queries and rendering their results."""

    def render(self, sql: str, *, limit: int | None = None) -> int:
        """Execute sql, render the full result as a table, return the exit code."""
        ...

    def extract(self, sql: str, field: str, *, limit: int | None = None) -> int:
        """Execute sql, print only one field per row, return the exit code."""
        ...

    def command_for(self, invocation: Invocation) -> list[str]:
        """Return the command line that would run the invocation."""
        ...


def execute(executor: QueryExecutor, invocation: Invocation) -> int:
    """
    Run an invocation with the executor matching its output mode.

    Args:
        executor: Executor used to run the query.
        invocation: Query and requested output shape.

    Returns:
        The executor's exit code, unchanged.
    """
    if invocation.output is OutputMode.FIELD:
        return executor.extract(invocation.sql, invocation.field, limit=invocation.limit)
    return executor.render(invocation.sql, limit=invocation.limit)
