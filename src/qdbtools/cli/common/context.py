"""Application context management for the CLI."""

from dataclasses import dataclass

from qdbtools.cli.common.exits import exit_from_exc
from qdbtools.core.adapters.qdbcli import ConfigError, QdbCliAdapter
from qdbtools.core.dispatch import QueryExecutor


@dataclass
class AppContext:
    """Application context holding the query executor."""

    executor: QueryExecutor


def build_context() -> AppContext:
    """Build and return the application context from environment configuration.

    Returns:
        AppContext: Application context with a configured qdb-cli adapter.
    """
    try:
        adapter = QdbCliAdapter.from_env()
    except ConfigError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    return AppContext(executor=adapter)
