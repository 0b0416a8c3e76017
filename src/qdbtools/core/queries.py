"""Query templates and downstream invocations.

Each wrapper ends up with one Invocation: the SQL text plus the output shape
that should be requested from ``qdb-cli``. Builders in this module are pure
and free of CLI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from qdbtools.core.filters import TABLE_NAME_COLUMN, TableFilter
from qdbtools.core.sql import quote_identifier

COLUMN_NAME_FIELD = "column"
COUNT_FIELD = "count"


class OutputMode(str, Enum):
    """
    Output shape requested from the downstream client.

    Values:
        TABLE: Render the full result as a table.
        FIELD: Print only the values of one named field, one per line.
    """

    TABLE = "table"
    FIELD = "field"


class QueryMode(str, Enum):
    """Canned query templates."""

    COUNT = "count"
    DISTINCT = "distinct"
    DISTINCT_COUNT = "distinct_count"

    @property
    def needs_column(self) -> bool:
        return self is not QueryMode.COUNT


@dataclass(frozen=True)
class Invocation:
    """
    A fully assembled request for the downstream client.

    Attributes:
        sql: Query text.
        output: Requested output shape.
        field: Field to extract (only for OutputMode.FIELD).
        limit: Optional row limit applied by the client.
    """

    sql: str
    output: OutputMode
    field: str | None = None
    limit: int | None = None

    def __post_init__(self):
        if self.output is OutputMode.FIELD and not self.field:
            raise ValueError("Field extraction requires a field name.")
        if self.output is OutputMode.TABLE and self.field is not None:
            raise ValueError("Table output does not take a field name.")


def tables_sql(
    table_filter: TableFilter,
    *,
    full_cols: bool = False,
    sort: str | None = None,
    reverse: bool = False,
) -> str:
    """Build ``SELECT ... FROM tables [WHERE ...] [ORDER BY ...]``."""
    cols = "*" if full_cols else TABLE_NAME_COLUMN
    sql = f"SELECT {cols} FROM tables"

    where = table_filter.where()
    if where is not None:
        sql += f" WHERE {where.to_sql()}"

    if sort:
        sql += f" ORDER BY {quote_identifier(sort)}"
        if reverse:
            sql += " DESC"
    elif reverse:
        raise ValueError("Reverse ordering requires a sort column.")

    return sql


def tables_invocation(
    table_filter: TableFilter,
    *,
    full_cols: bool = False,
    sort: str | None = None,
    reverse: bool = False,
    limit: int | None = None,
) -> Invocation:
    """Return the invocation listing catalog tables (names only unless full_cols)."""
    sql = tables_sql(table_filter, full_cols=full_cols, sort=sort, reverse=reverse)
    if full_cols:
        return Invocation(sql=sql, output=OutputMode.TABLE, limit=limit)
    return Invocation(sql=sql, output=OutputMode.FIELD, field=TABLE_NAME_COLUMN, limit=limit)


def columns_invocation(table_name: str, *, name_only: bool = False) -> Invocation:
    """Return the invocation listing the columns of one table."""
    sql = f"show columns from {quote_identifier(table_name)}"
    if name_only:
        return Invocation(sql=sql, output=OutputMode.FIELD, field=COLUMN_NAME_FIELD)
    return Invocation(sql=sql, output=OutputMode.TABLE)


def canned_sql(mode: QueryMode, table_name: str, col_name: str | None = None) -> str:
    """
    Build one of the canned query templates.

    Raises:
        ValueError: If a distinct mode is requested without a column name.
    """
    table = quote_identifier(table_name)
    if mode is QueryMode.COUNT:
        return f"select count() from {table};"

    if not col_name:
        raise ValueError(f"Column name is required for {mode.value} mode.")
    col = quote_identifier(col_name)
    if mode is QueryMode.DISTINCT:
        return f"select distinct ({col}) from {table};"
    return f"select distinct ({col}), count() from {table};"


def canned_invocation(
    mode: QueryMode, table_name: str, col_name: str | None = None
) -> Invocation:
    """Return the invocation for a canned query."""
    sql = canned_sql(mode, table_name, col_name)
    if mode is QueryMode.COUNT:
        return Invocation(sql=sql, output=OutputMode.FIELD, field=COUNT_FIELD)
    if mode is QueryMode.DISTINCT:
        return Invocation(sql=sql, output=OutputMode.FIELD, field=col_name)
    return Invocation(sql=sql, output=OutputMode.TABLE)
