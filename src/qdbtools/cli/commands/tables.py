"""Command listing QuestDB tables from the `tables` catalog view."""

import typer

from qdbtools.cli.common.context import build_context
from qdbtools.cli.common.exits import usage_exit
from qdbtools.cli.common.options import RAW_ARGS, TABLES_SPEC, RawArgsCommand
from qdbtools.cli.common.output import out
from qdbtools.cli.common.runner import finish, parse_or_exit, run_invocation, usage_text
from qdbtools.core.filters import (
    KNOWN_TABLES_COLUMNS,
    TABLE_NAME_COLUMN,
    TableFilter,
    parse_partitions,
)
from qdbtools.core.flags import ParsedArgs, UsageError
from qdbtools.core.queries import Invocation, tables_invocation

_EXAMPLES = """Examples:
  # list tables NOT matching 'backup_'
  {prog} -v backup_

  # list tables partitioned by YEAR or MONTH
  {prog} -P YEAR,MONTH

  # list tables with deduplication enabled and a designated timestamp
  {prog} -d -t

  # full catalog info for tables matching 'schwab' with length >= 10
  {prog} schwab -l 10 -f

  # first 10 table names, sorted descending
  {prog} -s -r -n 10"""

app = typer.Typer(add_completion=False)


def _tri_state(parsed: ParsedArgs, yes: str, no: str) -> bool | None:
    if parsed.switch(yes):
        return True
    if parsed.switch(no):
        return False
    return None


def build_table_filter(parsed: ParsedArgs) -> TableFilter:
    """
    Build a TableFilter from parsed tables flags.

    Raises:
        UsageError: If a partitioning strategy is unknown.
    """
    try:
        partitions = parse_partitions(parsed.value("partition_by"))
    except ValueError as exc:
        raise UsageError(str(exc)) from exc

    return TableFilter(
        regex=parsed.positionals[0] if parsed.positionals else None,
        inverse_match=parsed.switch("inverse_match"),
        uuid=_tri_state(parsed, "uuid", "no_uuid"),
        partition_by=partitions,
        dedup=_tri_state(parsed, "dedup_enabled", "dedup_disabled"),
        designated_timestamp=_tri_state(parsed, "has_timestamp", "no_timestamp"),
        min_length=parsed.value("min_length"),
        max_length=parsed.value("max_length"),
    )


def build_tables_invocation(parsed: ParsedArgs) -> Invocation:
    """
    Translate parsed tables flags into a downstream invocation.

    Raises:
        UsageError: On invalid partition values, sort column or -r without -s.
    """
    table_filter = build_table_filter(parsed)

    sort = None
    if parsed.has_value("sort"):
        sort = parsed.value("sort") or TABLE_NAME_COLUMN
        if sort not in KNOWN_TABLES_COLUMNS:
            raise UsageError(
                f"Invalid sort column '{sort}'. "
                f"Available columns: {', '.join(KNOWN_TABLES_COLUMNS)}"
            )
    reverse = parsed.switch("reverse")
    if reverse and sort is None:
        raise UsageError("-r/--reverse requires -s/--sort to be specified.")

    return tables_invocation(
        table_filter,
        full_cols=parsed.switch("full_cols"),
        sort=sort,
        reverse=reverse,
        limit=parsed.value("limit"),
    )


@app.command("tables", cls=RawArgsCommand, context_settings=RAW_ARGS)
def tables(ctx: typer.Context):
    """
    List tables, optionally filtered.
    """
    usage = usage_text(
        ctx,
        synopsis="[options] [regex]",
        description=(
            "List QuestDB table names (or full catalog rows with -f) from the "
            "`tables` catalog view.\nThe optional regex is matched against "
            "table names with '~'."
        ),
        spec=TABLES_SPEC,
        epilog=_EXAMPLES.format(prog=ctx.command_path),
    )
    parsed = parse_or_exit(ctx, TABLES_SPEC, usage)

    try:
        invocation = build_tables_invocation(parsed)
    except UsageError as exc:
        usage_exit(exc, usage)

    if parsed.switch("inverse_match") and not parsed.positionals:
        out.warn("-v/--inverse-match has no effect without a regex.")

    finish(run_invocation(build_context(), invocation))
