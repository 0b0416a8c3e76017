"""Command running canned queries (count / distinct / distinct count)."""

import sys

import typer

from qdbtools.cli.common.context import build_context
from qdbtools.cli.common.exits import ok_exit, usage_exit
from qdbtools.cli.common.options import QUERY_SPEC, RAW_ARGS, RawArgsCommand
from qdbtools.cli.common.runner import (
    finish,
    parse_or_exit,
    require_positionals,
    run_invocation,
    usage_text,
)
from qdbtools.core.flags import ParsedArgs, UsageError
from qdbtools.core.queries import QueryMode, canned_invocation

STDIN_MARKER = "-"

_EXAMPLES = """Modes:
  (default)   select count() from "<table>";
  -d          select distinct ("<col>") from "<table>";
  -c          select distinct ("<col>"), count() from "<table>";

Pass '-' as table_name to read table names from stdin, one per line.

Examples:
  {prog} trades
  {prog} -d trades symbol
  {prog} -n -c trades symbol
  qdb-tables trades_ | {prog} -d - symbol"""

app = typer.Typer(add_completion=False)


def query_mode(parsed: ParsedArgs) -> QueryMode:
    """Return the canned query mode selected by -d / -c (-c wins)."""
    if parsed.switch("count"):
        return QueryMode.DISTINCT_COUNT
    if parsed.switch("distinct"):
        return QueryMode.DISTINCT
    return QueryMode.COUNT


def _stdin_is_terminal() -> bool:
    return sys.stdin.isatty()


def _read_table_names() -> list[str]:
    return [line.strip() for line in sys.stdin if line.strip()]


@app.command("query", cls=RawArgsCommand, context_settings=RAW_ARGS)
def query(ctx: typer.Context):
    """
    Run a canned query against a table.
    """
    usage = usage_text(
        ctx,
        synopsis=(
            "[-d|--distinct] [-c|--count] [-n|--dry-run] [-v|--verbose] "
            "[-h|--help] <table_name> [<col_name>]"
        ),
        description="Run a canned count / distinct query against a QuestDB table.",
        spec=QUERY_SPEC,
        epilog=_EXAMPLES.format(prog=ctx.command_path),
    )
    parsed = parse_or_exit(ctx, QUERY_SPEC, usage)
    require_positionals(parsed, ["table_name"], usage)

    mode = query_mode(parsed)
    table_name = parsed.positionals[0]
    col_name = parsed.positionals[1] if len(parsed.positionals) > 1 else None
    if mode.needs_column and not col_name:
        flag = "-c/--count" if mode is QueryMode.DISTINCT_COUNT else "-d/--distinct"
        usage_exit(UsageError(f"Argument 'col_name' is required for {flag}."), usage)

    if table_name == STDIN_MARKER and _stdin_is_terminal():
        usage_exit(
            UsageError("Table name '-' given but no data piped via stdin."), usage
        )
    table_names = _read_table_names() if table_name == STDIN_MARKER else [table_name]
    if not table_names:
        ok_exit("No table names read from standard input.")

    appctx = build_context()
    for name in table_names:
        invocation = canned_invocation(mode, name, col_name)
        finish(
            run_invocation(
                appctx,
                invocation,
                dry_run=parsed.switch("dry_run"),
                verbose=parsed.switch("verbose"),
            )
        )
