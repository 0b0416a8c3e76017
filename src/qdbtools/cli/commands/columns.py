"""Command listing the columns of a QuestDB table."""

import typer

from qdbtools.cli.common.context import build_context
from qdbtools.cli.common.options import COLUMNS_SPEC, RAW_ARGS, RawArgsCommand
from qdbtools.cli.common.runner import (
    finish,
    parse_or_exit,
    require_positionals,
    run_invocation,
    usage_text,
)
from qdbtools.core.queries import columns_invocation

app = typer.Typer(add_completion=False)


@app.command("columns", cls=RawArgsCommand, context_settings=RAW_ARGS)
def columns(ctx: typer.Context):
    """
    Show the columns of a table.
    """
    usage = usage_text(
        ctx,
        synopsis="[-n|--name-only] [-h|--help] <table_name>",
        description="Show the columns of a QuestDB table (SHOW COLUMNS).",
        spec=COLUMNS_SPEC,
    )
    parsed = parse_or_exit(ctx, COLUMNS_SPEC, usage)
    require_positionals(parsed, ["table_name"], usage)

    invocation = columns_invocation(
        parsed.positionals[0], name_only=parsed.switch("name_only")
    )
    finish(run_invocation(build_context(), invocation))
