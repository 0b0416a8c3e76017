"""CLI application for QuestDB convenience wrappers around qdb-cli."""

import typer

from qdbtools.cli.commands.columns import columns
from qdbtools.cli.commands.query import query
from qdbtools.cli.commands.tables import tables
from qdbtools.cli.common.options import RAW_ARGS, RawArgsCommand

app = typer.Typer(
    help="qdbtools - QuestDB convenience wrappers around qdb-cli",
    no_args_is_help=True,
    add_completion=False,
)

app.command(
    "columns",
    cls=RawArgsCommand,
    context_settings=RAW_ARGS,
    help="Show the columns of a table.",
)(columns)
app.command(
    "tables",
    cls=RawArgsCommand,
    context_settings=RAW_ARGS,
    help="List tables, optionally filtered.",
)(tables)
app.command(
    "query",
    cls=RawArgsCommand,
    context_settings=RAW_ARGS,
    help="Run a canned query against a table.",
)(query)


if __name__ == "__main__":
    app()
