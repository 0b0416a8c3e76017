"""Common CLI options for the CLI."""

import click
from typer.core import TyperCommand

from qdbtools.core.filters import PARTITION_OPTIONS
from qdbtools.core.flags import Flag, FlagSpec

# Commands receive their raw tokens and parse them with qdbtools.core.flags
RAW_ARGS = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
    "help_option_names": [],
}


class RawArgsCommand(TyperCommand):
    """Command that hands every token, ``--`` included, to ``ctx.args`` untouched."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.args = list(args)
        return []


COLUMNS_SPEC = FlagSpec(
    flags=(
        Flag(
            "name_only",
            "--name-only",
            "-n",
            help="Print only column names, one per line.",
        ),
    ),
    max_positionals=1,
)

TABLES_SPEC = FlagSpec(
    flags=(
        Flag(
            "inverse_match",
            "--inverse-match",
            "-v",
            help="Use inverse regex match ('!~') for the positional regex.",
        ),
        Flag("uuid", "--uuid", "-u", help="Only tables containing a UUID-4 in their name."),
        Flag(
            "no_uuid",
            "--no-uuid",
            "-U",
            help="Only tables NOT containing a UUID-4 in their name.",
        ),
        Flag(
            "partition_by",
            "--partitionBy",
            "-P",
            takes_value=True,
            metavar="P",
            help=f"Comma-separated partitioning strategies ({','.join(PARTITION_OPTIONS)}).",
        ),
        Flag(
            "has_timestamp",
            "--has-designated-timestamp",
            "-t",
            help="Only tables with a designated timestamp column.",
        ),
        Flag(
            "no_timestamp",
            "--no-designated-timestamp",
            "-T",
            help="Only tables without a designated timestamp column.",
        ),
        Flag(
            "dedup_enabled",
            "--dedup-enabled",
            "-d",
            help="Only tables with deduplication enabled.",
        ),
        Flag(
            "dedup_disabled",
            "--dedup-disabled",
            "-D",
            help="Only tables with deduplication disabled.",
        ),
        Flag(
            "min_length",
            "--min-length",
            "-l",
            takes_value=True,
            integer=True,
            metavar="N",
            help="Only tables with name length >= N.",
        ),
        Flag(
            "max_length",
            "--max-length",
            "-L",
            takes_value=True,
            integer=True,
            metavar="N",
            help="Only tables with name length <= N.",
        ),
        Flag(
            "sort",
            "--sort",
            "-s",
            takes_value=True,
            value_optional=True,
            metavar="COL",
            help="Sort by COL (default: table_name).",
        ),
        Flag("reverse", "--reverse", "-r", help="Reverse the sort order (requires -s)."),
        Flag(
            "limit",
            "--limit",
            "-n",
            takes_value=True,
            integer=True,
            metavar="N",
            help="Limit the number of rows returned.",
        ),
        Flag(
            "full_cols",
            "--full-cols",
            "-f",
            help="Show all catalog columns as a table instead of names only.",
        ),
    ),
    exclusive=(
        ("uuid", "no_uuid"),
        ("has_timestamp", "no_timestamp"),
        ("dedup_enabled", "dedup_disabled"),
    ),
    max_positionals=1,
)

QUERY_SPEC = FlagSpec(
    flags=(
        Flag("distinct", "--distinct", "-d", help="Distinct values of a column."),
        Flag(
            "count",
            "--count",
            "-c",
            help="Distinct values of a column with their row counts.",
        ),
        Flag(
            "dry_run",
            "--dry-run",
            "-n",
            help="Show the command that would be run, but do not execute it.",
        ),
        Flag("verbose", "--verbose", "-v", help="Show the command before running it."),
    ),
    max_positionals=2,
)
