"""Argument handling and delegation shared by all commands."""

from __future__ import annotations

from typing import Sequence

import typer

from qdbtools.cli.common.context import AppContext
from qdbtools.cli.common.exits import exit_from_exc, ok_exit, usage_exit
from qdbtools.cli.common.output import display_command, out
from qdbtools.core.dispatch import ExecutorNotExecutable, ExecutorNotFound, execute
from qdbtools.core.flags import FlagSpec, ParsedArgs, UsageError, format_flags, parse_args
from qdbtools.core.queries import Invocation


def usage_text(
    ctx: typer.Context,
    *,
    synopsis: str,
    description: str,
    spec: FlagSpec,
    epilog: str = "",
) -> str:
    """Build the usage/help text for a command."""
    parts = [
        f"Usage: {ctx.command_path} {synopsis}",
        "",
        description,
        "",
        "Options:",
        format_flags(spec),
    ]
    if epilog:
        parts.extend(["", epilog])
    return "\n".join(parts)


def parse_or_exit(ctx: typer.Context, spec: FlagSpec, usage: str) -> ParsedArgs:
    """
    Parse the raw command tokens.

    Prints usage and exits 0 on -h/--help; prints the error plus usage and
    exits 1 on invalid input.
    """
    try:
        parsed = parse_args(ctx.args, spec)
    except UsageError as exc:
        usage_exit(exc, usage)

    if parsed.help:
        out.text(usage)
        ok_exit()
    return parsed


def run_invocation(
    appctx: AppContext,
    invocation: Invocation,
    *,
    dry_run: bool = False,
    verbose: bool = False,
) -> int:
    """
    Echo and/or execute an invocation.

    Returns:
        0 for a dry run, otherwise the executor's exit code unchanged.
    """
    executor = appctx.executor
    if dry_run:
        cmd = executor.command_for(invocation)
        out.command("Dry run", cmd)
        # shell quoting can split the query; repeat it as-is when it does
        if invocation.sql not in display_command(cmd):
            out.text(f"SQL: {invocation.sql}")
        return 0
    if verbose:
        out.command("Running", executor.command_for(invocation), err=True)

    try:
        return execute(executor, invocation)
    except ExecutorNotFound as exc:
        exit_from_exc(exc, message=str(exc), code=127)
    except ExecutorNotExecutable as exc:
        exit_from_exc(exc, message=str(exc), code=126)


def finish(code: int) -> None:
    """Exit with the given code unless it is 0."""
    if code:
        raise typer.Exit(code)


def require_positionals(parsed: ParsedArgs, names: Sequence[str], usage: str) -> None:
    """Exit with a usage error if fewer positionals than `names` were given."""
    if len(parsed.positionals) < len(names):
        missing = names[len(parsed.positionals)]
        usage_exit(UsageError(f"Missing argument '{missing}'."), usage)
