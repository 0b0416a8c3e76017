"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from qdbtools.cli.common.output import out


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def usage_exit(exc: Exception, usage: str) -> NoReturn:
    """Report a usage error followed by the usage text and exit with code 1."""
    out.error(str(exc))
    out.text(usage, err=True)
    raise typer.Exit(1) from exc


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Helper function to print an error message and exit with a given code.

    Exists to satisfy pylint W0707 and to standardize error exits.
    """
    out.error(message)
    raise typer.Exit(code) from exc
