"""Output formatting utilities for the CLI."""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

_THEME = Theme(
    {
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
    }
)

# stdout carries results (dry-run commands); everything else goes to stderr
console = Console(theme=_THEME, soft_wrap=True)
err_console = Console(theme=_THEME, soft_wrap=True, stderr=True)

_SAFE_ARG = re.compile(r"[\w@%+=:,./-]+")
_DOUBLE_QUOTE_UNSAFE = set('"$`\\!')


def display_arg(arg: str) -> str:
    """
    Quote one argument for display as a shell command.

    Prefers quoting that keeps the argument readable (and SQL text intact)
    over shlex's generic `'"'"'` escaping; the result is still valid shell.
    """
    if arg and _SAFE_ARG.fullmatch(arg):
        return arg
    if "'" not in arg:
        return f"'{arg}'"
    if not _DOUBLE_QUOTE_UNSAFE.intersection(arg):
        return f'"{arg}"'
    return shlex.quote(arg)


def display_command(cmd: Sequence[str]) -> str:
    """Return a command line as a copy-pasteable shell string."""
    return " ".join(display_arg(a) for a in cmd)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        err_console.print(f"[title]›[/] {escape(msg)}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        err_console.print(f"[warn]⚠[/] {escape(msg)}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        err_console.print(f"[err]✗[/] {escape(msg)}")

    def text(self, msg: str, *, err: bool = False) -> None:
        """Print plain text without markup or highlighting."""
        target = err_console if err else console
        target.print(msg, markup=False, highlight=False, emoji=False)

    def command(self, label: str, cmd: Sequence[str], *, err: bool = False) -> None:
        """
        Print a command line prefixed by a label, e.g. ``Dry run: qdb-cli ...``.

        The command itself is printed verbatim: no markup, no highlighting,
        no wrapping.
        """
        self.text(f"{label}: {display_command(cmd)}", err=err)


out = Out()
