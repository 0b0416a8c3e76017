"""Command-line flag parsing for the qdb wrappers.

The parser is a pure fold over the argument list. Each token moves an
immutable parse state forward; the first invalid transition raises
UsageError and nothing else is evaluated. Mutually exclusive flags are
tracked as pairs, so a pair is always in one of four states: unset, first
member set, second member set, or conflict (which is the error).

A flag that takes a value consumes the following token unless that token
starts with a dash. In that case the value is treated as absent, so a value
such as ``-5`` can never be passed to a flag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Iterable, Mapping, Sequence

HELP_TOKENS = frozenset({"-h", "--help"})

_INT_RE = re.compile(r"[0-9]+")


class UsageError(ValueError):
    """Raised when the command line cannot be turned into a valid request."""


@dataclass(frozen=True)
class Flag:
    """
    Declaration of a single command-line flag.

    Attributes:
        dest: Key under which the flag is reported in ParsedArgs.
        long: Long form, e.g. ``--min-length``.
        short: Optional short form, e.g. ``-l``.
        takes_value: True if the flag consumes the following token.
        integer: True if the value must be a non-negative integer.
        value_optional: True if an absent value is acceptable.
        metavar: Placeholder shown in usage text.
        help: One-line description shown in usage text.
    """

    dest: str
    long: str
    short: str | None = None
    takes_value: bool = False
    integer: bool = False
    value_optional: bool = False
    metavar: str | None = None
    help: str = ""

    @property
    def label(self) -> str:
        """Return the flag as shown in messages, e.g. ``-l/--min-length``."""
        return f"{self.short}/{self.long}" if self.short else self.long


@dataclass(frozen=True)
class FlagSpec:
    """Declared flags, exclusive pairs and positional limits for one command."""

    flags: tuple[Flag, ...]
    exclusive: tuple[tuple[str, str], ...] = ()
    max_positionals: int = 0

    def lookup(self, token: str) -> Flag | None:
        """Return the flag declared for an exact token, or None."""
        for flag in self.flags:
            if token in (flag.long, flag.short):
                return flag
        return None

    def by_dest(self, dest: str) -> Flag:
        """Return the flag declared under a destination key."""
        for flag in self.flags:
            if flag.dest == dest:
                return flag
        raise KeyError(dest)


@dataclass(frozen=True)
class ParsedArgs:
    """
    Immutable result of parsing a command line.

    Boolean flags appear in ``switches`` only when given. Value flags appear
    in ``values`` only when given; an absent value is reported as None
    (integer flags are converted to int).
    """

    switches: frozenset[str] = frozenset()
    values: Mapping[str, str | int | None] = field(default_factory=dict)
    positionals: tuple[str, ...] = ()
    help: bool = False

    def switch(self, dest: str) -> bool:
        return dest in self.switches

    def value(self, dest: str, default=None):
        return self.values.get(dest, default)

    def has_value(self, dest: str) -> bool:
        return dest in self.values


@dataclass(frozen=True)
class _State:
    """Intermediate fold state."""

    switches: frozenset[str] = frozenset()
    values: tuple[tuple[str, str | int | None], ...] = ()
    positionals: tuple[str, ...] = ()
    pending: Flag | None = None
    options_done: bool = False


def _looks_like_flag(token: str) -> bool:
    return token.startswith("-") and token != "-"


def _coerce(flag: Flag, raw: str | None) -> str | int | None:
    """Validate a raw value for a flag and return its parsed form."""
    if raw is None or raw == "":
        if flag.integer and not flag.value_optional:
            raise UsageError(f"{flag.label} requires a non-negative integer value.")
        return None
    if flag.integer:
        if not _INT_RE.fullmatch(raw):
            raise UsageError(
                f"{flag.label} requires a non-negative integer value, got '{raw}'."
            )
        return int(raw)
    return raw


def _partner(spec: FlagSpec, dest: str) -> str | None:
    for first, second in spec.exclusive:
        if dest == first:
            return second
        if dest == second:
            return first
    return None


def _mark(spec: FlagSpec, state: _State, flag: Flag) -> frozenset[str]:
    """Record a flag as given, enforcing its exclusive pair."""
    partner = _partner(spec, flag.dest)
    seen = state.switches | {dest for dest, _ in state.values}
    if partner is not None and partner in seen:
        other = spec.by_dest(partner)
        raise UsageError(f"{other.label} and {flag.label} are mutually exclusive.")
    if flag.takes_value:
        return state.switches
    return state.switches | {flag.dest}


def _with_value(state: _State, flag: Flag, value: str | int | None) -> _State:
    values = tuple((d, v) for d, v in state.values if d != flag.dest)
    return replace(state, values=values + ((flag.dest, value),), pending=None)


def _add_positional(spec: FlagSpec, state: _State, token: str) -> _State:
    if len(state.positionals) >= spec.max_positionals:
        if spec.max_positionals == 0:
            raise UsageError(f"Unexpected argument '{token}'.")
        raise UsageError(
            f"Too many arguments: expected at most {spec.max_positionals}, "
            f"got extra '{token}'."
        )
    return replace(state, positionals=state.positionals + (token,))


def _start_flag(spec: FlagSpec, state: _State, token: str) -> _State:
    name, inline = token, None
    if token.startswith("--") and "=" in token:
        name, inline = token.split("=", 1)

    flag = spec.lookup(name)
    if flag is None:
        raise UsageError(f"Unknown option '{name}'.")

    switches = _mark(spec, state, flag)
    state = replace(state, switches=switches)

    if not flag.takes_value:
        if inline is not None:
            raise UsageError(f"{flag.label} does not take a value.")
        return state
    if inline is not None:
        return _with_value(state, flag, _coerce(flag, inline))
    return replace(state, pending=flag)


def _step(spec: FlagSpec):
    def step(state: _State, token: str) -> _State:
        if state.pending is not None:
            if not _looks_like_flag(token):
                return _with_value(state, state.pending, _coerce(state.pending, token))
            # dash-prefixed token: the pending flag gets no value
            state = _with_value(state, state.pending, _coerce(state.pending, None))

        if state.options_done:
            return _add_positional(spec, state, token)
        if token == "--":
            return replace(state, options_done=True)
        if _looks_like_flag(token):
            return _start_flag(spec, state, token)
        return _add_positional(spec, state, token)

    return step


def parse_args(argv: Iterable[str], spec: FlagSpec) -> ParsedArgs:
    """
    Parse an argument list against a flag specification.

    Args:
        argv: Raw tokens, without the program name.
        spec: Flags, exclusive pairs and positional limit of the command.

    Returns:
        ParsedArgs describing the given flags, values and positionals. When
        ``-h``/``--help`` is present anywhere, an otherwise empty ParsedArgs
        with ``help=True`` is returned and no other validation happens.

    Raises:
        UsageError: On the first invalid token.
    """
    tokens: Sequence[str] = list(argv)
    if any(token in HELP_TOKENS for token in tokens):
        return ParsedArgs(help=True)

    state = reduce(_step(spec), tokens, _State())
    if state.pending is not None:
        state = _with_value(state, state.pending, _coerce(state.pending, None))

    return ParsedArgs(
        switches=state.switches,
        values=dict(state.values),
        positionals=state.positionals,
    )


def format_flags(spec: FlagSpec) -> str:
    """Render the flag table used in usage text."""
    rows: list[tuple[str, str]] = []
    for flag in spec.flags:
        names = ", ".join(n for n in (flag.short, flag.long) if n)
        if flag.takes_value:
            metavar = flag.metavar or flag.dest.upper()
            names = f"{names} [{metavar}]" if flag.value_optional else f"{names} {metavar}"
        rows.append((names, flag.help))
    rows.append(("-h, --help", "Show this message and exit."))

    width = max(len(names) for names, _ in rows)
    return "\n".join(f"  {names.ljust(width)}  {text}".rstrip() for names, text in rows)
