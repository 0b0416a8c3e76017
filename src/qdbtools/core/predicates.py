"""Predicate abstractions for filtering the QuestDB table catalog.

A predicate is one atomic condition on a row of the ``tables`` catalog view,
for example a regex match on the table name or a bound on its length.
Predicates are small immutable objects that only know how to render
themselves as SQL; they can be composed with AndPredicate into a full WHERE
clause. Rendering happens at the very end, so the structure of a filter can
be inspected and tested independently of its text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from qdbtools.core.sql import quote_literal


class Predicate(ABC):
    """
    Abstract base class for all catalog predicates.

    A Predicate encapsulates a single condition and renders it as one
    SQL boolean sub-expression.
    """

    @abstractmethod
    def to_sql(self) -> str:
        """
        Render this predicate as SQL.

        Returns:
            A boolean SQL expression without a leading WHERE.
        """
        ...


@dataclass(frozen=True)
class RegexPredicate(Predicate):
    """
    Regex match (``~``) or inverse match (``!~``) of a column against a
    pattern.
    """

    column: str
    pattern: str
    negate: bool = False

    def to_sql(self) -> str:
        operator = "!~" if self.negate else "~"
        return f"{self.column} {operator} {quote_literal(self.pattern)}"


@dataclass(frozen=True)
class LengthPredicate(Predicate):
    """Lower (``>=``) or upper (``<=``) bound on the length of a column."""

    column: str
    operator: str
    bound: int

    def __post_init__(self):
        if self.operator not in (">=", "<="):
            raise ValueError(f"Unsupported length operator: {self.operator}")
        if self.bound < 0:
            raise ValueError("Length bound must be >= 0")

    def to_sql(self) -> str:
        return f"length({self.column}) {self.operator} {self.bound}"


@dataclass(frozen=True)
class InPredicate(Predicate):
    """Set membership of a column in a list of string values."""

    column: str
    values: tuple[str, ...]

    def __post_init__(self):
        if not self.values:
            raise ValueError("InPredicate requires at least one value")

    def to_sql(self) -> str:
        rendered = ",".join(quote_literal(v) for v in self.values)
        return f"{self.column} IN ({rendered})"


@dataclass(frozen=True)
class NullPredicate(Predicate):
    """``IS NULL`` / ``IS NOT NULL`` check on a column."""

    column: str
    is_null: bool

    def to_sql(self) -> str:
        return f"{self.column} IS NULL" if self.is_null else f"{self.column} IS NOT NULL"


@dataclass(frozen=True)
class BoolPredicate(Predicate):
    """Equality of a boolean column with ``true`` or ``false``."""

    column: str
    value: bool

    def to_sql(self) -> str:
        return f"{self.column} = {'true' if self.value else 'false'}"


class AndPredicate(Predicate):
    """
    Composite predicate that holds only if all child predicates hold.
    """

    def __init__(self, predicates: Sequence[Predicate]):
        """
        Create a logical AND predicate.

        Args:
            predicates: Child predicates, rendered in the given order.
        """
        self.predicates = tuple(predicates)

    def __eq__(self, other):
        return isinstance(other, AndPredicate) and self.predicates == other.predicates

    def __hash__(self):
        return hash(self.predicates)

    def __repr__(self):
        return f"AndPredicate({list(self.predicates)!r})"

    def to_sql(self) -> str:
        return " AND ".join(p.to_sql() for p in self.predicates)
