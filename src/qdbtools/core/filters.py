"""Table catalog filters.

This module translates filter criteria for the QuestDB ``tables`` catalog
view into an ordered list of predicates. The order of predicates is fixed
and does not depend on the order in which flags were given, so the same
filter always compiles to the same WHERE clause.
"""

from __future__ import annotations

from dataclasses import dataclass

from qdbtools.core.predicates import (
    AndPredicate,
    BoolPredicate,
    InPredicate,
    LengthPredicate,
    NullPredicate,
    Predicate,
    RegexPredicate,
)

TABLE_NAME_COLUMN = "table_name"
PARTITION_COLUMN = "partitionBy"
TIMESTAMP_COLUMN = "designatedTimestamp"
DEDUP_COLUMN = "dedup"

# UUID-4 with either dashes or underscores as separators
UUID_REGEX = r"[0-9a-f]{8}([-_][0-9a-f]{4}){3}[-_][0-9a-f]{12}"

PARTITION_OPTIONS = ("NONE", "YEAR", "MONTH", "DAY", "HOUR", "WEEK")

KNOWN_TABLES_COLUMNS = (
    "id",
    "table_name",
    "designatedTimestamp",
    "partitionBy",
    "maxUncommittedRows",
    "o3MaxLag",
    "walEnabled",
    "directoryName",
    "dedup",
    "ttlValue",
    "ttlUnit",
    "matView",
)


@dataclass(frozen=True)
class TableFilter:
    """
    Filter criteria for rows of the ``tables`` catalog view.

    Attributes:
        regex: Optional regex applied to the table name.
        inverse_match: If True, ``regex`` must NOT match.
        uuid: True for names containing a UUID, False for names without
              one, None for no constraint.
        partition_by: Accepted partitioning strategies (empty: any).
        dedup: Required deduplication setting, or None.
        designated_timestamp: True if a designated timestamp is required,
              False if it must be absent, None for no constraint.
        min_length: Minimum table name length, or None.
        max_length: Maximum table name length, or None.
    """

    regex: str | None = None
    inverse_match: bool = False
    uuid: bool | None = None
    partition_by: tuple[str, ...] = ()
    dedup: bool | None = None
    designated_timestamp: bool | None = None
    min_length: int | None = None
    max_length: int | None = None

    def predicates(self) -> list[Predicate]:
        """
        Return the predicates of this filter in their canonical order:
        regex, uuid, partition, dedup, timestamp, min length, max length.
        """
        preds: list[Predicate] = []

        if self.regex:
            preds.append(
                RegexPredicate(TABLE_NAME_COLUMN, self.regex, negate=self.inverse_match)
            )

        if self.uuid is not None:
            preds.append(RegexPredicate(TABLE_NAME_COLUMN, UUID_REGEX, negate=not self.uuid))

        if self.partition_by:
            preds.append(InPredicate(PARTITION_COLUMN, self.partition_by))

        if self.dedup is not None:
            preds.append(BoolPredicate(DEDUP_COLUMN, self.dedup))

        if self.designated_timestamp is not None:
            preds.append(
                NullPredicate(TIMESTAMP_COLUMN, is_null=not self.designated_timestamp)
            )

        if self.min_length is not None:
            preds.append(LengthPredicate(TABLE_NAME_COLUMN, ">=", self.min_length))
        if self.max_length is not None:
            preds.append(LengthPredicate(TABLE_NAME_COLUMN, "<=", self.max_length))

        return preds

    def where(self) -> AndPredicate | None:
        """Return the conjunction of all predicates, or None if there are none."""
        preds = self.predicates()
        if not preds:
            return None
        return AndPredicate(preds)


def parse_partitions(raw: str | None) -> tuple[str, ...]:
    """
    Parse a comma-separated list of partitioning strategies.

    Values are stripped and upper-cased; empty items are ignored.

    Raises:
        ValueError: If any value is not a known partitioning strategy.
    """
    if not raw:
        return ()
    partitions = tuple(p.strip().upper() for p in raw.split(",") if p.strip())
    invalid = [p for p in partitions if p not in PARTITION_OPTIONS]
    if invalid:
        raise ValueError(
            f"Invalid partitionBy value(s): {','.join(invalid)}. "
            f"Available options: {','.join(PARTITION_OPTIONS)}"
        )
    return partitions
