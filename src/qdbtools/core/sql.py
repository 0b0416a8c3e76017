"""SQL quoting helpers for QuestDB."""


def quote_literal(value: str) -> str:
    """Return value as a single-quoted SQL string literal."""
    return "'" + value.replace("'", "''") + "'"


def quote_identifier(name: str) -> str:
    """Return name as a double-quoted SQL identifier."""
    return '"' + name.replace('"', '""') + '"'
