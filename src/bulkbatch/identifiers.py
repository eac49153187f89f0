"""Validation for table and column names interpolated into SQL text."""

import re

from bulkbatch.errors import MalformedInputError

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

RESERVED_WORDS = frozenset(
    {
        "ALL", "ALTER", "AND", "AS", "BETWEEN", "BY", "CASE", "CHECK", "COLUMN",
        "CONSTRAINT", "CREATE", "CROSS", "DEFAULT", "DELETE", "DISTINCT", "DROP",
        "ELSE", "END", "EXCEPT", "EXISTS", "FOREIGN", "FROM", "FULL", "GRANT",
        "GROUP", "HAVING", "IN", "INNER", "INSERT", "INTERSECT", "INTO", "IS",
        "JOIN", "LEFT", "LIKE", "LIMIT", "NOT", "NULL", "OFFSET", "ON", "OR",
        "ORDER", "OUTER", "PRIMARY", "REFERENCES", "RIGHT", "SELECT", "SET",
        "TABLE", "THEN", "TO", "UNION", "UNIQUE", "UPDATE", "USING", "VALUES",
        "WHEN", "WHERE", "WITH",
    }
)


def validate_identifier(name: str, *, qualified: bool = False) -> str:
    """Return ``name`` unchanged if it is safe to embed as an identifier.

    Placeholders cannot bind identifiers, so table and column names go into
    the statement text verbatim. With ``qualified=True`` a ``schema.table``
    form is accepted.
    """
    if not isinstance(name, str) or not name:
        raise MalformedInputError(f"Invalid SQL identifier: {name!r}")

    parts = name.split(".")
    if len(parts) > (2 if qualified else 1):
        raise MalformedInputError(f"Invalid SQL identifier: {name!r}")

    for part in parts:
        if not _IDENTIFIER_RE.match(part):
            raise MalformedInputError(f"Invalid SQL identifier: {name!r}")
        if part.upper() in RESERVED_WORDS:
            raise MalformedInputError(f"Reserved word used as SQL identifier: {name!r}")
    return name


def validate_columns(columns) -> list[str]:
    """Validate a column spec: non-empty, valid names, no duplicates."""
    columns = list(columns)
    if not columns:
        raise MalformedInputError("Column list must not be empty")
    seen = set()
    for column in columns:
        validate_identifier(column)
        if column in seen:
            raise MalformedInputError(f"Duplicate column in column list: {column!r}")
        seen.add(column)
    return columns
