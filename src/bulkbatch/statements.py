"""Build parameterized INSERT / UPDATE / DELETE statements for one chunk.

Nothing here touches a connection: each builder returns SQL text plus the
flattened parameter list to bind against it.
"""

from datetime import datetime
from typing import Any, NamedTuple, Sequence

from bulkbatch.errors import MalformedInputError
from bulkbatch.identifiers import validate_columns, validate_identifier
from bulkbatch.types import CURRENT_TIMESTAMP, Record

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Statement(NamedTuple):
    sql: str
    params: list[Any]


def _now() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def _bind(value: Any, now: str) -> Any:
    return now if value is CURRENT_TIMESTAMP else value


def build_insert(
    table: str,
    columns: Sequence[str],
    chunk: Sequence[Record],
    placeholder: str = "?",
) -> Statement:
    """Build one multi-row INSERT for ``chunk``.

    Produces ``len(chunk)`` value groups of ``len(columns)`` placeholders.
    Parameters are ordered row by row, each row in column order.

    A record that lacks one of ``columns`` binds NULL for it instead of
    failing (lenient fill). Keys not named in ``columns`` are ignored.
    """
    validate_identifier(table, qualified=True)
    columns = validate_columns(columns)
    if not chunk:
        raise MalformedInputError("Cannot build an INSERT for an empty chunk")

    group = "(" + ", ".join(placeholder for _ in columns) + ")"
    sql = (
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES "
        + ", ".join(group for _ in chunk)
    )

    now = _now()
    params = [_bind(row.get(column), now) for row in chunk for column in columns]
    return Statement(sql, params)


def build_update(
    table: str,
    id_column: str,
    chunk: Sequence[Record],
    placeholder: str = "?",
) -> list[Statement]:
    """Build one UPDATE per record, keyed on ``id_column``.

    The SET list comes from each record's own keys (minus the id column), so
    records in the same chunk may touch different columns.
    """
    validate_identifier(table, qualified=True)
    validate_identifier(id_column)

    now = _now()
    statements = []
    for record in chunk:
        if id_column not in record:
            raise MalformedInputError(f"Update record is missing id column {id_column!r}")
        set_columns = [column for column in record if column != id_column]
        if not set_columns:
            raise MalformedInputError(
                f"Update record for {id_column}={record[id_column]!r} has no columns to set"
            )
        for column in set_columns:
            validate_identifier(column)

        set_clause = ", ".join(f"{column} = {placeholder}" for column in set_columns)
        sql = f"UPDATE {table} SET {set_clause} WHERE {id_column} = {placeholder}"
        params = [_bind(record[column], now) for column in set_columns]
        params.append(record[id_column])
        statements.append(Statement(sql, params))
    return statements


def build_delete(
    table: str,
    id_column: str,
    ids: Sequence[Any],
    placeholder: str = "?",
) -> Statement:
    """Build ``DELETE ... WHERE id_column IN (...)`` with one placeholder per id."""
    validate_identifier(table, qualified=True)
    validate_identifier(id_column)
    if not ids:
        raise MalformedInputError("Cannot build a DELETE for an empty chunk")

    placeholders = ", ".join(placeholder for _ in ids)
    sql = f"DELETE FROM {table} WHERE {id_column} IN ({placeholders})"
    return Statement(sql, list(ids))
