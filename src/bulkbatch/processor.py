"""Chunked, transactional bulk insert / update / delete."""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Sequence

from bulkbatch.chunking import iter_chunks
from bulkbatch.errors import MalformedInputError
from bulkbatch.identifiers import validate_columns, validate_identifier
from bulkbatch.ingestion.csv_source import load_from_csv
from bulkbatch.service import DatabaseService
from bulkbatch.statements import Statement, build_delete, build_insert, build_update
from bulkbatch.stats import memory_usage
from bulkbatch.types import Record

DEFAULT_BATCH_SIZE = 1000


def _check_batch_size(batch_size: int) -> None:
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size <= 0:
        raise MalformedInputError(f"batch_size must be a positive integer, got {batch_size!r}")


class BulkBatchProcessor:
    """Runs bulk operations one chunk per transaction.

    Each chunk commits on its own. When a chunk fails it is rolled back and
    the error propagates, but chunks committed before it stay committed:
    there is no all-or-nothing guarantee across the whole input.

    A processor is not safe for concurrent use; it drives a single
    connection.
    """

    def __init__(
        self,
        service: DatabaseService,
        batch_size: int = DEFAULT_BATCH_SIZE,
        logger: logging.Logger | None = None,
    ):
        _check_batch_size(batch_size)
        self._service = service
        self._batch_size = batch_size
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._logger.info("Batch processor ready (batch size %d)", batch_size)

    @classmethod
    def from_url(
        cls,
        db_url: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
        logger: logging.Logger | None = None,
    ) -> "BulkBatchProcessor":
        """Create the service for ``db_url``, connect it, and wrap it.

        Raises MalformedInputError for a bad batch size before connecting,
        and DatabaseConnectionError if the connection cannot be opened.
        """
        from bulkbatch import create_service

        _check_batch_size(batch_size)
        service = create_service(db_url)
        service.connect()
        return cls(service, batch_size=batch_size, logger=logger)

    @property
    def service(self) -> DatabaseService:
        return self._service

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def close(self) -> None:
        self._service.close()

    def __enter__(self) -> "BulkBatchProcessor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def bulk_insert(self, table: str, records: Iterable[Record], columns: Sequence[str]) -> int:
        """Insert ``records`` with one multi-row INSERT per chunk.

        Returns the number of records inserted. Keys missing from a record
        are inserted as NULL.
        """
        validate_identifier(table, qualified=True)
        columns = validate_columns(columns)
        records = list(records)
        for position, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise MalformedInputError(
                    f"Insert record {position} is not a mapping: {type(record).__name__}"
                )
        placeholder = self._service.placeholder

        def build(chunk: list[Record]) -> list[Statement]:
            return [build_insert(table, columns, chunk, placeholder)]

        return self._run_chunks("bulk insert", table, records, build)

    def batch_update(self, table: str, records: Iterable[Record], id_column: str = "id") -> int:
        """Update rows by ``id_column``, one statement per record.

        Returns the number of update records applied, whether or not each
        matched an existing row.
        """
        validate_identifier(table, qualified=True)
        validate_identifier(id_column)
        records = list(records)
        for position, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise MalformedInputError(
                    f"Update record {position} is not a mapping: {type(record).__name__}"
                )
            if id_column not in record:
                raise MalformedInputError(
                    f"Update record {position} is missing id column {id_column!r}"
                )
            if len(record) < 2:
                raise MalformedInputError(f"Update record {position} has no columns to set")
            for column in record:
                validate_identifier(column)
        placeholder = self._service.placeholder

        def build(chunk: list[Record]) -> list[Statement]:
            return build_update(table, id_column, chunk, placeholder)

        return self._run_chunks("batch update", table, records, build)

    def batch_delete(self, table: str, ids: Iterable[Any], id_column: str = "id") -> int:
        """Delete rows whose ``id_column`` is in ``ids``.

        Returns the number of rows the store actually removed, which is
        lower than ``len(ids)`` when some ids do not exist.
        """
        validate_identifier(table, qualified=True)
        validate_identifier(id_column)
        ids = list(ids)
        placeholder = self._service.placeholder

        def build(chunk: list[Any]) -> list[Statement]:
            return [build_delete(table, id_column, chunk, placeholder)]

        return self._run_chunks("batch delete", table, ids, build, count_affected=True)

    def load_from_csv(self, file_path: str | Path, columns: Sequence[str]) -> list[dict[str, Any]]:
        records = load_from_csv(file_path, columns)
        self._logger.info("CSV load complete: %d rows from %s", len(records), file_path)
        return records

    def memory_usage(self) -> dict[str, Any]:
        return memory_usage()

    def table_stats(self, table: str) -> dict[str, int]:
        return self._service.table_stats(table)

    def _run_chunks(
        self,
        operation: str,
        table: str,
        items: list,
        build: Callable[[list], list[Statement]],
        count_affected: bool = False,
    ) -> int:
        """Run ``items`` chunk by chunk, one transaction per chunk.

        Statements are built before the chunk's transaction opens. Unless
        ``count_affected`` is set, a committed chunk counts as its length;
        otherwise it counts the affected rows the store reported.
        """
        total = 0
        chunk_count = -(-len(items) // self._batch_size)
        for index, chunk in enumerate(iter_chunks(items, self._batch_size), start=1):
            statements = build(chunk)
            try:
                with self._service.transaction():
                    affected = 0
                    for statement in statements:
                        affected += self._service.execute_write(statement.sql, statement.params)
            except Exception as e:
                self._logger.error(
                    "%s on %s failed at chunk %d/%d (%d rows committed before it): %s",
                    operation,
                    table,
                    index,
                    chunk_count,
                    total,
                    e,
                )
                raise
            processed = affected if count_affected else len(chunk)
            total += processed
            self._logger.info(
                "%s on %s: chunk %d/%d committed, %d rows (total: %d)",
                operation,
                table,
                index,
                chunk_count,
                processed,
                total,
            )

        self._logger.info("%s on %s complete: %d rows total", operation, table, total)
        return total
