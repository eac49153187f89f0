"""Compare row-by-row inserts against chunked bulk inserts."""

import logging
import time
from typing import Any, Sequence

from bulkbatch.identifiers import validate_columns, validate_identifier
from bulkbatch.processor import BulkBatchProcessor
from bulkbatch.service import DatabaseService
from bulkbatch.types import Record

logger = logging.getLogger(__name__)


def _clear(service: DatabaseService, table: str) -> None:
    with service.transaction():
        service.execute_write(f"DELETE FROM {table}")


def insert_row_by_row(
    service: DatabaseService,
    table: str,
    records: Sequence[Record],
    columns: Sequence[str],
) -> int:
    """Insert with one single-row INSERT per record inside one transaction."""
    validate_identifier(table, qualified=True)
    columns = validate_columns(columns)
    placeholders = ", ".join(service.placeholder for _ in columns)
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"
    with service.transaction():
        for record in records:
            service.execute_write(sql, [record.get(column) for column in columns])
    return len(records)


def compare_insert_strategies(
    service: DatabaseService,
    table: str,
    records: Sequence[Record],
    columns: Sequence[str],
    batch_size: int = 1000,
) -> dict[str, Any]:
    """Time both strategies against an emptied ``table``.

    The table is cleared before each run and is left holding the bulk run's
    rows.
    """
    validate_identifier(table, qualified=True)
    columns = validate_columns(columns)

    _clear(service, table)
    start = time.perf_counter()
    insert_row_by_row(service, table, records, columns)
    normal_time = time.perf_counter() - start
    logger.info("Row-by-row insert: %d rows in %.3fs", len(records), normal_time)

    _clear(service, table)
    processor = BulkBatchProcessor(service, batch_size=batch_size)
    start = time.perf_counter()
    processor.bulk_insert(table, records, columns)
    bulk_time = time.perf_counter() - start
    logger.info("Bulk insert: %d rows in %.3fs", len(records), bulk_time)

    speedup = normal_time / bulk_time if bulk_time > 0 else float("inf")
    efficiency = (normal_time - bulk_time) / normal_time * 100 if normal_time > 0 else 0.0
    return {
        "normal_time": normal_time,
        "bulk_time": bulk_time,
        "speedup": speedup,
        "efficiency": efficiency,
        "data_count": len(records),
    }
