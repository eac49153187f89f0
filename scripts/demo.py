"""Walk through every bulk operation against the sample tables.

Usage:
    python -m scripts.demo [--db-url sqlite:///storage/database.sqlite] [--users 10000]
"""

import argparse
import csv
import logging
import random
import sys
import tempfile
import uuid
from pathlib import Path

from bulkbatch import CURRENT_TIMESTAMP, BulkBatchError, BulkBatchProcessor
from bulkbatch.config import Settings
from bulkbatch.ingestion.schema import (
    EMPLOYEES_COLUMNS,
    EMPLOYEES_TABLE,
    USERS_COLUMNS,
    USERS_TABLE,
    sample_ddl,
)
from bulkbatch.logging_setup import setup_logging

logger = logging.getLogger(__name__)

DEPARTMENTS = ["engineering", "sales", "operations"]


def write_employee_csv(path: Path, count: int, tag: str) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["name", "email", "department"])
        for i in range(1, count + 1):
            writer.writerow(
                [f"employee_{i}", f"employee{i}.{tag}@company.com", random.choice(DEPARTMENTS)]
            )


def run_demo(processor: BulkBatchProcessor, user_count: int, employee_count: int) -> dict[str, int]:
    """Insert, update, CSV-load, inspect and delete; returns each step's row count."""
    service = processor.service
    service.execute_ddl(sample_ddl(service.placeholder))
    tag = uuid.uuid4().hex[:8]

    users = [
        {
            "name": f"user_{i}",
            "email": f"user{i}.{tag}@example.com",
            "age": random.randint(18, 80),
            "created_at": CURRENT_TIMESTAMP,
        }
        for i in range(1, user_count + 1)
    ]
    inserted = processor.bulk_insert(USERS_TABLE, users, USERS_COLUMNS)

    with service.transaction():
        id_rows = service.execute(
            f"SELECT id FROM {USERS_TABLE} WHERE email LIKE {service.placeholder} ORDER BY id",
            (f"%.{tag}@example.com",),
        )
    ids = [row["id"] for row in id_rows]

    updates = [
        {"id": user_id, "age": random.randint(20, 90), "updated_at": CURRENT_TIMESTAMP}
        for user_id in ids[: user_count // 10]
    ]
    updated = processor.batch_update(USERS_TABLE, updates, "id")

    with tempfile.TemporaryDirectory() as tmp:
        csv_path = Path(tmp) / "employees.csv"
        write_employee_csv(csv_path, employee_count, tag)
        employees = processor.load_from_csv(csv_path, EMPLOYEES_COLUMNS)
    loaded = processor.bulk_insert(EMPLOYEES_TABLE, employees, EMPLOYEES_COLUMNS)

    memory = processor.memory_usage()
    logger.info(
        "Memory: current %s, peak %s", memory["current_formatted"], memory["peak_formatted"]
    )
    stats = processor.table_stats(USERS_TABLE)
    logger.info(
        "%s: %d rows, %.2f MB data", USERS_TABLE, stats["total_rows"], stats["data_length"] / 1024 / 1024
    )

    deleted = processor.batch_delete(USERS_TABLE, ids[-100:], "id")

    return {"inserted": inserted, "updated": updated, "loaded": loaded, "deleted": deleted}


def main(argv: list[str] | None = None) -> None:
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Run the bulk batch demo")
    parser.add_argument("--db-url", default=settings.db_url, help="Database URL")
    parser.add_argument("--users", type=int, default=10000, help="Users to insert")
    parser.add_argument("--employees", type=int, default=5000, help="Employees to load via CSV")
    parser.add_argument("--batch-size", type=int, default=settings.batch_size)
    args = parser.parse_args(argv)

    log_path = setup_logging(settings.log_file, settings.log_level, file_enabled=settings.log_enabled)

    try:
        with BulkBatchProcessor.from_url(args.db_url, args.batch_size) as processor:
            counts = run_demo(processor, args.users, args.employees)
    except BulkBatchError as e:
        logger.error("Demo failed: %s", e)
        sys.exit(1)

    logger.info(
        "Demo complete: %(inserted)d inserted, %(updated)d updated, "
        "%(loaded)d loaded from CSV, %(deleted)d deleted",
        counts,
    )
    if log_path is not None:
        logger.info("Detailed log: %s", log_path)


if __name__ == "__main__":
    main()
