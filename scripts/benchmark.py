"""Row-by-row vs bulk insert comparison on the sample users table.

Usage:
    python -m scripts.benchmark [--db-url sqlite:///bench.db] [--rows 5000] [--batch-size 1000]
"""

import argparse
import logging
import random
import sys

from bulkbatch import CURRENT_TIMESTAMP, BulkBatchError, create_service
from bulkbatch.benchmark import compare_insert_strategies
from bulkbatch.config import Settings
from bulkbatch.ingestion.schema import USERS_COLUMNS, USERS_TABLE, sample_ddl
from bulkbatch.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def sample_users(count: int) -> list[dict]:
    return [
        {
            "name": f"bench_user_{i}",
            "email": f"bench{i}@example.com",
            "age": random.randint(18, 80),
            "created_at": CURRENT_TIMESTAMP,
        }
        for i in range(1, count + 1)
    ]


def main(argv: list[str] | None = None) -> None:
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Compare row-by-row and bulk inserts")
    parser.add_argument("--db-url", default=settings.db_url, help="Database URL")
    parser.add_argument("--rows", type=int, default=5000, help="Number of rows to insert")
    parser.add_argument("--batch-size", type=int, default=settings.batch_size)
    args = parser.parse_args(argv)

    setup_logging(settings.log_file, settings.log_level, file_enabled=settings.log_enabled)

    service = create_service(args.db_url)
    try:
        service.connect()
        service.execute_ddl(sample_ddl(service.placeholder))
        result = compare_insert_strategies(
            service, USERS_TABLE, sample_users(args.rows), USERS_COLUMNS, args.batch_size
        )
    except BulkBatchError as e:
        logger.error("Benchmark failed: %s", e)
        sys.exit(1)
    finally:
        service.close()

    logger.info(
        "%d rows: row-by-row %.3fs, bulk %.3fs, %.2fx faster (%.1f%% less time)",
        result["data_count"],
        result["normal_time"],
        result["bulk_time"],
        result["speedup"],
        result["efficiency"],
    )


if __name__ == "__main__":
    main()
