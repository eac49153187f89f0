"""CLI entry point for CSV bulk loading.

Usage:
    python -m scripts.ingest_csv --table employees --file data.csv --columns name email department \
        [--db-url sqlite:///data.db] [--batch-size 1000]
"""

import argparse
import logging
import sys

from bulkbatch import BulkBatchError, BulkBatchProcessor
from bulkbatch.config import Settings
from bulkbatch.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Bulk-insert a CSV file into a table")
    parser.add_argument("--db-url", default=settings.db_url, help="Database URL")
    parser.add_argument("--table", required=True, help="Target table")
    parser.add_argument("--file", required=True, help="Path to CSV file (header row is skipped)")
    parser.add_argument(
        "--columns", nargs="+", required=True, help="Column names, in CSV column order"
    )
    parser.add_argument(
        "--batch-size", type=int, default=settings.batch_size, help="Rows per transaction chunk"
    )
    parser.add_argument("--log-file", default=settings.log_file, help="Log file path")
    args = parser.parse_args(argv)

    setup_logging(args.log_file, settings.log_level, file_enabled=settings.log_enabled)

    try:
        with BulkBatchProcessor.from_url(args.db_url, args.batch_size) as processor:
            records = processor.load_from_csv(args.file, args.columns)
            total = processor.bulk_insert(args.table, records, args.columns)
    except (BulkBatchError, FileNotFoundError) as e:
        logger.error("Ingestion failed: %s", e)
        sys.exit(1)
    logger.info("Done. %d rows ingested.", total)


if __name__ == "__main__":
    main()
