"""Read CSV files as column-name -> value records."""

import csv
import logging
from pathlib import Path
from typing import Any, Iterator, Sequence

logger = logging.getLogger(__name__)


def read_records(file_path: str | Path, columns: Sequence[str]) -> Iterator[dict[str, Any]]:
    """Yield one record per CSV data row, mapping ``columns`` by position.

    The header row is skipped. Short rows fill the trailing columns with
    None, extra cells are dropped, and blank lines are skipped. Values stay
    strings; the database does any type coercion.
    """
    with open(file_path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)  # header

        for row in reader:
            if not row or all(cell.strip() == "" for cell in row):
                continue
            yield {
                column: row[index] if index < len(row) else None
                for index, column in enumerate(columns)
            }


def load_from_csv(file_path: str | Path, columns: Sequence[str]) -> list[dict[str, Any]]:
    """Read the whole CSV file into memory."""
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"CSV file not found: {path}")

    records = list(read_records(path, columns))
    logger.debug("Read %d rows from %s", len(records), path)
    return records
