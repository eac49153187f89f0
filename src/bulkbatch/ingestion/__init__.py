"""CSV row source and sample table schema."""

from bulkbatch.ingestion.csv_source import load_from_csv, read_records

__all__ = ["load_from_csv", "read_records"]
