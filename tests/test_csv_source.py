"""Tests for the CSV row source."""

import csv
from pathlib import Path

import pytest

from bulkbatch.ingestion import load_from_csv, read_records


def _write_csv(path: Path, rows: list[list[str]]) -> Path:
    csv_file = path / "test.csv"
    with open(csv_file, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["name", "price", "category"])
        writer.writerows(rows)
    return csv_file


class TestReadRecords:
    def test_maps_columns_by_position(self, tmp_path):
        csv_file = _write_csv(tmp_path, [["widget", "100", "tools"], ["book", "25", "books"]])
        records = list(read_records(csv_file, ["name", "price", "category"]))
        assert records == [
            {"name": "widget", "price": "100", "category": "tools"},
            {"name": "book", "price": "25", "category": "books"},
        ]

    def test_short_rows_fill_none_and_extra_cells_dropped(self, tmp_path):
        csv_file = _write_csv(tmp_path, [["widget"], ["book", "25", "books", "surplus"]])
        records = list(read_records(csv_file, ["name", "price", "category"]))
        assert records[0] == {"name": "widget", "price": None, "category": None}
        assert records[1] == {"name": "book", "price": "25", "category": "books"}

    def test_blank_lines_skipped(self, tmp_path):
        csv_file = _write_csv(tmp_path, [["a", "1", "x"], [], ["", "", ""], ["b", "2", "y"]])
        assert len(list(read_records(csv_file, ["name", "price", "category"]))) == 2

    def test_is_lazy(self, tmp_path):
        csv_file = _write_csv(tmp_path, [["a", "1", "x"], ["b", "2", "y"]])
        records = read_records(csv_file, ["name"])
        assert next(records) == {"name": "a"}


class TestLoadFromCsv:
    def test_load_100_rows(self, tmp_path):
        csv_file = _write_csv(tmp_path, [[f"item{i}", str(i), "misc"] for i in range(1, 101)])
        data = load_from_csv(csv_file, ["name", "price", "category"])
        assert len(data) == 100
        assert data[0]["name"] == "item1"

    def test_header_only(self, tmp_path):
        assert load_from_csv(_write_csv(tmp_path, []), ["name"]) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="CSV file not found"):
            load_from_csv(tmp_path / "nope.csv", ["name"])
