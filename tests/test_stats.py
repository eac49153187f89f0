"""Tests for memory reporting and log setup."""

import logging
import sys

import pytest

from bulkbatch.logging_setup import MemoryFilter, default_log_file, setup_logging
from bulkbatch.stats import format_bytes, memory_usage


class TestFormatBytes:
    @pytest.mark.parametrize(
        "num_bytes, expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1024 B"),
            (1536, "1.5 KB"),
            (5 * 1024 * 1024, "5 MB"),
            (3 * 1024**3, "3 GB"),
            (2048 * 1024**3, "2048 GB"),
        ],
    )
    def test_format(self, num_bytes, expected):
        assert format_bytes(num_bytes) == expected


class TestMemoryUsage:
    def test_keys_and_values(self):
        usage = memory_usage()
        assert set(usage) == {"current", "peak", "current_formatted", "peak_formatted"}
        assert usage["current"] > 0
        assert usage["peak"] >= usage["current"]
        assert usage["current_formatted"].split()[-1] in {"B", "KB", "MB", "GB"}

    def test_peak_never_decreases(self):
        first = memory_usage()["peak"]
        assert memory_usage()["peak"] >= first

    @pytest.mark.skipif(sys.platform == "win32", reason="ru_maxrss is POSIX-only")
    def test_peak_covers_process_high_water_mark(self):
        import resource

        max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        if sys.platform != "darwin":
            max_rss *= 1024
        assert memory_usage()["peak"] >= max_rss


class TestLoggingSetup:
    def test_memory_filter_stamps_record(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        assert MemoryFilter().filter(record) is True
        assert record.memory.endswith(("B", "KB", "MB", "GB"))

    def test_default_log_file_name(self, tmp_path):
        path = default_log_file(tmp_path)
        assert path.parent == tmp_path
        assert path.name.startswith("batch_processing_")
        assert path.suffix == ".log"

    def test_writes_to_log_file(self, tmp_path, restore_root_logging):
        log_file = tmp_path / "logs" / "batch.log"
        assert setup_logging(log_file, "INFO") == log_file

        logging.getLogger("bulkbatch.test").info("chunk committed")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "[INFO] [Memory: " in content
        assert "bulkbatch.test: chunk committed" in content

    def test_file_logging_disabled(self, tmp_path, restore_root_logging):
        assert setup_logging(level="DEBUG", log_dir=tmp_path, file_enabled=False) is None
        assert not list(tmp_path.iterdir())
        assert logging.getLogger().level == logging.DEBUG
