"""Root logger configuration for the command-line scripts."""

import logging
import sys
from datetime import date
from pathlib import Path

from bulkbatch.stats import current_rss, format_bytes

LOG_FORMAT = "%(asctime)s [%(levelname)s] [Memory: %(memory)s] %(name)s: %(message)s"


class MemoryFilter(logging.Filter):
    """Stamp each record with the process's resident memory as ``%(memory)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.memory = format_bytes(current_rss())
        return True


def default_log_file(log_dir: str | Path = ".") -> Path:
    """``batch_processing_YYYY-MM-DD.log`` for today, inside ``log_dir``."""
    return Path(log_dir) / f"batch_processing_{date.today():%Y-%m-%d}.log"


def setup_logging(
    log_file: str | Path | None = None,
    level: str = "INFO",
    log_dir: str | Path = ".",
    file_enabled: bool = True,
) -> Path | None:
    """Log to stdout and, unless disabled, append to a log file.

    Returns the log file path in use, or None when file logging is off.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    path = None
    if file_enabled:
        path = Path(log_file) if log_file else default_log_file(log_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, mode="a", encoding="utf-8"))

    memory_filter = MemoryFilter()
    for handler in handlers:
        handler.addFilter(memory_filter)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    return path
