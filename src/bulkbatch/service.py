"""Abstract DatabaseService interface."""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from bulkbatch.types import Params, Row

logger = logging.getLogger(__name__)


class DatabaseService(ABC):
    """Database-agnostic connection provider used by the batch processor.

    Design principles:
    - One connection per service, opened by connect()
    - Explicit transaction boundaries: begin/commit/rollback
    - Not thread-safe: callers sharing a service must serialize externally
    """

    placeholder: str = "?"

    def __init__(self) -> None:
        self._in_transaction = False

    @abstractmethod
    def connect(self) -> None:
        """Open the connection. Raises DatabaseConnectionError on failure."""

    @abstractmethod
    def close(self) -> None:
        """Close the connection and release resources."""

    @abstractmethod
    def begin(self) -> None:
        """Open a transaction."""

    @abstractmethod
    def commit(self) -> None:
        """Commit the open transaction."""

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the open transaction."""

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        """Execute a single SQL statement and return rows as dicts."""

    @abstractmethod
    def execute_write(self, sql: str, params: Params | None = None) -> int:
        """Execute a single DML statement and return the affected-row count."""

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Execute DDL statements (CREATE TABLE, CREATE INDEX, etc.)."""

    @abstractmethod
    def table_stats(self, table: str) -> dict[str, int]:
        """Row count and storage sizes (bytes) for a table."""

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Context manager: begins a transaction, commits on success, rolls back on error."""
        if self._in_transaction:
            raise RuntimeError("A transaction is already open on this service.")
        self.begin()
        self._in_transaction = True
        try:
            yield
            self.commit()
        except Exception:
            try:
                self.rollback()
            except Exception:
                logger.exception("Rollback failed; re-raising the original error")
            raise
        finally:
            self._in_transaction = False

    def _require_transaction(self) -> None:
        if not self._in_transaction:
            raise RuntimeError(
                "No active transaction. Wrap calls in a `with service.transaction():` block."
            )

    def __enter__(self) -> "DatabaseService":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
