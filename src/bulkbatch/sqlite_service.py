"""SQLite implementation of DatabaseService."""

import sqlite3
from pathlib import Path

from bulkbatch.errors import DatabaseConnectionError, StorageError
from bulkbatch.identifiers import validate_identifier
from bulkbatch.service import DatabaseService
from bulkbatch.types import Params, Row


class SQLiteDatabaseService(DatabaseService):
    """SQLite backend using stdlib sqlite3.

    The connection runs in autocommit mode so transactions are opened with
    an explicit BEGIN rather than sqlite3's implicit one.
    """

    placeholder = "?"

    def __init__(self, db_path: str):
        super().__init__()
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> None:
        try:
            if self._db_path != ":memory:":
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self._db_path, isolation_level=None)
            conn.execute("PRAGMA foreign_keys=ON")
        except (sqlite3.Error, OSError) as e:
            raise DatabaseConnectionError(
                f"Could not open SQLite database {self._db_path!r}: {e}"
            ) from e
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._conn

    def begin(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute("BEGIN")
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def commit(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute("COMMIT")
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def rollback(self) -> None:
        conn = self._get_conn()
        if not conn.in_transaction:
            return
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        self._require_transaction()
        conn = self._get_conn()
        try:
            cursor = conn.execute(sql, params or ())
            if cursor.description is None:
                return []
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def execute_write(self, sql: str, params: Params | None = None) -> int:
        self._require_transaction()
        conn = self._get_conn()
        try:
            return conn.execute(sql, params or ()).rowcount
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def execute_ddl(self, sql: str) -> None:
        conn = self._get_conn()
        try:
            conn.executescript(sql)
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def table_stats(self, table: str) -> dict[str, int]:
        validate_identifier(table, qualified=True)
        with self.transaction():
            total_rows = self.execute(f"SELECT COUNT(*) AS total_rows FROM {table}")[0]["total_rows"]
            page_size = self.execute("PRAGMA page_size")[0]["page_size"]
            page_count = self.execute("PRAGMA page_count")[0]["page_count"]
            freelist = self.execute("PRAGMA freelist_count")[0]["freelist_count"]
        return {
            "total_rows": total_rows,
            "data_length": page_count * page_size,
            "index_length": 0,
            "data_free": freelist * page_size,
        }
