"""PostgreSQL implementation of DatabaseService."""

import psycopg2
import psycopg2.extras

from bulkbatch.errors import DatabaseConnectionError, StorageError
from bulkbatch.identifiers import validate_identifier
from bulkbatch.service import DatabaseService
from bulkbatch.types import Params, Row


class PostgresDatabaseService(DatabaseService):
    """PostgreSQL backend using psycopg2.

    psycopg2 opens a transaction implicitly on the first statement, so
    begin() only checks the connection is usable.
    """

    placeholder = "%s"

    def __init__(self, dsn: str):
        super().__init__()
        self._dsn = dsn
        self._conn = None

    def connect(self) -> None:
        try:
            conn = psycopg2.connect(self._dsn)
        except psycopg2.Error as e:
            raise DatabaseConnectionError(f"Could not connect to PostgreSQL: {e}") from e
        conn.autocommit = False
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _get_conn(self):
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._conn

    def begin(self) -> None:
        conn = self._get_conn()
        if conn.closed:
            raise StorageError("connection already closed")

    def commit(self) -> None:
        try:
            self._get_conn().commit()
        except psycopg2.Error as e:
            raise StorageError(str(e)) from e

    def rollback(self) -> None:
        try:
            self._get_conn().rollback()
        except psycopg2.Error as e:
            raise StorageError(str(e)) from e

    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        self._require_transaction()
        conn = self._get_conn()
        try:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(sql, params or ())
                if cur.description is None:
                    return []
                return [dict(row) for row in cur.fetchall()]
        except psycopg2.Error as e:
            raise StorageError(str(e)) from e

    def execute_write(self, sql: str, params: Params | None = None) -> int:
        self._require_transaction()
        conn = self._get_conn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params or ())
                return cur.rowcount
        except psycopg2.Error as e:
            raise StorageError(str(e)) from e

    def execute_ddl(self, sql: str) -> None:
        conn = self._get_conn()
        try:
            with conn.cursor() as cur:
                for statement in sql.split(";"):
                    statement = statement.strip()
                    if statement:
                        cur.execute(statement)
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e

    def table_stats(self, table: str) -> dict[str, int]:
        validate_identifier(table, qualified=True)
        with self.transaction():
            total_rows = self.execute(f"SELECT COUNT(*) AS total_rows FROM {table}")[0]["total_rows"]
            sizes = self.execute(
                "SELECT pg_relation_size(%s) AS data_length, pg_indexes_size(%s) AS index_length",
                (table, table),
            )[0]
        return {
            "total_rows": total_rows,
            "data_length": sizes["data_length"],
            "index_length": sizes["index_length"],
            "data_free": 0,
        }
