"""Shared test fixtures."""

import logging

import pytest

from bulkbatch import BulkBatchProcessor, create_service
from bulkbatch.sqlite_service import SQLiteDatabaseService

TEST_USERS_DDL = """
CREATE TABLE test_users (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL,
    email       TEXT UNIQUE NOT NULL,
    age         INTEGER,
    created_at  TEXT
);
"""


class RecordingSQLiteService(SQLiteDatabaseService):
    """SQLite service that counts transaction boundaries."""

    def __init__(self, db_path: str):
        super().__init__(db_path)
        self.begins = 0
        self.commits = 0
        self.rollbacks = 0

    def begin(self) -> None:
        self.begins += 1
        super().begin()

    def commit(self) -> None:
        super().commit()
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1
        super().rollback()


def make_users(count: int, start: int = 1) -> list[dict]:
    return [
        {
            "name": f"user{i}",
            "email": f"user{i}@test.com",
            "age": 20 + (i % 50),
            "created_at": "2024-01-01 00:00:00",
        }
        for i in range(start, start + count)
    ]


def count_rows(service, table: str = "test_users") -> int:
    with service.transaction():
        return service.execute(f"SELECT COUNT(*) AS cnt FROM {table}")[0]["cnt"]


@pytest.fixture
def db_service(tmp_path):
    """Provide a fresh SQLite DatabaseService for each test."""
    db_path = tmp_path / "test.db"
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    yield service
    service.close()


@pytest.fixture
def recording_service(tmp_path):
    """SQLite service with the test_users table, counting transactions."""
    service = RecordingSQLiteService(str(tmp_path / "recording.db"))
    service.connect()
    service.execute_ddl(TEST_USERS_DDL)
    yield service
    service.close()


@pytest.fixture
def processor(recording_service):
    """Processor with batch size 100 over the recording service."""
    return BulkBatchProcessor(recording_service, batch_size=100)


@pytest.fixture
def restore_root_logging():
    """Undo handlers and level changes that setup_logging makes to the root logger."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
