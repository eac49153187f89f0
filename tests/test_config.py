"""Tests for environment settings."""

import pytest

from bulkbatch.config import Settings, build_db_url


class TestBuildDbUrl:
    def test_sqlite_default_path(self):
        assert build_db_url() == "sqlite:///storage/database.sqlite"

    def test_sqlite_memory(self):
        assert build_db_url("sqlite", database=":memory:") == "sqlite:///:memory:"

    def test_postgres_quotes_credentials(self):
        url = build_db_url(
            "postgresql", database="bulk", host="db", port=5433, user="app", password="p@ss:word"
        )
        assert url == "postgresql://app:p%40ss%3Aword@db:5433/bulk"

    def test_postgres_without_credentials(self):
        assert build_db_url("postgresql") == "postgresql://localhost:5432/bulk_batch_db"

    def test_unsupported_driver(self):
        with pytest.raises(ValueError, match="Unsupported DB_DRIVER"):
            build_db_url("mysql")


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings == Settings(db_url="sqlite:///storage/database.sqlite")
        assert settings.batch_size == 1000
        assert settings.log_enabled is True

    def test_database_url_wins(self):
        settings = Settings.from_env({"DATABASE_URL": "sqlite:///x.db", "DB_DRIVER": "postgresql"})
        assert settings.db_url == "sqlite:///x.db"

    def test_postgres_from_parts(self):
        settings = Settings.from_env(
            {
                "DB_DRIVER": "postgresql",
                "DB_HOST": "pg",
                "DB_PORT": "6543",
                "DB_NAME": "batch",
                "DB_USER": "u",
                "DB_PASS": "p",
            }
        )
        assert settings.db_url == "postgresql://u:p@pg:6543/batch"

    def test_batch_and_logging_options(self):
        settings = Settings.from_env(
            {
                "BATCH_SIZE": "250",
                "MAX_BATCH_SIZE": "500",
                "LOG_LEVEL": "debug",
                "LOG_FILE": "/tmp/batch.log",
                "LOG_ENABLED": "false",
            }
        )
        assert settings.batch_size == 250
        assert settings.max_batch_size == 500
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "/tmp/batch.log"
        assert settings.log_enabled is False

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("BATCH_SIZE", "42")
        monkeypatch.delenv("DATABASE_URL", raising=False)
        assert Settings.from_env().batch_size == 42

    @pytest.mark.parametrize(
        "env",
        [
            {"BATCH_SIZE": "0"},
            {"BATCH_SIZE": "6000"},
            {"BATCH_SIZE": "ten"},
            {"MAX_BATCH_SIZE": "-1"},
            {"DB_DRIVER": "postgresql", "DB_PORT": "abc"},
            {"LOG_ENABLED": "maybe"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ValueError):
            Settings.from_env(env)

    def test_frozen(self):
        settings = Settings.from_env({})
        with pytest.raises(AttributeError):
            settings.batch_size = 5
