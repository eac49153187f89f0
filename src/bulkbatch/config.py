"""Environment-driven settings and connection-URL construction."""

import os
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import quote

DEFAULT_SQLITE_PATH = "storage/database.sqlite"
SUPPORTED_DRIVERS = ("sqlite", "postgresql")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def build_db_url(
    driver: str = "sqlite",
    *,
    database: str | None = None,
    host: str = "localhost",
    port: int | str = 5432,
    user: str | None = None,
    password: str | None = None,
) -> str:
    """Build a database URL understood by ``bulkbatch.create_service``.

    For sqlite, ``database`` is a file path (or ``:memory:``). For
    postgresql, user and password are percent-quoted.
    """
    if driver == "sqlite":
        return f"sqlite:///{database or DEFAULT_SQLITE_PATH}"
    if driver == "postgresql":
        auth = ""
        if user:
            auth = quote(user, safe="")
            if password:
                auth += ":" + quote(password, safe="")
            auth += "@"
        return f"postgresql://{auth}{host}:{port}/{database or 'bulk_batch_db'}"
    raise ValueError(f"Unsupported DB_DRIVER {driver!r}; expected one of {SUPPORTED_DRIVERS}")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    db_url: str
    batch_size: int = 1000
    max_batch_size: int = 5000
    log_file: str | None = None
    log_level: str = "INFO"
    log_enabled: bool = True

    def __post_init__(self) -> None:
        if self.max_batch_size <= 0:
            raise ValueError(f"MAX_BATCH_SIZE must be positive, got {self.max_batch_size}")
        if not 0 < self.batch_size <= self.max_batch_size:
            raise ValueError(
                f"BATCH_SIZE must be between 1 and {self.max_batch_size}, got {self.batch_size}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Read settings from environment variables.

        ``DATABASE_URL`` wins when set; otherwise the URL is built from
        ``DB_DRIVER`` and the ``DB_*`` / ``SQLITE_DB_PATH`` variables.
        """
        env = os.environ if environ is None else environ

        db_url = env.get("DATABASE_URL")
        if not db_url:
            driver = env.get("DB_DRIVER", "sqlite")
            if driver == "sqlite":
                db_url = build_db_url("sqlite", database=env.get("SQLITE_DB_PATH"))
            else:
                db_url = build_db_url(
                    driver,
                    database=env.get("DB_NAME"),
                    host=env.get("DB_HOST", "localhost"),
                    port=_parse_int("DB_PORT", env.get("DB_PORT", "5432")),
                    user=env.get("DB_USER"),
                    password=env.get("DB_PASS"),
                )

        return cls(
            db_url=db_url,
            batch_size=_parse_int("BATCH_SIZE", env.get("BATCH_SIZE", "1000")),
            max_batch_size=_parse_int("MAX_BATCH_SIZE", env.get("MAX_BATCH_SIZE", "5000")),
            log_file=env.get("LOG_FILE") or None,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            log_enabled=_parse_bool("LOG_ENABLED", env.get("LOG_ENABLED", "true")),
        )
