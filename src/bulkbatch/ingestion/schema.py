"""Sample tables used by the demo and benchmark scripts."""

USERS_TABLE = "users"
USERS_COLUMNS = ["name", "email", "age", "created_at"]

EMPLOYEES_TABLE = "employees"
EMPLOYEES_COLUMNS = ["name", "email", "department"]

PRODUCTS_TABLE = "products"
PRODUCTS_COLUMNS = ["name", "price", "stock"]

SQLITE_SAMPLE_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL,
    email       TEXT UNIQUE NOT NULL,
    age         INTEGER,
    created_at  DATETIME,
    updated_at  DATETIME
);
CREATE INDEX IF NOT EXISTS idx_users_age ON users(age);

CREATE TABLE IF NOT EXISTS employees (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL,
    email       TEXT UNIQUE NOT NULL,
    department  TEXT,
    created_at  DATETIME DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_employees_department ON employees(department);

CREATE TABLE IF NOT EXISTS products (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL,
    price       REAL,
    stock       INTEGER,
    created_at  DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""

POSTGRES_SAMPLE_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id          SERIAL PRIMARY KEY,
    name        VARCHAR(100) NOT NULL,
    email       VARCHAR(255) UNIQUE NOT NULL,
    age         INTEGER,
    created_at  TIMESTAMP,
    updated_at  TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_users_age ON users(age);

CREATE TABLE IF NOT EXISTS employees (
    id          SERIAL PRIMARY KEY,
    name        VARCHAR(100) NOT NULL,
    email       VARCHAR(255) UNIQUE NOT NULL,
    department  VARCHAR(50),
    created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_employees_department ON employees(department);

CREATE TABLE IF NOT EXISTS products (
    id          SERIAL PRIMARY KEY,
    name        VARCHAR(100) NOT NULL,
    price       NUMERIC(12,2),
    stock       INTEGER,
    created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def sample_ddl(placeholder: str) -> str:
    """Pick the DDL dialect matching a service's placeholder style."""
    return POSTGRES_SAMPLE_DDL if placeholder == "%s" else SQLITE_SAMPLE_DDL
