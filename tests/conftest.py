from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from schema_explorer.config import DatabaseConfig
from schema_explorer.database import DatabaseConnection


SEED_STATEMENTS = [
    """
    CREATE TABLE Customers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email TEXT NOT NULL UNIQUE,
        name TEXT,
        status TEXT NOT NULL DEFAULT 'active'
    )
    """,
    """
    CREATE TABLE Orders (
        id INTEGER PRIMARY KEY,
        customer_id INTEGER NOT NULL REFERENCES Customers(id) ON DELETE CASCADE,
        total REAL DEFAULT 0,
        note
    )
    """,
    "CREATE INDEX idx_orders_customer ON Orders(customer_id)",
    "CREATE INDEX idx_orders_big ON Orders(total) WHERE total > 100",
    """
    CREATE TABLE OrderItems (
        order_id INTEGER NOT NULL,
        product_code TEXT NOT NULL,
        qty INTEGER,
        PRIMARY KEY (product_code, order_id),
        FOREIGN KEY (order_id) REFERENCES Orders(id)
    )
    """,
    "CREATE TABLE Employees (id INTEGER PRIMARY KEY, manager_id INTEGER REFERENCES Employees(id))",
    "CREATE TABLE AuditLog (entry TEXT)",
    """
    CREATE TRIGGER trg_orders_audit AFTER INSERT ON Orders
    BEGIN
        INSERT INTO AuditLog(entry) VALUES ('order');
    END
    """,
    """
    CREATE VIEW customer_totals AS
    SELECT c.id, SUM(o.total) AS total
    FROM Customers c JOIN Orders o ON o.customer_id = c.id
    GROUP BY c.id
    """,
    "CREATE VIEW active_customers AS SELECT * FROM Customers WHERE status = 'active'",
]


def _run_sql(db_path: Path, *statements: str) -> None:
    engine = create_engine(f"sqlite:///{db_path}", poolclass=NullPool)
    try:
        with engine.begin() as conn:
            for statement in statements:
                conn.exec_driver_sql(statement)
    finally:
        engine.dispose()


def _master_names(db_path: Path) -> list:
    engine = create_engine(f"sqlite:///{db_path}", poolclass=NullPool)
    try:
        with engine.connect() as conn:
            return [row[0] for row in conn.exec_driver_sql("SELECT name FROM sqlite_master")]
    finally:
        engine.dispose()


@pytest.fixture
def empty_db_path(tmp_path: Path) -> Path:
    return tmp_path / "empty.db"


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "library.db"
    _run_sql(path, *SEED_STATEMENTS)
    return path


@pytest.fixture
def db(db_path: Path) -> DatabaseConnection:
    connection = DatabaseConnection(DatabaseConfig(sqlite_path=str(db_path), busy_timeout=1.0, echo=False))
    yield connection
    connection.close()


@pytest.fixture
def empty_db(empty_db_path: Path) -> DatabaseConnection:
    connection = DatabaseConnection(DatabaseConfig(sqlite_path=str(empty_db_path), busy_timeout=1.0, echo=False))
    yield connection
    connection.close()


@pytest.fixture
def run_sql(db_path: Path):
    """Run raw statements against the seeded database, outside the code under test."""
    return lambda *statements: _run_sql(db_path, *statements)


@pytest.fixture
def master_names(db_path: Path):
    """Every object name in sqlite_master, reserved ones included."""
    return lambda: _master_names(db_path)
