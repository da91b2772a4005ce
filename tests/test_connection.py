from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import NullPool

from schema_explorer.config import DatabaseConfig
from schema_explorer.database import (
    DatabaseConfigurationError,
    DatabaseConnection,
    SchemaEditor,
    SchemaIntrospector,
)


@pytest.fixture
def unconfigured():
    return DatabaseConnection(DatabaseConfig(sqlite_path=None))


@pytest.fixture
def unreachable(tmp_path):
    return DatabaseConnection(DatabaseConfig(sqlite_path=str(tmp_path / "no_such_dir" / "app.db")))


def test_engine_does_not_pool_connections(db):
    assert isinstance(db.engine.pool, NullPool)


def test_connect_closes_connection_on_exit(db):
    with db.connect() as conn:
        assert conn.execute(text("SELECT 1")).scalar() == 1

    assert conn.closed


def test_begin_closes_connection_after_failure(db):
    with pytest.raises(OperationalError, match="already exists"):
        with db.begin() as conn:
            conn.exec_driver_sql("CREATE TABLE Customers (id INTEGER)")

    assert conn.closed


def test_missing_path_is_a_configuration_error(unconfigured):
    with pytest.raises(DatabaseConfigurationError, match="not configured"):
        with unconfigured.connect():
            pass


def test_unreachable_file_is_a_configuration_error(unreachable):
    with pytest.raises(DatabaseConfigurationError, match="Cannot open database"):
        with unreachable.connect():
            pass


def test_configuration_errors_propagate_from_reads(unconfigured):
    with pytest.raises(DatabaseConfigurationError):
        SchemaIntrospector(unconfigured).list_tables()

    with pytest.raises(DatabaseConfigurationError):
        SchemaIntrospector(unconfigured).get_table("Customers")


def test_configuration_errors_propagate_from_writes(unreachable):
    with pytest.raises(DatabaseConfigurationError):
        SchemaEditor(unreachable).add_column("Users", "Bio", "TEXT")


def test_empty_column_request_needs_no_database(unconfigured):
    result = SchemaEditor(unconfigured).create_table("X", {})

    assert not result.success


def test_test_connection_success(db):
    ok, message = db.test_connection()

    assert ok
    assert message == "SQLITE connection successful"


def test_test_connection_reports_configuration_failure(unconfigured):
    ok, message = unconfigured.test_connection()

    assert not ok
    assert message.startswith("Connection failed:")


def test_close_disposes_engine(db):
    engine = db.engine
    db.close()

    assert db._engine is None
    assert db.engine is not engine


def test_non_numeric_timeout_is_a_configuration_error(db_path):
    db = DatabaseConnection(DatabaseConfig(sqlite_path=str(db_path), busy_timeout=None))

    with pytest.raises(DatabaseConfigurationError, match="SQLITE_BUSY_TIMEOUT"):
        with db.connect():
            pass


def test_concurrent_first_use_builds_one_engine(db):
    with ThreadPoolExecutor(max_workers=8) as pool:
        engines = list(pool.map(lambda _: db.engine, range(32)))

    assert all(engine is engines[0] for engine in engines)
