"""
Database Connection Module - SQLite.

This module provides:
- SQLAlchemy engine management for a SQLite database file
- One connection per operation (no pooling across calls)
- Configuration failure reporting
- Connection health checking
"""

import logging
import threading
from contextlib import contextmanager
from typing import Optional, Generator
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, Connection
from sqlalchemy.pool import NullPool
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from ..config import DatabaseConfig, config

logger = logging.getLogger(__name__)


class DatabaseConfigurationError(Exception):
    """Raised when no database is configured or the configured file cannot be opened."""
    pass


class DatabaseConnection:
    """
    Hands out short-lived connections to the configured SQLite database.
    
    Every call to connect() or begin() opens a fresh DBAPI connection and
    closes it on exit. Nothing is shared between callers.
    """
    
    def __init__(self, db_config: Optional[DatabaseConfig] = None):
        """
        Initialize database connection manager.
        
        Args:
            db_config: Database configuration. Uses global config if not provided.
        """
        self.config = db_config or config.database
        self._engine: Optional[Engine] = None
        self._engine_lock = threading.Lock()
    
    def _create_engine(self) -> Engine:
        """
        Create SQLAlchemy engine for the SQLite file.
        
        Returns:
            Configured SQLAlchemy Engine instance
        
        Raises:
            DatabaseConfigurationError: If no database path is configured or the
                busy timeout is not a number
        """
        if not self.config.is_configured():
            logger.error("Database path not configured")
            raise DatabaseConfigurationError(
                "Database path not configured. Set the DATABASE_PATH environment variable."
            )
        if self.config.busy_timeout is None:
            logger.error("SQLITE_BUSY_TIMEOUT is not a number")
            raise DatabaseConfigurationError("SQLITE_BUSY_TIMEOUT must be a number of seconds.")
        
        return create_engine(
            self.config.connection_string,
            poolclass=NullPool,
            connect_args={"timeout": self.config.busy_timeout},
            echo=self.config.echo
        )
    
    @property
    def engine(self) -> Engine:
        """Get or create the SQLAlchemy engine."""
        with self._engine_lock:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine
    
    def _open(self) -> Connection:
        try:
            return self.engine.connect()
        except OperationalError as e:
            logger.error(f"Cannot open database at {self.config.sqlite_path}: {e.orig}")
            raise DatabaseConfigurationError(
                f"Cannot open database at '{self.config.sqlite_path}': {e.orig}"
            ) from e
    
    @contextmanager
    def connect(self) -> Generator[Connection, None, None]:
        """
        Context manager for a read connection.
        
        Yields:
            SQLAlchemy Connection, closed when the block exits
            
        Example:
            with db.connect() as conn:
                rows = conn.execute(text("SELECT name FROM sqlite_master")).all()
        """
        conn = self._open()
        try:
            yield conn
        finally:
            conn.close()
    
    @contextmanager
    def begin(self) -> Generator[Connection, None, None]:
        """
        Context manager for a single write transaction.
        
        Commits when the block exits normally, rolls back and re-raises otherwise.
        """
        conn = self._open()
        try:
            with conn.begin():
                yield conn
        except SQLAlchemyError as e:
            logger.debug(f"Transaction rolled back: {e}")
            raise
        finally:
            conn.close()
    
    def test_connection(self) -> tuple[bool, str]:
        """
        Test database connectivity.
        
        Returns:
            tuple: (success: bool, message: str)
        """
        try:
            with self.connect() as conn:
                row = conn.execute(text("SELECT 1 AS health_check")).fetchone()
                if row and row[0] == 1:
                    return True, "SQLITE connection successful"
                return False, "Unexpected result from health check query"
        except DatabaseConfigurationError as e:
            return False, f"Connection failed: {e}"
        except SQLAlchemyError as e:
            logger.error(f"Unexpected error during connection test: {e}")
            return False, f"Unexpected error: {e}"
    
    def close(self):
        """Dispose of the engine."""
        with self._engine_lock:
            engine, self._engine = self._engine, None
        if engine:
            engine.dispose()
            logger.info("Database engine disposed")


# Create a global database connection instance
db_connection = DatabaseConnection()


def get_db() -> DatabaseConnection:
    """Get the global database connection instance."""
    return db_connection
