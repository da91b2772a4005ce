"""
Schema Editor - guarded DDL for SQLite.

Turns a create-table or add-column request into one quoted DDL statement,
runs it and reports the outcome as a MutationResult. Rejections from the
database are returned, not raised. A missing or unreachable database still
raises DatabaseConfigurationError.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from ..sql.ddl import render_add_column, render_create_table
from .connection import DatabaseConnection, get_db

logger = logging.getLogger(__name__)


class MutationOutcome(Enum):
    SUCCESS = "success"
    INVALID_REQUEST = "invalid_request"    # rejected before anything was sent
    BACKEND_FAILURE = "backend_failure"    # the database refused the statement


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a DDL request, with a one-sentence message for the caller."""
    outcome: MutationOutcome
    message: str
    statement: Optional[str] = None
    
    @property
    def success(self) -> bool:
        return self.outcome == MutationOutcome.SUCCESS
    
    def __str__(self) -> str:
        return self.message


def _is_encodable(statement: str) -> bool:
    """SQLite only accepts text that encodes to UTF-8; lone surrogates do not."""
    try:
        statement.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _backend_message(error: SQLAlchemyError) -> str:
    """Get the driver's own message, without SQLAlchemy's statement/background decoration."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)
    return str(error)


class SchemaEditor:
    """Executes create-table and add-column requests against the database."""
    
    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_db()
    
    def _execute(self, statement: str) -> None:
        logger.debug(f"Executing DDL: {statement}")
        with self.db.begin() as conn:
            conn.exec_driver_sql(statement)
    
    def create_table(self, table_name: str, columns: Mapping[str, str]) -> MutationResult:
        """
        Create a new table.
        
        Args:
            table_name: Name of the table to create
            columns: Column name -> SQLite type/constraint text, in declaration order.
                The type text is used as given.
                
        Returns:
            MutationResult naming the table and the outcome
        """
        if not columns:
            return MutationResult(
                MutationOutcome.INVALID_REQUEST,
                f"Cannot create table '{table_name}' with no columns."
            )
        
        statement = render_create_table(table_name, columns)
        if not _is_encodable(statement):
            logger.error(f"Rejected create table {table_name!r}: not valid UTF-8 text")
            return MutationResult(
                MutationOutcome.INVALID_REQUEST,
                f"Cannot create table '{table_name}': names and types must be valid UTF-8 text."
            )
        
        try:
            self._execute(statement)
        except SQLAlchemyError as e:
            message = _backend_message(e)
            logger.error(f"Error creating table {table_name!r}: {message}")
            return MutationResult(
                MutationOutcome.BACKEND_FAILURE,
                f"Error creating table '{table_name}': {message}",
                statement
            )
        
        logger.info(f"Created table {table_name!r} with {len(columns)} columns")
        return MutationResult(
            MutationOutcome.SUCCESS,
            f"Successfully created table '{table_name}'.",
            statement
        )
    
    def add_column(self, table_name: str, column_name: str, column_type: str) -> MutationResult:
        """
        Add a column to an existing table.
        
        The caller is expected to have settled on a valid SQLite type;
        column_type is not checked here.
        """
        statement = render_add_column(table_name, column_name, column_type)
        if not _is_encodable(statement):
            logger.error(f"Rejected add column {column_name!r} to {table_name!r}: not valid UTF-8 text")
            return MutationResult(
                MutationOutcome.INVALID_REQUEST,
                f"Cannot add column '{column_name}' to '{table_name}': names and types must be valid UTF-8 text."
            )
        
        try:
            self._execute(statement)
        except SQLAlchemyError as e:
            message = _backend_message(e)
            logger.error(f"Error adding column {column_name!r} to {table_name!r}: {message}")
            return MutationResult(
                MutationOutcome.BACKEND_FAILURE,
                f"Error adding column '{column_name}' to '{table_name}': {message}",
                statement
            )
        
        logger.info(f"Added column {column_name!r} to {table_name!r}")
        return MutationResult(
            MutationOutcome.SUCCESS,
            f"Added column '{column_name}' of type '{column_type}' to '{table_name}'.",
            statement
        )
