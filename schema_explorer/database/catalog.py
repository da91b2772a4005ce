"""
Catalog Reader - SQLite metadata queries.

Each method answers one catalog concern and maps the raw rows into typed
records. Missing objects come back as empty lists or None, never as errors.

Object names cannot be bound as parameters inside PRAGMA statements, so they
are quoted with quote_identifier() and sent through exec_driver_sql(), which
leaves the text alone. Lookups against sqlite_master use bound parameters.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
from sqlalchemy import text
from sqlalchemy.engine import Connection

from ..sql.ddl import quote_identifier

logger = logging.getLogger(__name__)


class IndexOrigin(Enum):
    """How an index came to exist."""
    CREATE_INDEX = "c"          # explicit CREATE INDEX
    UNIQUE_CONSTRAINT = "u"     # UNIQUE column or table constraint
    PRIMARY_KEY = "pk"          # non-rowid PRIMARY KEY


@dataclass(frozen=True)
class ColumnInfo:
    """A single table column as reported by PRAGMA table_info."""
    name: str
    data_type: str
    is_nullable: bool
    ordinal: int
    pk_ordinal: int = 0
    default_value: Optional[str] = None
    
    @property
    def is_primary_key(self) -> bool:
        return self.pk_ordinal > 0


@dataclass(frozen=True)
class ForeignKeyInfo:
    """One column pair of a foreign key constraint."""
    table: str
    column: str
    referenced_table: str
    referenced_column: Optional[str]  # None when the parent's primary key is implied
    on_update: str
    on_delete: str
    id: int = 0
    seq: int = 0
    match: str = "NONE"


@dataclass(frozen=True)
class IndexInfo:
    """An index and the columns it covers."""
    name: str
    is_unique: bool
    origin: IndexOrigin
    is_partial: bool
    columns: List[Optional[str]] = field(default_factory=list)  # None marks an expression
    seq: int = 0


@dataclass(frozen=True)
class TriggerInfo:
    name: str
    table_name: str
    sql: str


@dataclass(frozen=True)
class ViewInfo:
    name: str
    sql: str


class CatalogReader:
    """
    Reads SQLite catalog metadata over an open connection.
    
    The reader owns no connection; the caller opens and closes it.
    """
    
    # The sqlite_ prefix is reserved for the engine (sqlite_sequence, sqlite_stat1, ...)
    _USER_OBJECTS = "name NOT LIKE 'sqlite\\_%' ESCAPE '\\'"
    
    def __init__(self, conn: Connection):
        self.conn = conn
    
    def _query(self, query: str, params: Optional[dict] = None) -> list:
        result = self.conn.execute(text(query), params or {})
        return result.mappings().all()
    
    def _pragma(self, pragma: str, name: str) -> list:
        result = self.conn.exec_driver_sql(f"PRAGMA {pragma}({quote_identifier(name)})")
        return result.mappings().all()
    
    def list_tables(self) -> List[Tuple[str, str]]:
        """Get (name, kind) for every user table, alphabetically."""
        query = f"""
            SELECT name, type
            FROM sqlite_master
            WHERE type = 'table'
            AND {self._USER_OBJECTS}
            ORDER BY name
        """
        return [(row["name"], row["type"]) for row in self._query(query)]
    
    def list_table_names(self) -> List[str]:
        """Get the names of every user table, alphabetically."""
        return [name for name, _ in self.list_tables()]
    
    def find_table(self, table_name: str) -> Optional[Tuple[str, str]]:
        """
        Look up a single table by exact name.
        
        Returns:
            (name, kind) or None if the table does not exist
        """
        query = """
            SELECT name, type
            FROM sqlite_master
            WHERE type = 'table' AND name = :table_name
        """
        rows = self._query(query, {"table_name": table_name})
        if not rows:
            logger.debug(f"Table {table_name!r} not found in catalog")
            return None
        return rows[0]["name"], rows[0]["type"]
    
    def get_columns(self, table_name: str) -> List[ColumnInfo]:
        """Get all columns for a table in declaration order."""
        return [
            ColumnInfo(
                name=row["name"],
                data_type=row["type"] or "",  # SQLite columns can have no type
                is_nullable=row["notnull"] == 0,
                ordinal=row["cid"],
                pk_ordinal=row["pk"],
                default_value=row["dflt_value"]
            )
            for row in self._pragma("table_info", table_name)
        ]
    
    def get_foreign_keys(self, table_name: str) -> List[ForeignKeyInfo]:
        """Get foreign key column pairs for a table in catalog order."""
        return [
            ForeignKeyInfo(
                table=table_name,
                column=row["from"],
                referenced_table=row["table"],
                referenced_column=row["to"],
                on_update=row["on_update"],
                on_delete=row["on_delete"],
                id=row["id"],
                seq=row["seq"],
                match=row["match"]
            )
            for row in self._pragma("foreign_key_list", table_name)
        ]
    
    def get_index_list(self, table_name: str) -> list:
        """Get raw PRAGMA index_list rows for a table."""
        return self._pragma("index_list", table_name)
    
    def get_index_columns(self, index_name: str) -> List[Optional[str]]:
        """Get the columns of an index ordered by their position in the key."""
        rows = sorted(self._pragma("index_info", index_name), key=lambda row: row["seqno"])
        return [row["name"] for row in rows]
    
    def get_indexes(self, table_name: str) -> List[IndexInfo]:
        """Get every index on a table, each with its column list."""
        return [
            IndexInfo(
                name=row["name"],
                is_unique=row["unique"] == 1,
                origin=IndexOrigin(row["origin"]),
                is_partial=row["partial"] == 1,
                columns=self.get_index_columns(row["name"]),
                seq=row["seq"]
            )
            for row in self.get_index_list(table_name)
        ]
    
    def get_triggers(self, table_name: str) -> List[TriggerInfo]:
        """Get triggers owned by a table."""
        query = """
            SELECT name, tbl_name, sql
            FROM sqlite_master
            WHERE type = 'trigger' AND tbl_name = :table_name COLLATE NOCASE
        """
        return [
            TriggerInfo(name=row["name"], table_name=row["tbl_name"], sql=row["sql"])
            for row in self._query(query, {"table_name": table_name})
        ]
    
    def list_views(self) -> List[ViewInfo]:
        """Get every user view with its definition, alphabetically."""
        query = f"""
            SELECT name, sql
            FROM sqlite_master
            WHERE type = 'view'
            AND {self._USER_OBJECTS}
            ORDER BY name
        """
        return [ViewInfo(name=row["name"], sql=row["sql"]) for row in self._query(query)]
