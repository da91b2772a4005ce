"""
Schema Introspection Module - SQLite.

Rebuilds the logical structure of the database on every call:
- All user tables with columns, primary keys, foreign keys, indexes and triggers
- Foreign key edges flattened into a table-to-table relation list
- View definitions

Nothing is cached between calls; re-read to observe a change.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .catalog import (
    CatalogReader,
    ColumnInfo,
    ForeignKeyInfo,
    IndexInfo,
    TriggerInfo,
    ViewInfo
)
from .connection import DatabaseConnection, get_db

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableInfo:
    """Complete information about a database table."""
    name: str
    kind: str = "table"
    columns: List[ColumnInfo] = field(default_factory=list)
    foreign_keys: List[ForeignKeyInfo] = field(default_factory=list)
    indexes: List[IndexInfo] = field(default_factory=list)
    triggers: List[TriggerInfo] = field(default_factory=list)
    
    @property
    def primary_keys(self) -> List[str]:
        """Primary key column names in key order, derived from the columns."""
        key_columns = sorted(
            (col for col in self.columns if col.is_primary_key),
            key=lambda col: col.pk_ordinal
        )
        return [col.name for col in key_columns]
    
    @property
    def column_names(self) -> List[str]:
        """Get list of all column names."""
        return [col.name for col in self.columns]
    
    def get_column(self, name: str) -> Optional[ColumnInfo]:
        """Get column info by name."""
        for col in self.columns:
            if col.name.lower() == name.lower():
                return col
        return None


@dataclass(frozen=True)
class TableLookup:
    """Result of looking up one table: either found with its model, or not found."""
    name: str
    table: Optional[TableInfo] = None
    
    @property
    def found(self) -> bool:
        return self.table is not None


@dataclass(frozen=True)
class RelationInfo:
    """One foreign key edge between two tables."""
    from_table: str
    from_column: str
    to_table: str
    to_column: Optional[str]
    on_update: str
    on_delete: str


def _load_table(reader: CatalogReader, table_name: str, kind: str) -> TableInfo:
    """
    Assemble the full model of one table from independent catalog lookups.
    
    Order: columns, foreign keys, indexes (with their columns), triggers.
    """
    columns = reader.get_columns(table_name)
    foreign_keys = reader.get_foreign_keys(table_name)
    indexes = reader.get_indexes(table_name)
    triggers = reader.get_triggers(table_name)
    
    logger.debug(
        f"Loaded {table_name}: {len(columns)} columns, {len(foreign_keys)} foreign keys, "
        f"{len(indexes)} indexes, {len(triggers)} triggers"
    )
    
    return TableInfo(
        name=table_name,
        kind=kind,
        columns=columns,
        foreign_keys=foreign_keys,
        indexes=indexes,
        triggers=triggers
    )


class SchemaIntrospector:
    """
    Dynamically introspects the SQLite schema.
    
    Each public method opens its own connection, reads the catalog and
    closes the connection before returning.
    """
    
    def __init__(self, db: Optional[DatabaseConnection] = None):
        """
        Initialize the introspector.
        
        Args:
            db: Connection manager. Uses the global connection if not provided.
        """
        self.db = db or get_db()
    
    def list_tables(self) -> List[TableInfo]:
        """
        Get every user table with full detail, ordered by name.
        
        Returns:
            List of TableInfo objects
        """
        with self.db.connect() as conn:
            reader = CatalogReader(conn)
            tables = [
                _load_table(reader, name, kind)
                for name, kind in reader.list_tables()
            ]
        
        logger.info(f"Schema introspection complete. Found {len(tables)} tables.")
        return tables
    
    def get_table(self, table_name: str) -> TableLookup:
        """
        Get complete information about a specific table.
        
        Args:
            table_name: Exact name of the table
            
        Returns:
            TableLookup; check .found before using .table
        """
        with self.db.connect() as conn:
            reader = CatalogReader(conn)
            identity = reader.find_table(table_name)
            if identity is None:
                return TableLookup(name=table_name)
            
            name, kind = identity
            return TableLookup(name=table_name, table=_load_table(reader, name, kind))
    
    def list_table_names(self) -> List[str]:
        """Get the names of every user table, ordered by name."""
        with self.db.connect() as conn:
            return CatalogReader(conn).list_table_names()
    
    def list_relations(self) -> List[RelationInfo]:
        """
        Get every foreign key edge in the database.
        
        Tables are visited in name order and each table's keys in catalog
        order. Self references are kept; nothing is deduplicated.
        """
        relations = []
        
        with self.db.connect() as conn:
            reader = CatalogReader(conn)
            for table_name in reader.list_table_names():
                for fk in reader.get_foreign_keys(table_name):
                    relations.append(RelationInfo(
                        from_table=table_name,
                        from_column=fk.column,
                        to_table=fk.referenced_table,
                        to_column=fk.referenced_column,
                        on_update=fk.on_update,
                        on_delete=fk.on_delete
                    ))
        
        logger.info(f"Found {len(relations)} foreign key relations")
        return relations
    
    def list_views(self) -> List[ViewInfo]:
        """Get every user view with its SQL definition, ordered by name."""
        with self.db.connect() as conn:
            return CatalogReader(conn).list_views()
