"""
Database module for the SQLite Schema Explorer.

Provides:
- Per-operation connection management
- Catalog reading and schema introspection
- Guarded DDL (create table, add column)
"""

from .connection import DatabaseConnection, DatabaseConfigurationError, get_db, db_connection
from .catalog import (
    CatalogReader,
    ColumnInfo,
    ForeignKeyInfo,
    IndexInfo,
    IndexOrigin,
    TriggerInfo,
    ViewInfo
)
from .schema_introspector import (
    SchemaIntrospector,
    TableInfo,
    TableLookup,
    RelationInfo
)
from .schema_editor import SchemaEditor, MutationResult, MutationOutcome

__all__ = [
    "DatabaseConnection",
    "DatabaseConfigurationError",
    "get_db",
    "db_connection",
    "CatalogReader",
    "ColumnInfo",
    "ForeignKeyInfo",
    "IndexInfo",
    "IndexOrigin",
    "TriggerInfo",
    "ViewInfo",
    "SchemaIntrospector",
    "TableInfo",
    "TableLookup",
    "RelationInfo",
    "SchemaEditor",
    "MutationResult",
    "MutationOutcome"
]
