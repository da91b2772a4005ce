"""
SQLite Schema Explorer.

Reflects the structure of a SQLite database into dataclasses and applies
two guarded DDL operations (create table, add column).
"""

from .config import AppConfig, DatabaseConfig, config
from .database import (
    DatabaseConnection,
    DatabaseConfigurationError,
    get_db,
    ColumnInfo,
    ForeignKeyInfo,
    IndexInfo,
    IndexOrigin,
    TriggerInfo,
    ViewInfo,
    TableInfo,
    TableLookup,
    RelationInfo,
    MutationResult,
    MutationOutcome
)
from .explorer import SchemaExplorer, create_explorer, get_explorer

__all__ = [
    "AppConfig", "DatabaseConfig", "config",
    "DatabaseConnection", "DatabaseConfigurationError", "get_db",
    "ColumnInfo", "ForeignKeyInfo", "IndexInfo", "IndexOrigin",
    "TriggerInfo", "ViewInfo", "TableInfo", "TableLookup", "RelationInfo",
    "MutationResult", "MutationOutcome",
    "SchemaExplorer", "create_explorer", "get_explorer"
]
