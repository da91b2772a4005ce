"""
Schema Explorer - the operations offered to a tool-dispatch layer.

Combines:
- Schema introspection (tables, single table, relations, views)
- Guarded DDL (create table, add column)
"""

import logging
from typing import List, Mapping, Optional

from .database import (
    DatabaseConnection,
    get_db,
    SchemaIntrospector,
    SchemaEditor,
    TableInfo,
    TableLookup,
    RelationInfo,
    ViewInfo,
    MutationResult
)

logger = logging.getLogger(__name__)


class SchemaExplorer:
    """Read and change the structure of one SQLite database."""
    
    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_db()
        self.introspector = SchemaIntrospector(self.db)
        self.editor = SchemaEditor(self.db)
    
    def list_tables(self) -> List[TableInfo]:
        return self.introspector.list_tables()
    
    def get_table(self, table_name: str) -> TableLookup:
        return self.introspector.get_table(table_name)
    
    def list_relations(self) -> List[RelationInfo]:
        return self.introspector.list_relations()
    
    def list_views(self) -> List[ViewInfo]:
        return self.introspector.list_views()
    
    def create_table(self, table_name: str, columns: Mapping[str, str]) -> MutationResult:
        return self.editor.create_table(table_name, columns)
    
    def add_column(self, table_name: str, column_name: str, column_type: str) -> MutationResult:
        return self.editor.add_column(table_name, column_name, column_type)


_explorer: Optional[SchemaExplorer] = None


def get_explorer() -> SchemaExplorer:
    """Get or create the global schema explorer."""
    global _explorer
    if _explorer is None:
        _explorer = SchemaExplorer()
    return _explorer


def create_explorer(db: Optional[DatabaseConnection] = None) -> SchemaExplorer:
    """Create a schema explorer bound to the given connection manager."""
    logger.info("Creating schema explorer")
    return SchemaExplorer(db)
