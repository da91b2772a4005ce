"""
DDL rendering for SQLite.

Identifiers and type text travel through separate functions: identifiers are
always quoted, type text is passed through untouched.
"""

from typing import Mapping


def quote_identifier(identifier: str) -> str:
    """Wrap an identifier in double quotes, doubling any embedded double quote."""
    return '"' + identifier.replace('"', '""') + '"'


def render_column_definition(column_name: str, column_type: str) -> str:
    """Render `"name" <type>`. The type text is not validated or normalized."""
    if not column_type:
        return quote_identifier(column_name)
    return f"{quote_identifier(column_name)} {column_type}"


def render_create_table(table_name: str, columns: Mapping[str, str]) -> str:
    """
    Render a CREATE TABLE statement.
    
    Args:
        table_name: Name of the new table
        columns: Column name -> raw type/constraint text, in declaration order
        
    Returns:
        The statement text
        
    Raises:
        ValueError: If no columns are given
    """
    if not columns:
        raise ValueError(f"Cannot render CREATE TABLE for '{table_name}' without columns")
    
    column_defs = ", ".join(
        render_column_definition(name, column_type) for name, column_type in columns.items()
    )
    return f"CREATE TABLE {quote_identifier(table_name)} ({column_defs})"


def render_add_column(table_name: str, column_name: str, column_type: str) -> str:
    """Render an ALTER TABLE ... ADD COLUMN statement."""
    return (
        f"ALTER TABLE {quote_identifier(table_name)} "
        f"ADD COLUMN {render_column_definition(column_name, column_type)}"
    )
