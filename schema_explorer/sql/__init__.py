"""SQL module exports."""

from .ddl import (
    quote_identifier,
    render_column_definition,
    render_create_table,
    render_add_column
)

__all__ = [
    "quote_identifier", "render_column_definition",
    "render_create_table", "render_add_column"
]
