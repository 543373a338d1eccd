"""Public interface for the database package.

This module exposes the main primitives needed by the rest of the
project: the subclassable handler, the result cursor, the statement
builders and the exception types.
"""

from .builder import (
    Statement,
    build_clear_table,
    build_create_table,
    build_create_table_from_lists,
    build_delete,
    build_drop_table,
    build_insert,
    build_update,
    render_literal,
)
from .connection import get_connection, open_connection, parse_db_url
from .cursor import QueryData, Row
from .errors import (
    BadURLError,
    ColumnError,
    DatabaseError,
    EmptyResultError,
    IntegrityError,
)
from .handler import DatabaseHandler

__all__ = [
    "DatabaseHandler",
    "QueryData",
    "Row",
    "Statement",
    "build_create_table",
    "build_create_table_from_lists",
    "build_drop_table",
    "build_clear_table",
    "build_insert",
    "build_update",
    "build_delete",
    "render_literal",
    "get_connection",
    "open_connection",
    "parse_db_url",
    "DatabaseError",
    "IntegrityError",
    "BadURLError",
    "ColumnError",
    "EmptyResultError",
]
