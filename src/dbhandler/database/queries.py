"""Basic query execution helpers.

These wrap low-level sqlite3 operations with logging and typed return
shapes used by the handler.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Sequence
from typing import Any

from .cursor import QueryData

logger = logging.getLogger(__name__)

Params = Sequence[Any] | dict[str, Any] | None


def execute_query(
    conn: sqlite3.Connection,
    sql: str,
    params: Params = None,
) -> sqlite3.Cursor:
    """Execute a SQL statement and return the cursor.

    Args:
        conn: Database connection.
        sql: SQL statement string.
        params: Statement parameters (sequence or dict). Defaults to empty tuple.

    Returns:
        SQLite cursor with statement results.

    Raises:
        sqlite3.Error: If execution fails.

    Logs:
        - DEBUG: "Executed query: {sql[:80]}" on success.
        - ERROR: "Query execution failed: {exc}" with exception details on failure.
    """
    try:
        cursor = conn.execute(sql, tuple(params) if isinstance(params, Sequence) else params or ())
        logger.debug("Executed query: %s", sql[:80])
        return cursor
    except sqlite3.Error as exc:
        logger.exception("Query execution failed: %s", exc)
        raise


def fetch_query_data(
    conn: sqlite3.Connection,
    sql: str,
    params: Params = None,
) -> QueryData:
    """Execute a query and materialize every result row.

    Returns:
        QueryData holding all rows; empty if nothing matched.

    Raises:
        sqlite3.Error: If query execution fails.
    """
    cursor = execute_query(conn, sql, params)
    try:
        return QueryData.from_cursor(cursor)
    finally:
        cursor.close()


def execute_update(
    conn: sqlite3.Connection,
    sql: str,
    params: Params = None,
) -> int:
    """Execute INSERT/UPDATE/DELETE/DDL and return number of affected rows.

    Returns:
        Number of rows affected (-1 for DDL, as reported by sqlite3).

    Logs:
        - DEBUG: "Update affected {rowcount} rows" on success.
    """
    cursor = execute_query(conn, sql, params)
    rowcount = cursor.rowcount
    logger.debug("Update affected %s rows", rowcount)
    return rowcount


def execute_insert(
    conn: sqlite3.Connection,
    sql: str,
    params: Params = None,
) -> int:
    """Execute a single-row INSERT and return the new row's rowid."""
    cursor = execute_query(conn, sql, params)
    rowid = cursor.lastrowid
    logger.debug("Inserted row with rowid %s", rowid)
    return int(rowid) if rowid is not None else 0
