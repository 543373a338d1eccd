"""Database connection helpers.

This module provides a small, synchronous API for resolving connection
strings and obtaining short-lived SQLite connections. Every statement the
handler runs gets its own connection, which is committed and closed as
soon as the statement finishes.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path

from .. import global_config as g
from .errors import BadURLError, DatabaseError

logger = logging.getLogger(__name__)

Connector = Callable[[Path], "sqlite3.Connection | None"]


def parse_db_url(url: str) -> Path:
    """Resolve a ``sqlite:<path>`` connection string to a database file path.

    Args:
        url: Connection string, e.g. ``"sqlite:data/school.db"``.

    Returns:
        Path to the database file (``~`` expanded, not resolved).

    Raises:
        BadURLError: If the scheme is missing, the path is empty, or the
            path names an in-memory database.
    """
    if not isinstance(url, str) or not url.startswith(g.URL_PREFIX):
        msg = f"Bad url argument, {url!r} doesn't start with: {g.URL_PREFIX}[path-here]"
        raise BadURLError(msg)

    raw_path = url[len(g.URL_PREFIX):].strip()
    if not raw_path:
        msg = f"Bad url argument, {url!r} names no database file"
        raise BadURLError(msg)
    if raw_path == ":memory:":
        msg = "In-memory databases are not supported: each statement uses a fresh connection"
        raise BadURLError(msg)

    return Path(raw_path).expanduser()


def _ensure_parent_dir(db_path: Path) -> None:
    """Ensure the parent directory for a database file exists.

    Args:
        db_path: Path to database file whose parent directory should exist.

    Raises:
        DatabaseError: If the directory cannot be created.

    Side Effects:
        - Creates parent directory if it doesn't exist (with parents=True).
    """
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Could not create directory for database {db_path}: {exc}"
        raise DatabaseError(msg) from exc


def _configure_connection(conn: sqlite3.Connection) -> None:
    """Apply standard pragmas and row factory to a new connection.

    Args:
        conn: SQLite connection to configure.

    Side Effects:
        - Modifies connection settings (row_factory, pragmas).
    """
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    # Default DELETE journal mode: a single writer, no -wal/-shm side files.


def get_connection(db_path: Path | str) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    Args:
        db_path: Path to SQLite database file.

    Returns:
        Configured SQLite connection ready for use.

    Logs:
        - DEBUG: "Opening SQLite database at {path}" when creating connection.

    Side Effects:
        - Creates parent directory if it doesn't exist.
        - Creates database file if it doesn't exist.
    """
    resolved = db_path if isinstance(db_path, Path) else Path(db_path)

    _ensure_parent_dir(resolved)
    logger.debug("Opening SQLite database at %s", resolved)
    conn = sqlite3.connect(str(resolved))
    _configure_connection(conn)
    return conn


@contextlib.contextmanager
def open_connection(
    db_path: Path,
    *,
    connect: Connector = get_connection,
) -> Iterator[sqlite3.Connection]:
    """Context manager scoping one connection to one statement.

    Commits on success, rolls back on error and always closes the
    connection.

    Args:
        db_path: Path to database file.
        connect: Callable opening the connection. Handlers pass their
            overridable ``get_connection`` hook here.

    Yields:
        SQLite connection ready for a single statement.

    Raises:
        DatabaseError: If ``connect`` returns None.

    Logs:
        - WARNING: "Statement rolled back due to error" on failure.
        - DEBUG: "Connection closed" when closing.
    """
    conn = connect(db_path)
    if conn is None:
        msg = f"get_connection({db_path}) returned None... database connection denied"
        raise DatabaseError(msg)

    try:
        yield conn
        conn.commit()
    except Exception:
        logger.warning("Statement rolled back due to error")
        conn.rollback()
        raise
    finally:
        conn.close()
        logger.debug("Connection closed")
