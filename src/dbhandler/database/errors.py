"""Database-specific exception types for the project."""

from __future__ import annotations

import sqlite3


class DatabaseError(Exception):
    """Base exception for database-related errors."""


class IntegrityError(DatabaseError):
    """Raised when a constraint violation occurs."""


class BadURLError(DatabaseError):
    """Raised when a connection string cannot be resolved to a database file."""


class ColumnError(DatabaseError, KeyError):
    """Raised when a result row has no column with the requested name."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class EmptyResultError(DatabaseError):
    """Raised when reading the current row of a result set with no rows."""


def from_sqlite_error(error: sqlite3.Error) -> DatabaseError:
    """Map a raw sqlite3 error to a project-level DatabaseError.

    Converts sqlite3 exceptions to project-specific exception types.
    IntegrityError is mapped to IntegrityError, all others to DatabaseError.

    Args:
        error: SQLite exception to convert.

    Returns:
        DatabaseError or IntegrityError instance with error message.
    """
    if isinstance(error, sqlite3.IntegrityError):
        return IntegrityError(str(error))
    return DatabaseError(str(error))
