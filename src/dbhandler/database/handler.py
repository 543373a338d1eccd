"""Subclassable database handler.

``DatabaseHandler`` manages the lifecycle of a single SQLite file and
offers table and row helpers on top of it. Each call opens a connection,
runs exactly one statement, commits and closes the connection again.

How to use:
    1. Subclass ``DatabaseHandler`` and implement ``on_create()``; it runs
       once, right after the database file is created.
    2. Optionally override ``get_connection()`` to customize how
       connections are opened.
    3. Construct the subclass with a ``"sqlite:<path>"`` connection string.
"""

from __future__ import annotations

import abc
import logging
import sqlite3
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from .builder import (
    Statement,
    build_clear_table,
    build_create_table,
    build_create_table_from_lists,
    build_delete,
    build_drop_table,
    build_insert,
    build_update,
    validate_identifier,
)
from .connection import get_connection, open_connection, parse_db_url
from .cursor import QueryData
from .errors import DatabaseError, from_sqlite_error
from .queries import execute_insert, execute_update, fetch_query_data

logger = logging.getLogger(__name__)


class DatabaseHandler(abc.ABC):
    """Base class for a single-file SQLite database.

    Args:
        db_url: Connection string of the form ``"sqlite:<path>"``.
        verbose: Emit the per-statement debug trace through logging.

    Raises:
        BadURLError: If ``db_url`` is not a ``sqlite:`` connection string.
        DatabaseError: If the file has to be created and ``on_create``
            fails.
    """

    def __init__(self, db_url: str, *, verbose: bool = True) -> None:
        self.db_url = db_url
        self.db_path: Path = parse_db_url(db_url)
        self.verbose = verbose

        if not self.db_path.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self.db_path.touch()
            except OSError as exc:
                msg = f"Could not create database file {self.db_path}: {exc}"
                raise DatabaseError(msg) from exc
            self._debug("Database file created at : %s", self.db_path)
            try:
                self.on_create()
            except Exception:
                # Leave no half-initialized file behind; the next run retries on_create
                logger.exception("on_create failed for %s", self.db_path)
                self.db_path.unlink(missing_ok=True)
                raise

    # Hooks

    @abc.abstractmethod
    def on_create(self) -> None:
        """Called once when the database file is created for the first time.

        Create tables and insert default data here.
        """

    def get_connection(self, db_path: Path) -> sqlite3.Connection | None:
        """Open a connection to ``db_path``.

        Override to customize connection setup. Returning None makes every
        operation fail with ``DatabaseError``.
        """
        return get_connection(db_path)

    # Lifecycle

    def delete_database(self) -> bool:
        """Delete the database file.

        Returns:
            True if the file existed and was removed, False otherwise.
        """
        try:
            self.db_path.unlink()
        except FileNotFoundError:
            return False
        except OSError:
            logger.exception("Failed to delete database file %s", self.db_path)
            return False
        logger.info("Deleted database file %s", self.db_path)
        return True

    # Tables

    def create_table(
        self,
        table: str,
        columns: Mapping[str, str],
        *,
        id_autoincrement: bool = True,
    ) -> None:
        """Create ``table`` if it does not exist yet.

        Args:
            table: Table name.
            columns: Ordered mapping of column name to SQL type, e.g.
                ``{"Name": COL_TYPE_STRING}``.
            id_autoincrement: Give the table an autoincrementing ``_id``
                primary key (a plain ``_id INTEGER`` column otherwise).
        """
        self._execute(build_create_table(table, columns, id_autoincrement=id_autoincrement))

    def create_table_from_lists(
        self,
        table: str,
        names: Sequence[str],
        types: Sequence[str],
        *,
        id_autoincrement: bool = True,
    ) -> None:
        """Create ``table`` from parallel column name and type sequences."""
        self._execute(
            build_create_table_from_lists(table, names, types, id_autoincrement=id_autoincrement)
        )

    def delete_table(self, table: str, *, if_exists: bool = False) -> None:
        """Drop ``table`` from the database."""
        self._execute(build_drop_table(table, if_exists=if_exists))

    def restart_table(self, table: str) -> int:
        """Delete all rows from ``table``, returning how many were removed."""
        return self._execute(build_clear_table(table))

    def table_exists(self, table: str) -> bool:
        validate_identifier(table)
        data = self.raw_query(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table,),
        )
        return bool(data)

    def count(self, table: str) -> int:
        validate_identifier(table)
        return self.raw_query(f"SELECT COUNT(*) AS n FROM {table}").get_int("n")  # noqa: S608

    # Rows

    def insert(self, table: str, values: Mapping[str, Any]) -> int:
        """Insert a new row into ``table``.

        Args:
            table: Table name.
            values: Column name to value mapping (str, int, float, bool,
                bytes or None).

        Returns:
            The ``rowid`` of the inserted row.
        """
        return self._execute(build_insert(table, values), insert=True)

    def delete(self, table: str, where: Mapping[str, Any]) -> int:
        """Delete the rows of ``table`` matching every ``where`` equality.

        Returns:
            Number of rows deleted.
        """
        return self._execute(build_delete(table, where))

    def update(
        self,
        table: str,
        values: Mapping[str, Any],
        where: Mapping[str, Any] | str | None = None,
        where_params: Sequence[Any] = (),
    ) -> int:
        """Update rows of ``table``.

        Args:
            table: Table name.
            values: New column values.
            where: Equality mapping, or a SQL boolean expression whose
                placeholders are bound from ``where_params``. None updates
                every row.
            where_params: Parameters for a string ``where``.

        Returns:
            Number of rows changed.
        """
        return self._execute(build_update(table, values, where, where_params))

    # Raw access

    def raw_query(self, sql: str, params: Sequence[Any] | Mapping[str, Any] = ()) -> QueryData:
        """Run a query that returns rows.

        Raises:
            DatabaseError: If execution fails (bad SQL, missing table, ...).
        """
        statement = Statement(sql, tuple(params) if not isinstance(params, Mapping) else params)
        self._debug("Trying to execute query: %s", statement.render())
        try:
            with open_connection(self.db_path, connect=self.get_connection) as conn:
                data = fetch_query_data(conn, statement.sql, statement.params)
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc
        self._debug("Successful: loaded %d rows", len(data))
        return data

    def raw_sql(self, sql: str, params: Sequence[Any] | Mapping[str, Any] = ()) -> int:
        """Run a statement that returns no rows, returning its rowcount."""
        statement = Statement(sql, tuple(params) if not isinstance(params, Mapping) else params)
        return self._execute(statement)

    # Internals

    def _execute(self, statement: Statement, *, insert: bool = False) -> int:
        self._debug("Trying to execute query: %s", statement.render())
        try:
            with open_connection(self.db_path, connect=self.get_connection) as conn:
                if insert:
                    result = execute_insert(conn, statement.sql, statement.params)
                else:
                    result = execute_update(conn, statement.sql, statement.params)
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc
        self._debug("Successful: %s", result)
        return result

    def _debug(self, msg: str, *args: Any) -> None:
        if self.verbose:
            logger.debug("DB DEBUG: " + msg, *args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.db_url!r})"

