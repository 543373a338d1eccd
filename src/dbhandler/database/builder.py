"""SQL statement builders.

Each builder turns a table name plus column/value mappings into a
``Statement``: SQL text with ``?`` placeholders and the matching tuple of
bound parameters. Values never appear in the SQL text itself; only
validated identifiers and column types do.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from .. import global_config as g
from .errors import DatabaseError

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_COLUMN_TYPE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_ (),]*$")


class Statement(NamedTuple):
    """SQL text and the parameters bound to its placeholders."""

    sql: str
    params: tuple[Any, ...] = ()

    def render(self) -> str:
        """Return the SQL with parameters substituted as literals.

        For log output only; never execute the rendered text.
        """
        parts = self.sql.split("?")
        if len(parts) - 1 != len(self.params):
            return f"{self.sql} -- params={self.params!r}"
        rendered = [parts[0]]
        for value, tail in zip(self.params, parts[1:]):
            rendered.append(render_literal(value))
            rendered.append(tail)
        return "".join(rendered)


def render_literal(value: Any) -> str:
    """Render a Python value as a SQL literal for display.

    Strings are single-quoted with embedded quotes doubled; everything else
    is written bare (``NULL`` for None, ``1``/``0`` for booleans).
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, bytes):
        return f"X'{value.hex()}'"
    text = str(value).replace("'", "''")
    return f"'{text}'"


def validate_identifier(name: str) -> str:
    """Validate a SQL identifier (table or column name).

    Args:
        name: Identifier to validate.

    Returns:
        The identifier, unchanged.

    Raises:
        DatabaseError: If the identifier is empty or has unsafe characters.
    """
    if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
        msg = f"Unsafe SQL identifier: {name!r}"
        raise DatabaseError(msg)
    return name


def _validate_column_type(col_type: str) -> str:
    if not isinstance(col_type, str) or not _COLUMN_TYPE_RE.match(col_type.strip()):
        msg = f"Unsafe SQL column type: {col_type!r}"
        raise DatabaseError(msg)
    return col_type.strip()


def _equality_clauses(filters: Mapping[str, Any], joiner: str) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    for col, value in filters.items():
        validate_identifier(col)
        if value is None and joiner == " AND ":
            clauses.append(f"{col} IS NULL")
            continue
        clauses.append(f"{col} = ?")
        params.append(value)
    return joiner.join(clauses), params


def build_create_table(
    table: str,
    columns: Mapping[str, str],
    *,
    id_autoincrement: bool = True,
) -> Statement:
    """Build an idempotent ``CREATE TABLE IF NOT EXISTS`` statement.

    Every table gets a leading ``_id`` column, an autoincrementing primary
    key unless ``id_autoincrement`` is False.

    Args:
        table: Table name.
        columns: Ordered mapping of column name to SQL type.
        id_autoincrement: Make ``_id`` an autoincrementing primary key.

    Raises:
        DatabaseError: If there are no columns or a name/type is unsafe.
    """
    validate_identifier(table)
    if not columns:
        msg = f"columns size is invalid: {len(columns)}"
        raise DatabaseError(msg)

    if id_autoincrement:
        definitions = [f"{g.ID_COLUMN} INTEGER PRIMARY KEY AUTOINCREMENT"]
    else:
        definitions = [f"{g.ID_COLUMN} INTEGER"]

    for name, col_type in columns.items():
        validate_identifier(name)
        definitions.append(f"{name} {_validate_column_type(col_type)}")

    return Statement(f"CREATE TABLE IF NOT EXISTS {table} ({', '.join(definitions)})")


def build_create_table_from_lists(
    table: str,
    names: Sequence[str],
    types: Sequence[str],
    *,
    id_autoincrement: bool = True,
) -> Statement:
    """Build ``CREATE TABLE`` from parallel name and type sequences.

    Raises:
        DatabaseError: If the sequences differ in length or are empty.
    """
    if len(names) != len(types):
        msg = (
            "columns names and types do not have the same length: "
            f"names: {len(names)} types: {len(types)}"
        )
        raise DatabaseError(msg)
    if len(set(names)) != len(names):
        msg = f"Duplicate column names: {list(names)!r}"
        raise DatabaseError(msg)
    return build_create_table(table, dict(zip(names, types)), id_autoincrement=id_autoincrement)


def build_drop_table(table: str, *, if_exists: bool = False) -> Statement:
    validate_identifier(table)
    guard = "IF EXISTS " if if_exists else ""
    return Statement(f"DROP TABLE {guard}{table}")


def build_clear_table(table: str) -> Statement:
    """Build a statement removing every row of ``table``."""
    validate_identifier(table)
    return Statement(f"DELETE FROM {table}")  # noqa: S608


def build_insert(table: str, values: Mapping[str, Any]) -> Statement:
    """Build a single-row ``INSERT`` with one placeholder per column.

    Raises:
        DatabaseError: If ``values`` is empty or a name is unsafe.
    """
    validate_identifier(table)
    if not values:
        msg = f"Refusing to INSERT an empty row into {table}"
        raise DatabaseError(msg)

    columns = ", ".join(validate_identifier(col) for col in values)
    placeholders = ", ".join("?" for _ in values)
    sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"  # noqa: S608
    return Statement(sql, tuple(values.values()))


def build_update(
    table: str,
    values: Mapping[str, Any],
    where: Mapping[str, Any] | str | None = None,
    where_params: Sequence[Any] = (),
) -> Statement:
    """Build an ``UPDATE`` statement.

    Args:
        table: Table name.
        values: Column name to new value mapping for the SET clause.
        where: Either a mapping of ANDed equality filters, a SQL boolean
            expression (its own placeholders bound from ``where_params``),
            or None to update every row.
        where_params: Parameters for a string ``where`` clause.

    Raises:
        DatabaseError: If ``values`` is empty, a name is unsafe, ``where``
            is a blank string, or ``where_params`` is given with a mapping
            ``where``.
    """
    validate_identifier(table)
    if not values:
        msg = f"Refusing to UPDATE {table} with no values"
        raise DatabaseError(msg)

    set_sql, params = _equality_clauses(values, ", ")
    sql = f"UPDATE {table} SET {set_sql}"  # noqa: S608

    if isinstance(where, Mapping):
        if where_params:
            msg = "where_params only applies to a string where clause"
            raise DatabaseError(msg)
        if where:
            where_sql, where_values = _equality_clauses(where, " AND ")
            sql += f" WHERE {where_sql}"
            params.extend(where_values)
    elif where is not None:
        if not where.strip():
            msg = f"Refusing to UPDATE {table} with a blank where clause; pass None to update every row"
            raise DatabaseError(msg)
        sql += f" WHERE {where.strip()}"
        params.extend(where_params)

    return Statement(sql, tuple(params))


def build_delete(table: str, where: Mapping[str, Any]) -> Statement:
    """Build a ``DELETE`` for rows matching every equality in ``where``.

    Raises:
        DatabaseError: If ``where`` is empty; use ``build_clear_table``
            to remove every row.
    """
    validate_identifier(table)
    if not where:
        msg = f"Refusing to perform DELETE on {table} with no filters"
        raise DatabaseError(msg)

    where_sql, params = _equality_clauses(where, " AND ")
    return Statement(f"DELETE FROM {table} WHERE {where_sql}", tuple(params))  # noqa: S608
