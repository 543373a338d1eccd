"""In-memory result cursor over a fully materialized result set.

``QueryData`` reads every row of a query result at construction time, so
navigating it never touches the database again. The row list never
changes after construction; only the position of the current row moves.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from .errors import ColumnError, EmptyResultError


class Row(Mapping[str, Any]):
    """One result row: an ordered, read-only mapping of column name to value."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[tuple[str, Any]] | Mapping[str, Any]) -> None:
        items = cells.items() if isinstance(cells, Mapping) else cells
        self._cells: dict[str, Any] = dict(items)

    def __getitem__(self, col: str) -> Any:
        try:
            return self._cells[col]
        except KeyError:
            msg = f"No column named {col!r} (columns: {', '.join(self._cells)})"
            raise ColumnError(msg) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Row({self._cells!r})"

    def get_string(self, col: str) -> str | None:
        """Return the column value as text; SQL NULL stays None."""
        value = self[col]
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return str(value)

    def get_int(self, col: str) -> int:
        """Return the column value as an int.

        Integers pass through, integral floats are narrowed and strings are
        parsed.

        Raises:
            ColumnError: If the column does not exist.
            ValueError: If the value is NULL or has no exact integer form.
        """
        value = self[col]
        if value is None:
            msg = f"Column {col!r} is NULL"
            raise ValueError(msg)
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if not value.is_integer():
                msg = f"Column {col!r} holds non-integral value {value!r}"
                raise ValueError(msg)
            return int(value)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return int(str(value).strip())

    def get_float(self, col: str) -> float:
        """Return the column value as a float.

        Raises:
            ColumnError: If the column does not exist.
            ValueError: If the value is NULL or not numeric.
        """
        value = self[col]
        if value is None:
            msg = f"Column {col!r} is NULL"
            raise ValueError(msg)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return float(value)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._cells)


class QueryData:
    """Forward-navigable view over a materialized result set.

    The cursor starts on the first row. Typed accessors read from the
    current row; ``next_row()`` advances and ``first_row()`` rewinds.

    Example:
        data = handler.raw_query("SELECT * FROM Students")
        if data:
            while True:
                print(data.get_int("_id"), data.get_string("Name"))
                if not data.next_row():
                    break
    """

    def __init__(self, columns: Sequence[str], rows: Iterable[Row | Mapping[str, Any]]) -> None:
        self._columns: tuple[str, ...] = tuple(columns)
        self._rows: tuple[Row, ...] = tuple(
            row if isinstance(row, Row) else Row(row) for row in rows
        )
        self._position = 0

    @classmethod
    def from_cursor(cls, cursor: sqlite3.Cursor) -> QueryData:
        """Drain a sqlite3 cursor into a new QueryData.

        Column labels come from ``cursor.description``; statements that
        return no result columns produce an empty QueryData.
        """
        description = cursor.description or ()
        columns = [entry[0] for entry in description]
        rows = [Row(zip(columns, tuple(record))) for record in cursor.fetchall()]
        return cls(columns, rows)

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def position(self) -> int:
        """Zero-based index of the current row."""
        return self._position

    @property
    def current_row(self) -> Row:
        """The row the cursor currently points at.

        Raises:
            EmptyResultError: If the result set has no rows.
        """
        if not self._rows:
            msg = "Result set is empty; there is no current row"
            raise EmptyResultError(msg)
        return self._rows[self._position]

    def get_string(self, col: str) -> str | None:
        """On the current row: retrieve a column value as text."""
        return self.current_row.get_string(col)

    def get_int(self, col: str) -> int:
        """On the current row: retrieve a column value as an int."""
        return self.current_row.get_int(col)

    def get_float(self, col: str) -> float:
        return self.current_row.get_float(col)

    def get(self, col: str, default: Any = None) -> Any:
        """On the current row: raw column value, or ``default`` if the column is absent."""
        return self.current_row.get(col, default)

    def next_row(self) -> bool:
        """Move the cursor to the next row.

        Returns:
            True if the cursor moved, False if it was already on the last row
            (or the result set is empty).
        """
        if self._position + 1 < len(self._rows):
            self._position += 1
            return True
        return False

    def first_row(self) -> None:
        """Move the cursor back to the first row."""
        self._position = 0

    def to_dicts(self) -> list[dict[str, Any]]:
        return [row.to_dict() for row in self._rows]

    def __iter__(self) -> Iterator[Row]:
        # Independent of the cursor position
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __bool__(self) -> bool:
        return bool(self._rows)

    def __repr__(self) -> str:
        return f"QueryData(columns={list(self._columns)!r}, rows={len(self._rows)}, position={self._position})"
