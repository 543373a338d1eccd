"""Student roster built on ``DatabaseHandler``."""

from __future__ import annotations

import logging
from pathlib import Path

from ..database import DatabaseHandler
from ..global_config import COL_TYPE_STRING, ID_COLUMN, URL_PREFIX

logger = logging.getLogger(__name__)

TABLE_NAME = "Students"
COL_NAME = "Name"


class StudentsDB(DatabaseHandler):
    """Handler for a database holding a single ``Students`` table.

    Args:
        db_path: Path to the database file; the ``sqlite:`` prefix is added
            here.
        verbose: Emit the handler's per-statement debug trace.
    """

    TABLE_NAME = TABLE_NAME
    COL_NAME = COL_NAME

    def __init__(self, db_path: Path | str, *, verbose: bool = True) -> None:
        super().__init__(f"{URL_PREFIX}{db_path}", verbose=verbose)

    def on_create(self) -> None:
        self.create_table(TABLE_NAME, {COL_NAME: COL_TYPE_STRING}, id_autoincrement=True)
        logger.info("Created table %s", TABLE_NAME)

    def add_student(self, name: str) -> int:
        """Insert a student and return the new ``_id``."""
        student_id = self.insert(TABLE_NAME, {COL_NAME: name})
        logger.info("Added a new student: %s (id=%s)", name, student_id)
        return student_id

    def remove_student(self, student_id: int) -> int:
        """Delete a student by ``_id``, returning the number of rows removed."""
        return self.delete(TABLE_NAME, {ID_COLUMN: student_id})

    def rename_student(self, student_id: int, name: str) -> int:
        return self.update(TABLE_NAME, {COL_NAME: name}, f"{ID_COLUMN} = ?", (student_id,))

    def list_students(self) -> list[tuple[int, str]]:
        """Return every student as ``(id, name)`` in insertion order."""
        data = self.raw_query(
            f"SELECT {ID_COLUMN}, {COL_NAME} FROM {TABLE_NAME} ORDER BY {ID_COLUMN}"  # noqa: S608
        )
        students: list[tuple[int, str]] = []
        if not data:
            return students

        while True:
            students.append((data.get_int(ID_COLUMN), data.get_string(COL_NAME) or ""))
            if not data.next_row():
                break
        return students

    def format_students(self) -> list[str]:
        """Render the roster as ``"<id> <name>"`` lines."""
        return [f"{student_id} {name}" for student_id, name in self.list_students()]
