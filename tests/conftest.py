from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from dbhandler.database import DatabaseHandler
from dbhandler.global_config import COL_TYPE_INT, COL_TYPE_STRING, DB_PATH_ENV_VAR, URL_PREFIX


@pytest.fixture(autouse=True)
def clean_db_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Clears any database path override from the developer's shell.
    Automatically applied to all tests.
    """
    monkeypatch.delenv(DB_PATH_ENV_VAR, raising=False)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "data" / "out").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures relative-path operations go into the temp directory by default.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture
def sqlite_path(project_root: Path) -> Path:
    """
    On-disk SQLite DB under the temp project root. The file does not exist
    yet, so handlers constructed on it run their on_create hook.
    """
    return project_root / "data" / "out" / "test.sqlite"


@pytest.fixture
def db_conn(sqlite_path: Path, project_root: Path) -> Iterator[sqlite3.Connection]:
    """
    A SQLite connection for inspecting what handlers wrote, always closed
    after each test.
    """
    try:
        sqlite_path.resolve().relative_to(project_root.resolve())
    except ValueError:
        raise AssertionError(
            f"SQLite path {sqlite_path} is not under project_root {project_root}. "
            "This prevents accidental writes to real databases."
        )

    conn = sqlite3.connect(sqlite_path)
    try:
        conn.execute("PRAGMA busy_timeout = 2000;")
        yield conn
    finally:
        conn.close()


class PeopleDB(DatabaseHandler):
    """Two-column handler used across the tests; records on_create calls."""

    TABLE = "People"

    def __init__(self, db_url: str, *, verbose: bool = True) -> None:
        self.create_calls = 0
        super().__init__(db_url, verbose=verbose)

    def on_create(self) -> None:
        self.create_calls += 1
        self.create_table(self.TABLE, {"Name": COL_TYPE_STRING, "Age": COL_TYPE_INT})


@pytest.fixture
def people_db(sqlite_path: Path) -> PeopleDB:
    return PeopleDB(f"{URL_PREFIX}{sqlite_path}")
