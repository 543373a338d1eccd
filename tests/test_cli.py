"""Tests for the Typer CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from dbhandler.cli.base import format_result
from dbhandler.cli.main import app
from dbhandler.global_config import DB_PATH_ENV_VAR

runner = CliRunner()


@pytest.fixture
def db_file(project_root: Path) -> Path:
    return project_root / "data" / "out" / "cli.db"


@pytest.mark.unit
def test_format_result_stats_and_message() -> None:
    text = format_result(
        {"success": False, "rows_affected": 0, "message": "No student with id 4"},
        operation="students remove",
    )
    assert text.splitlines() == [
        "✗ students remove",
        "  rows affected: 0",
        "  ℹ No student with id 4",
    ]


@pytest.mark.integration
def test_students_round_trip(db_file: Path) -> None:
    result = runner.invoke(app, ["students", "add", "Shaked3", "--db-path", str(db_file)])
    assert result.exit_code == 0, result.output
    assert "id: 1" in result.output

    result = runner.invoke(app, ["students", "rename", "1", "Kuku3", "--db-path", str(db_file)])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["students", "list", "--db-path", str(db_file)])
    assert result.exit_code == 0, result.output
    assert "1 Kuku3" in result.output

    result = runner.invoke(app, ["students", "remove", "1", "--db-path", str(db_file)])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["students", "remove", "1", "--db-path", str(db_file)])
    assert result.exit_code == 1
    assert "No student with id 1" in result.output


@pytest.mark.integration
def test_demo_uses_env_path(db_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(DB_PATH_ENV_VAR, str(db_file))
    result = runner.invoke(app, ["students", "demo"])
    assert result.exit_code == 0, result.output
    assert "before: []" in result.output
    assert "1 Kuku3" in result.output
    assert "All went well" in result.output
    assert db_file.exists()


@pytest.mark.integration
def test_db_exec_query_and_tables(db_file: Path) -> None:
    path = ["--db-path", str(db_file)]
    result = runner.invoke(app, ["db", "exec", "CREATE TABLE Pets (Kind TEXT)", *path])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["db", "exec", "INSERT INTO Pets VALUES ('cat'), ('[dog]')", *path])
    assert result.exit_code == 0, result.output
    assert "rows affected: 2" in result.output

    result = runner.invoke(app, ["db", "query", "SELECT Kind FROM Pets", *path])
    assert result.exit_code == 0, result.output
    assert "cat" in result.output
    assert "[dog]" in result.output
    assert "2 row(s)" in result.output

    result = runner.invoke(app, ["db", "tables", *path])
    assert result.exit_code == 0, result.output
    assert "Pets" in result.output


@pytest.mark.integration
def test_db_query_error_exits_nonzero(db_file: Path) -> None:
    result = runner.invoke(app, ["db", "query", "SELECT * FROM missing", "--db-path", str(db_file)])
    assert result.exit_code == 1
    assert "db query failed" in result.output


@pytest.mark.integration
def test_db_delete(db_file: Path) -> None:
    runner.invoke(app, ["students", "add", "x", "--db-path", str(db_file)])
    assert db_file.exists()

    result = runner.invoke(app, ["db", "delete", "--db-path", str(db_file)])
    assert result.exit_code == 0, result.output
    assert not db_file.exists()

    result = runner.invoke(app, ["db", "delete", "--db-path", str(db_file)])
    assert result.exit_code == 0
    assert "No database" in result.output
