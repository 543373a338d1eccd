"""Student roster CLI commands demonstrating the handler round trip."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from ...example import StudentsDB
from ...global_config import default_db_path
from ..base import BaseCLI, format_result, handle_errors

app = typer.Typer(
    name="students",
    help="Example student roster (add, list, rename, remove, demo)",
)

DbPathOption = Annotated[
    Path | None,
    typer.Option(
        "--db-path",
        help="Path to SQLite database file (defaults to $DBHANDLER_DB_PATH or db/students.db)",
    ),
]


def _open(db_path: Path | None) -> StudentsDB:
    return StudentsDB(db_path or default_db_path())


@app.command("add")
def add_command(
    name: Annotated[str, typer.Argument(help="Student name")],
    db_path: DbPathOption = None,
) -> None:
    """Add a student to the roster."""
    cli = BaseCLI("students")

    def _add() -> dict[str, Any]:
        student_id = _open(db_path).add_student(name)
        return {"success": True, "row_id": student_id, "message": f"Added {name}"}

    cli.handle_cli_operation(operation="students add", op_callable=_add)


@app.command("list")
def list_command(db_path: DbPathOption = None) -> None:
    """Print every student as "<id> <name>"."""
    cli = BaseCLI("students")
    cli.handle_cli_operation(
        operation="students",
        op_callable=lambda: _open(db_path).format_students(),
    )


@app.command("rename")
def rename_command(
    student_id: Annotated[int, typer.Argument(help="Student _id")],
    name: Annotated[str, typer.Argument(help="New name")],
    db_path: DbPathOption = None,
) -> None:
    """Rename a student. Exits with code 1 if the id does not exist."""
    cli = BaseCLI("students")

    def _rename() -> dict[str, Any]:
        changed = _open(db_path).rename_student(student_id, name)
        return {
            "success": changed > 0,
            "rows_affected": changed,
            "message": None if changed else f"No student with id {student_id}",
        }

    result = cli.handle_cli_operation(operation="students rename", op_callable=_rename)
    if not result.get("success"):
        raise typer.Exit(1)


@app.command("remove")
def remove_command(
    student_id: Annotated[int, typer.Argument(help="Student _id")],
    db_path: DbPathOption = None,
) -> None:
    """Remove a student. Exits with code 1 if the id does not exist."""
    cli = BaseCLI("students")

    def _remove() -> dict[str, Any]:
        removed = _open(db_path).remove_student(student_id)
        return {
            "success": removed > 0,
            "rows_affected": removed,
            "message": None if removed else f"No student with id {student_id}",
        }

    result = cli.handle_cli_operation(operation="students remove", op_callable=_remove)
    if not result.get("success"):
        raise typer.Exit(1)


@app.command("demo")
def demo_command(
    name: Annotated[str, typer.Option("--name", help="Name of the student to add")] = "Kuku3",
    db_path: DbPathOption = None,
) -> None:
    """Print the roster, add one student, then print it again."""
    cli = BaseCLI("students")

    with handle_errors("students demo", logger=cli.logger):
        db = _open(db_path)
        typer.echo(format_result(db.format_students(), operation="before"))
        db.add_student(name)
        typer.echo(format_result(db.format_students(), operation="after"))
    typer.echo("All went well")
