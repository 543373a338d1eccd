"""CLI commands for raw database access."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from ...database import DatabaseHandler
from ...global_config import URL_PREFIX, default_db_path
from ..base import BaseCLI, get_logger, handle_errors
from ..render import render_query_data

logger = get_logger(__name__)

db_app = typer.Typer(help="Raw database commands.")

DbPathOption = Annotated[
    Path | None,
    typer.Option(
        "--db-path",
        help="Path to SQLite database file (defaults to $DBHANDLER_DB_PATH or db/students.db)",
    ),
]


class RawDatabase(DatabaseHandler):
    """Handler with no schema of its own, for ad-hoc SQL."""

    def on_create(self) -> None:
        logger.info("Created empty database at %s", self.db_path)


def open_raw(db_path: Path | None) -> RawDatabase:
    return RawDatabase(f"{URL_PREFIX}{db_path or default_db_path()}")


class DatabaseCLI(BaseCLI):
    """CLI helpers for raw database access."""

    def __init__(self) -> None:
        super().__init__("db")

    def exec_sql(self, *, sql: str, db_path: Path | None) -> dict[str, Any]:
        """Run a statement that returns no rows.

        Returns:
            Result dictionary with the affected row count.
        """

        def _exec() -> dict[str, Any]:
            rowcount = open_raw(db_path).raw_sql(sql)
            return {"success": True, "rows_affected": rowcount if rowcount >= 0 else None}

        return self.handle_cli_operation(operation="db exec", op_callable=_exec)

    def list_tables(self, *, db_path: Path | None) -> list[str]:
        def _tables() -> list[str]:
            data = open_raw(db_path).raw_query(
                "SELECT name FROM sqlite_master "
                "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
            )
            return [row.get_string("name") or "" for row in data]

        return self.handle_cli_operation(operation="db tables", op_callable=_tables)

    def delete_db(self, *, db_path: Path | None) -> dict[str, Any]:
        """Delete the database file.

        User Output:
            - "Deleting database..." pre-message.
            - Formatted result via BaseCLI.handle_cli_operation.
        """

        def _delete() -> dict[str, Any]:
            target = db_path or default_db_path()
            if not target.exists():
                return {"success": True, "message": f"No database at {target}"}
            removed = open_raw(target).delete_database()
            return {
                "success": removed,
                "message": f"Database deleted: {target}" if removed else f"Could not delete {target}",
            }

        return self.handle_cli_operation(
            operation="db delete",
            op_callable=_delete,
            pre_message="Deleting database...",
        )


cli = DatabaseCLI()


@db_app.command("query")
def query_command(
    sql: Annotated[str, typer.Argument(help="SELECT statement to run")],
    db_path: DbPathOption = None,
) -> None:
    """Run a query and print the rows as a table."""
    with handle_errors("db query", logger=cli.logger):
        data = open_raw(db_path).raw_query(sql)
    render_query_data(data)


@db_app.command("exec")
def exec_command(
    sql: Annotated[str, typer.Argument(help="Statement that returns no rows")],
    db_path: DbPathOption = None,
) -> None:
    """Run a statement (CREATE, INSERT, UPDATE, DELETE, ...)."""
    cli.exec_sql(sql=sql, db_path=db_path)


@db_app.command("tables")
def tables_command(db_path: DbPathOption = None) -> None:
    """List the tables of the database."""
    cli.list_tables(db_path=db_path)


@db_app.command("delete")
def delete_command(db_path: DbPathOption = None) -> None:
    """Delete the database file.

    Exits with code 1 if the file exists but cannot be removed.
    """
    result = cli.delete_db(db_path=db_path)
    if not result.get("success"):
        raise typer.Exit(1)


app = db_app
