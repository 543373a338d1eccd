from __future__ import annotations

import logging
from typing import Annotated

import typer

from .base import configure_logging
from .commands.db import app as db_app
from .commands.students import app as students_app

configure_logging()
app = typer.Typer(
    help="SQLite handler CLI",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(db_app, name="db")
app.add_typer(students_app, name="students")


@app.callback()
def root(
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Log every statement the handler runs"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="Only log warnings and errors"),
    ] = False,
) -> None:
    """Create, query and edit single-file SQLite databases."""
    if verbose:
        configure_logging(logging.DEBUG)
    elif quiet:
        configure_logging(logging.WARNING)
    else:
        configure_logging(logging.INFO)


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.
    """
    app()


if __name__ == "__main__":
    main()
