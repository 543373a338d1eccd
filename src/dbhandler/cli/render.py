"""Rich rendering of query results for the CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..database import QueryData


def _cell(value: object) -> Text:
    # Text, not markup: stored values may contain square brackets
    if value is None:
        return Text("NULL", style="dim")
    return Text(str(value))


def build_table(data: QueryData, *, title: str | None = None) -> Table:
    """Build a Rich table with one column per result column and one row per record."""
    table = Table(title=title, show_lines=False)
    for col in data.columns:
        table.add_column(col, style="cyan" if col == "_id" else None)
    for row in data:
        table.add_row(*(_cell(row[col]) for col in data.columns))
    return table


def render_query_data(
    data: QueryData,
    console: Console | None = None,
    *,
    title: str | None = None,
) -> None:
    """Print a result set, or a dim note when it has no rows.

    Args:
        data: Materialized query result.
        console: Rich Console instance (None to create new).
        title: Optional table caption.
    """
    if console is None:
        console = Console()

    if not data:
        console.print("[yellow]No rows.[/yellow]")
        return

    console.print(build_table(data, title=title))
    console.print(f"[dim]{len(data)} row(s)[/dim]")
