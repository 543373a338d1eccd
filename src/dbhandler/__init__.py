"""
dbhandler core package.

A small convenience layer over single-file SQLite databases:
- `dbhandler.database`: the subclassable `DatabaseHandler`, parameterized
  statement builders and the `QueryData` result cursor
- `dbhandler.example`: `StudentsDB`, a one-table handler showing the contract
- `dbhandler.cli`: a Typer-based CLI (`dbhandler db ...`, `dbhandler students ...`)

Configuration:
- Shared filesystem anchors and column conventions live in
  `dbhandler.global_config`.
"""

from .database import DatabaseHandler, QueryData, Row

__all__ = ["DatabaseHandler", "QueryData", "Row"]
