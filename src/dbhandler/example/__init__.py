"""Example handler: a one-table student roster.

Demonstrates the ``DatabaseHandler`` contract:
- ``on_create`` builds the schema the first time the file is created
- row helpers are wrapped in small domain methods
- query results are read through ``QueryData`` navigation
"""

from .students import COL_NAME, TABLE_NAME, StudentsDB

__all__ = ["StudentsDB", "TABLE_NAME", "COL_NAME"]
