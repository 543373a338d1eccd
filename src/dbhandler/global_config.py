"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.
"""

import os
from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# From src/dbhandler/global_config.py, go up two levels: src/dbhandler -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# Core Names
PROJECT_NAME = "dbhandler"
PACKAGE_NAME = "dbhandler"

# Database directories
DB_DIR: Path = PROJECT_ROOT / "db"
DEFAULT_DB_FILENAME = "students.db"

# Environment override for the CLI's default database file
DB_PATH_ENV_VAR = "DBHANDLER_DB_PATH"

# Connection strings look like "sqlite:path/to/file.db"
URL_PREFIX = "sqlite:"

# Column conventions
ID_COLUMN = "_id"
COL_TYPE_STRING = "VARCHAR(255)"
COL_TYPE_INT = "INTEGER"


def default_db_path() -> Path:
    """Return the database file used when no path is given explicitly."""
    override = os.environ.get(DB_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DB_DIR / DEFAULT_DB_FILENAME
