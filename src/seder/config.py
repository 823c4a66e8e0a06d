"""Application settings and product constants."""

import os
from pathlib import Path
from typing import Optional

# VAT rate applied to new entries when none is given (percent)
DEFAULT_VAT_RATE = 18

# An invoice sent more than this many days ago and still unpaid is overdue
OVERDUE_DAYS = 30

# Ranges up to this many days are charted per week, longer ranges per month
WEEKLY_BUCKET_MAX_DAYS = 60

# Category breakdown keeps this many categories before collapsing into "other"
TOP_CATEGORY_COUNT = 5

# Calendar events classified as work at or above this confidence are preselected
AUTO_SELECT_CONFIDENCE = 0.7
UNMATCHED_CONFIDENCE = 0.5

UNCATEGORIZED_LABEL = "Uncategorized"
OTHER_CATEGORY_LABEL = "Other"
CALENDAR_IMPORT_NOTE = "Imported from calendar"
CALENDAR_DEFAULT_DESCRIPTION = "Calendar event"

DB_PATH_ENV = "SEDER_DB_PATH"
RULES_PATH_ENV = "SEDER_RULES_PATH"


def data_dir() -> Path:
    """Return the per-user data directory (~/.seder), creating it if needed."""
    path = Path.home() / ".seder"
    path.mkdir(exist_ok=True)
    return path


def resolve_db_path(database_path: Optional[str] = None) -> str:
    """Resolve the SQLite database path.

    An explicit path wins, then the SEDER_DB_PATH environment variable,
    then ~/.seder/seder.db.
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)
    if database_path is None:
        database_path = str(data_dir() / "seder.db")
    return database_path


def resolve_rules_path(rules_path: Optional[str] = None) -> Path:
    """Resolve the classification rules file path."""
    if rules_path is None:
        rules_path = os.environ.get(RULES_PATH_ENV)
    if rules_path is None:
        return data_dir() / "classification_rules.json"
    return Path(rules_path)
