"""Database models package.

This package provides the Database class, composed of mixins for the fact
store and the history log.

Usage:
    from memochat.db.models import Database

    db = Database(db_path)
    db.save_fact("u1", "name", "Alex")
    db.get_facts("u1")  # {"name": "Alex"}

There is no module-level instance. The app factory owns one Database and hands
it to the routes.
"""

from pathlib import Path

from memochat.db.migrator import MigrationResult
from memochat.db.models.base import DatabaseBase
from memochat.db.models.dataclasses import HistoryEntry
from memochat.db.models.facts import FactMixin
from memochat.db.models.helpers import check_database_connectivity
from memochat.db.models.history import HistoryMixin


class Database(DatabaseBase, FactMixin, HistoryMixin):
    """Main database class combining all mixins."""

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialize the database and run startup migrations.

        Args:
            db_path: Optional path to the database file.
                    Defaults to Config.DATABASE_PATH.
        """
        super().__init__(db_path)


__all__ = [
    "Database",
    "HistoryEntry",
    "MigrationResult",
    "check_database_connectivity",
]
