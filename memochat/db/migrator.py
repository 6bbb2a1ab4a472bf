"""Fact table migration.

Older deployments created the ``memory`` table without a uniqueness constraint,
so a user could end up with several rows for the same fact key. This module
rebuilds the table with ``UNIQUE(user_id, fact_key)``:

1. Rename ``memory`` to ``memory_old`` (no table yet is fine, nothing to copy)
2. Create ``memory`` with the constraint
3. Copy rows across with ``INSERT OR IGNORE`` (one arbitrary row survives per key)
4. Drop ``memory_old``

The migration runs on every startup before the service accepts requests. On an
already-migrated table it rebuilds the table with the same rows, which is
wasteful but harmless. All steps share one transaction: a failure rolls back
to the previous shape, is logged, and is reported in the result rather than
raised, so the service keeps running.
"""

import sqlite3
from dataclasses import dataclass

from memochat.utils.logging import get_logger

logger = get_logger(__name__)

FACT_TABLE = "memory"
LEGACY_FACT_TABLE = "memory_old"

CREATE_FACT_TABLE = f"""
    CREATE TABLE IF NOT EXISTS {FACT_TABLE} (
        user_id TEXT,
        fact_key TEXT,
        fact_value TEXT,
        UNIQUE(user_id, fact_key)
    )
"""


@dataclass
class MigrationResult:
    """Outcome of a fact table migration run."""

    success: bool = True
    renamed: bool = False
    copied_rows: int = 0
    failed_step: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "renamed": self.renamed,
            "copied_rows": self.copied_rows,
            "failed_step": self.failed_step,
            "error": self.error,
        }


def _rename_existing_table(conn: sqlite3.Connection) -> bool:
    """Rename the current fact table out of the way.

    Returns:
        True if a table was renamed, False if there was no fact table yet
    """
    try:
        conn.execute(f"ALTER TABLE {FACT_TABLE} RENAME TO {LEGACY_FACT_TABLE}")
    except sqlite3.OperationalError as e:
        if "no such table" not in str(e):
            raise
        logger.debug("No existing fact table to migrate")
        return False
    return True


def migrate_fact_table(conn: sqlite3.Connection) -> MigrationResult:
    """Ensure the fact table enforces one value per (user_id, fact_key).

    Args:
        conn: Open SQLite connection. The migration commits or rolls back its
            own transaction on it.

    Returns:
        MigrationResult describing what happened. Never raises sqlite3.Error.
    """
    result = MigrationResult()
    step = "begin"
    try:
        if not conn.in_transaction:
            conn.execute("BEGIN")

        step = "rename"
        result.renamed = _rename_existing_table(conn)

        step = "create"
        conn.execute(CREATE_FACT_TABLE)

        if result.renamed:
            step = "copy"
            cursor = conn.execute(
                f"""INSERT OR IGNORE INTO {FACT_TABLE} (user_id, fact_key, fact_value)
                    SELECT user_id, fact_key, fact_value FROM {LEGACY_FACT_TABLE}"""
            )
            result.copied_rows = max(cursor.rowcount, 0)

            step = "drop"
            conn.execute(f"DROP TABLE IF EXISTS {LEGACY_FACT_TABLE}")

        step = "commit"
        conn.commit()
    except sqlite3.Error as e:
        try:
            conn.rollback()
        except sqlite3.Error:
            logger.warning("Rollback after failed fact table migration also failed")
        result.success = False
        result.failed_step = step
        result.error = str(e)
        logger.error(
            "Fact table migration failed",
            extra={"step": step, "error": str(e)},
        )
        return result

    logger.info(
        "Fact table migrated",
        extra={"renamed": result.renamed, "copied_rows": result.copied_rows},
    )
    return result
