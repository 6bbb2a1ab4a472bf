"""Database health helpers used by the readiness probe."""

import os
import sqlite3
from pathlib import Path

from memochat.utils.logging import get_logger

logger = get_logger(__name__)


def check_database_connectivity(db_path: Path) -> tuple[bool, str | None]:
    """Check if the database file is reachable and writable.

    Args:
        db_path: Path to the database file

    Returns:
        Tuple of (success: bool, error_message: str | None)
    """
    logger.debug("Checking database connectivity", extra={"db_path": str(db_path)})

    parent_dir = db_path.parent
    if not parent_dir.exists():
        error = f"Database directory does not exist: {parent_dir}"
        logger.error("Database connectivity check failed", extra={"error": error})
        return False, error

    if not os.access(parent_dir, os.W_OK):
        error = f"Database directory is not writable: {parent_dir}"
        logger.error("Database connectivity check failed", extra={"error": error})
        return False, error

    if db_path.exists() and not os.access(db_path, os.R_OK | os.W_OK):
        error = f"Database file is not readable/writable: {db_path}"
        logger.error("Database connectivity check failed", extra={"error": error})
        return False, error

    try:
        conn = sqlite3.connect(db_path)
        try:
            conn.execute("SELECT 1")
        finally:
            conn.close()
    except sqlite3.Error as e:
        error = f"Database connection failed: {e}"
        logger.error("Database connectivity check failed", extra={"error": error})
        return False, error

    return True, None
