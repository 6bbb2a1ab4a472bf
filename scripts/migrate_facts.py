#!/usr/bin/env python3
"""Fact table migration script for memochat.

Runs the fact table uniqueness migration against a database file without
starting the server, e.g. before deploying over a database from an older
release. The server runs the same migration on every startup.

Usage:
    python scripts/migrate_facts.py
    python scripts/migrate_facts.py --db-path /srv/memochat/memory.db
"""

import argparse
import sqlite3
import sys
from pathlib import Path

# Add parent directory to path so we can import memochat
sys.path.insert(0, str(Path(__file__).parent.parent))

from memochat.config import Config
from memochat.db.migrator import migrate_fact_table
from memochat.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def migrate_database(db_path: Path) -> bool:
    """Run the fact table migration on one database file.

    Args:
        db_path: Path to the database file

    Returns:
        True if the migration succeeded, False otherwise
    """
    if not db_path.exists():
        logger.error("Database not found", extra={"path": str(db_path)})
        return False

    try:
        conn = sqlite3.connect(str(db_path))
    except sqlite3.Error as e:
        logger.error(
            "Could not open database",
            extra={"path": str(db_path), "error": str(e)},
            exc_info=True,
        )
        return False

    try:
        result = migrate_fact_table(conn)
    finally:
        conn.close()

    if result.success:
        logger.info(
            "Fact table migration completed",
            extra={"path": str(db_path), **result.to_dict()},
        )
    return result.success


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and migrate the database.

    Returns:
        0 on success, 1 on failure
    """
    parser = argparse.ArgumentParser(description="Add the (user_id, fact_key) uniqueness constraint")
    parser.add_argument(
        "--db-path",
        type=Path,
        default=Config.DATABASE_PATH,
        help=f"Database file to migrate (default: {Config.DATABASE_PATH})",
    )
    args = parser.parse_args(argv)

    setup_logging()
    return 0 if migrate_database(args.db_path) else 1


if __name__ == "__main__":
    sys.exit(main())
