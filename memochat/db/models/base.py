"""Base database infrastructure.

Contains the core Database class with initialization and connection pooling.
The Database class is extended via mixins defined in other modules.
"""

import sqlite3
from pathlib import Path
from typing import Any

from yoyo import get_backend, read_migrations

from memochat.config import Config
from memochat.db.migrator import MigrationResult, migrate_fact_table
from memochat.utils.connection_pool import ConnectionPool
from memochat.utils.db_helpers import execute_with_timing, init_query_logging
from memochat.utils.logging import get_logger

logger = get_logger(__name__)

# Path to migrations directory
MIGRATIONS_DIR = Path(__file__).parent.parent.parent.parent / "migrations"


class DatabaseBase:
    """Base database class with core infrastructure.

    Provides connection pooling, query execution with timing, and the startup
    schema work: the fact table migration followed by yoyo migrations.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or Config.DATABASE_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._should_log_queries, self._slow_query_threshold_ms = init_query_logging()
        self._pool = ConnectionPool(self.db_path)
        self.migration_result: MigrationResult = self._init_db()

    def close(self) -> None:
        """Close all connections in the pool.

        Call this on application shutdown.
        """
        self._pool.close_all()

    def _execute_with_timing(
        self,
        conn: sqlite3.Connection,
        query: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute a query with optional timing and logging.

        Delegates to shared execute_with_timing() helper.
        """
        return execute_with_timing(
            conn,
            query,
            params,
            should_log=self._should_log_queries,
            slow_query_threshold_ms=self._slow_query_threshold_ms,
        )

    def migrate_facts(self) -> MigrationResult:
        """Run the fact table uniqueness migration on a pooled connection."""
        with self._pool.get_connection() as conn:
            return migrate_fact_table(conn)

    def _init_db(self) -> MigrationResult:
        """Bring the schema up to date before the first request.

        The fact table migration goes first. A failed migration is logged and
        returned, the service keeps running against the old table shape.
        """
        logger.debug("Initializing database", extra={"db_path": str(self.db_path)})
        result = self.migrate_facts()
        if not result.success:
            logger.warning(
                "Continuing with unmigrated fact table",
                extra={"failed_step": result.failed_step, "error": result.error},
            )

        backend = get_backend(f"sqlite:///{self.db_path}")
        migrations = read_migrations(str(MIGRATIONS_DIR))
        try:
            with backend.lock():
                migrations_to_apply = backend.to_apply(migrations)
                if migrations_to_apply:
                    logger.info(
                        "Applying database migrations", extra={"count": len(migrations_to_apply)}
                    )
                backend.apply_migrations(migrations_to_apply)
        finally:
            backend.connection.close()

        return result
