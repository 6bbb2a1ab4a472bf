"""Fact store database operations mixin.

Facts are durable (user_id, fact_key) -> fact_value pairs with last write wins.
Storage errors never reach the caller: writes report False, reads return an
empty mapping.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any

from memochat.utils.logging import get_logger

if TYPE_CHECKING:
    from memochat.utils.connection_pool import ConnectionPool

logger = get_logger(__name__)


class FactMixin:
    """Mixin providing fact store operations."""

    _pool: ConnectionPool

    def _execute_with_timing(
        self,
        conn: sqlite3.Connection,
        query: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute query with timing (defined in base class)."""
        raise NotImplementedError

    def save_fact(self, user_id: str, key: str, value: str) -> bool:
        """Save a fact, overwriting any previous value for (user_id, key).

        Args:
            user_id: The user ID
            key: Fact key (e.g. "name")
            value: Fact value

        Returns:
            True if the fact was written, False if the write failed
        """
        logger.debug("Saving fact", extra={"user_id": user_id, "fact_key": key})
        try:
            with self._pool.get_connection() as conn:
                self._execute_with_timing(
                    conn,
                    """INSERT INTO memory (user_id, fact_key, fact_value) VALUES (?, ?, ?)
                       ON CONFLICT(user_id, fact_key) DO UPDATE SET fact_value = excluded.fact_value""",
                    (user_id, key, value),
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.error(
                "Failed to save fact",
                extra={"user_id": user_id, "fact_key": key, "error": str(e)},
            )
            return False

        logger.info("Fact saved", extra={"user_id": user_id, "fact_key": key})
        return True

    def get_facts(self, user_id: str) -> dict[str, str]:
        """Get all facts for a user.

        Args:
            user_id: The user ID

        Returns:
            Mapping of fact key to value in insertion order. Empty if the user
            has no facts or the read failed.
        """
        try:
            with self._pool.get_connection() as conn:
                rows = self._execute_with_timing(
                    conn,
                    "SELECT fact_key, fact_value FROM memory WHERE user_id = ? ORDER BY rowid",
                    (user_id,),
                ).fetchall()
        except sqlite3.Error as e:
            logger.error("Failed to load facts", extra={"user_id": user_id, "error": str(e)})
            return {}

        return {row["fact_key"]: row["fact_value"] for row in rows}
