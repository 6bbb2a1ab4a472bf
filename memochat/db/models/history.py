"""History log database operations mixin.

The history table is append-only: every generated reply is logged with the
message that produced it and its tone. Nothing in the request path reads it.
"""

from __future__ import annotations

import sqlite3
import time
from typing import TYPE_CHECKING, Any

from memochat.db.models.dataclasses import HistoryEntry
from memochat.utils.logging import get_logger

if TYPE_CHECKING:
    from memochat.utils.connection_pool import ConnectionPool

logger = get_logger(__name__)


class HistoryMixin:
    """Mixin providing history log operations."""

    _pool: ConnectionPool

    def _execute_with_timing(
        self,
        conn: sqlite3.Connection,
        query: str,
        params: tuple[Any, ...] = (),
    ) -> sqlite3.Cursor:
        """Execute query with timing (defined in base class)."""
        raise NotImplementedError

    def save_history(
        self, user_id: str, message: str, reply: str, tone: str
    ) -> HistoryEntry | None:
        """Append a chat exchange to the history log.

        Args:
            user_id: The user ID
            message: The user's message
            reply: The reply that was sent back
            tone: Tone label the reply was generated with

        Returns:
            The logged HistoryEntry, or None if the write failed
        """
        entry = HistoryEntry(
            user_id=user_id,
            message=message,
            reply=reply,
            tone=tone,
            time=int(time.time() * 1000),
        )
        try:
            with self._pool.get_connection() as conn:
                self._execute_with_timing(
                    conn,
                    """INSERT INTO history (user_id, message, reply, tone, time)
                       VALUES (?, ?, ?, ?, ?)""",
                    (entry.user_id, entry.message, entry.reply, entry.tone, entry.time),
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.error("Failed to save history", extra={"user_id": user_id, "error": str(e)})
            return None

        logger.debug("History saved", extra={"user_id": user_id, "tone": tone})
        return entry
