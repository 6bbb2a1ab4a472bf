"""Thread-local SQLite connection management.

Flask serves each request on a worker thread. Every thread gets one SQLite
connection that is reused for all of its fact and history queries, so there is
no per-request open/close cost and no connection is shared across threads.

Usage:
    pool = ConnectionPool("/path/to/memory.db")

    with pool.get_connection() as conn:
        conn.execute("SELECT fact_key, fact_value FROM memory WHERE user_id = ?", ("u1",))

    # On shutdown
    pool.close_all()
"""

import sqlite3
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from memochat.utils.logging import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """Thread-local SQLite connection pool.

    SQLite locks at file level, so a pool cannot add write concurrency. It only
    saves reconnects and keeps each connection confined to one thread.
    """

    def __init__(self, db_path: Path | str, timeout: float = 30.0) -> None:
        """Initialize the connection pool.

        Args:
            db_path: Path to the SQLite database file
            timeout: Seconds to wait on a locked database before failing
        """
        self.db_path = Path(db_path)
        self.timeout = timeout
        self._local = threading.local()
        self._lock = threading.Lock()
        self._connections: dict[int, sqlite3.Connection] = {}
        logger.debug("Connection pool created", extra={"db_path": str(self.db_path)})

    def _reap_dead_threads(self) -> None:
        """Close connections owned by threads that have exited.

        Must be called with self._lock held.
        """
        alive_thread_ids = {t.ident for t in threading.enumerate()}
        dead_thread_ids = [tid for tid in self._connections if tid not in alive_thread_ids]
        for tid in dead_thread_ids:
            conn = self._connections.pop(tid)
            try:
                conn.close()
            except sqlite3.Error:
                pass
        if dead_thread_ids:
            logger.debug(
                "Reaped dead thread connections",
                extra={"dead_count": len(dead_thread_ids), "remaining": len(self._connections)},
            )

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new connection with standard settings."""
        # check_same_thread=False: close_all() runs on the shutdown thread
        conn = sqlite3.connect(self.db_path, check_same_thread=False, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _get_thread_connection(self) -> sqlite3.Connection:
        """Get or create the connection for the current thread."""
        thread_id = threading.get_ident()
        conn: sqlite3.Connection | None = getattr(self._local, "connection", None)

        if conn is not None:
            try:
                conn.execute("SELECT 1")
                return conn
            except sqlite3.Error:
                logger.warning(
                    "Thread connection was broken, creating new one",
                    extra={"thread_id": thread_id, "db_path": str(self.db_path)},
                )
                with self._lock:
                    self._connections.pop(thread_id, None)

        conn = self._create_connection()
        self._local.connection = conn
        with self._lock:
            self._reap_dead_threads()
            self._connections[thread_id] = conn

        logger.debug(
            "Created new thread connection",
            extra={
                "thread_id": thread_id,
                "db_path": str(self.db_path),
                "total_connections": len(self._connections),
            },
        )
        return conn

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection]:
        """Get the connection for the current thread.

        The connection is not closed on exit. Any uncommitted transaction is
        rolled back if the block raises, and the exception propagates.
        """
        conn = self._get_thread_connection()
        try:
            yield conn
        except Exception:
            try:
                conn.rollback()
            except sqlite3.Error:
                pass
            raise

    def close_all(self) -> None:
        """Close all connections in the pool.

        Call this on application shutdown.
        """
        with self._lock:
            for conn in self._connections.values():
                try:
                    conn.close()
                except sqlite3.Error:
                    pass
            self._connections.clear()

        if hasattr(self._local, "connection"):
            self._local.connection = None

        logger.info("All pool connections closed", extra={"db_path": str(self.db_path)})

    def connection_count(self) -> int:
        """Return the number of active connections in the pool."""
        with self._lock:
            return len(self._connections)
