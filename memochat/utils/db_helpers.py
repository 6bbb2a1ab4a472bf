"""Query execution helpers.

Shared by the fact store and the history log. Timing is only switched on in
development or at DEBUG level, so production pays a single ``conn.execute``
per query.
"""

import sqlite3
import time
from typing import Any

from memochat.config import Config
from memochat.utils.logging import get_logger

logger = get_logger(__name__)

# Truncation limits for query and parameter snippets in log records
QUERY_SNIPPET_MAX_LENGTH = 200
PARAMS_SNIPPET_MAX_LENGTH = 100


def execute_with_timing(
    conn: sqlite3.Connection,
    query: str,
    params: tuple[Any, ...] = (),
    *,
    should_log: bool,
    slow_query_threshold_ms: float,
) -> sqlite3.Cursor:
    """Execute a query with optional timing and logging.

    Queries slower than the threshold are logged as warnings. At DEBUG level
    every other query is logged too, with its elapsed time.

    Args:
        conn: SQLite connection
        query: SQL query string
        params: Query parameters
        should_log: Whether to enable timing and logging
        slow_query_threshold_ms: Threshold in ms for slow query warnings

    Returns:
        SQLite cursor with results
    """
    if not should_log:
        return conn.execute(query, params)

    start_time = time.perf_counter()
    cursor = conn.execute(query, params)
    elapsed_ms = (time.perf_counter() - start_time) * 1000

    # Collapse the multi-line SQL into one line
    query_snippet = " ".join(query.split())
    if len(query_snippet) > QUERY_SNIPPET_MAX_LENGTH:
        query_snippet = query_snippet[:QUERY_SNIPPET_MAX_LENGTH] + "..."

    if elapsed_ms >= slow_query_threshold_ms:
        # Params hold user messages, keep them short in logs
        params_snippet = str(params)
        if len(params_snippet) > PARAMS_SNIPPET_MAX_LENGTH:
            params_snippet = params_snippet[:PARAMS_SNIPPET_MAX_LENGTH] + "..."
        logger.warning(
            "Slow query detected",
            extra={
                "query_snippet": query_snippet,
                "params_snippet": params_snippet,
                "elapsed_ms": round(elapsed_ms, 2),
                "threshold_ms": slow_query_threshold_ms,
            },
        )
    elif Config.LOG_LEVEL == "DEBUG":
        logger.debug(
            "Query executed",
            extra={"query_snippet": query_snippet, "elapsed_ms": round(elapsed_ms, 2)},
        )

    return cursor


def init_query_logging() -> tuple[bool, float]:
    """Get query logging configuration from Config.

    Returns:
        Tuple of (should_log_queries, slow_query_threshold_ms)
    """
    should_log = Config.LOG_LEVEL == "DEBUG" or Config.is_development()
    return should_log, Config.SLOW_QUERY_THRESHOLD_MS
