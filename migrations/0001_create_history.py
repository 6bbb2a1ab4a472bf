"""
Create the history table for logged chat exchanges.

Databases from earlier deployments already have this table with the same
columns, so the CREATE is a no-op for them. ``time`` is epoch milliseconds.
"""

from yoyo import step

steps = [
    step(
        """
        CREATE TABLE IF NOT EXISTS history (
            user_id TEXT,
            message TEXT,
            reply TEXT,
            tone TEXT,
            time INTEGER
        )
        """,
        "DROP TABLE IF EXISTS history",
    ),
    step(
        "CREATE INDEX IF NOT EXISTS idx_history_user_time ON history(user_id, time)",
        "DROP INDEX IF EXISTS idx_history_user_time",
    ),
]
