"""Row types for the history log."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryEntry:
    """One logged chat exchange. ``time`` is epoch milliseconds."""

    user_id: str
    message: str
    reply: str
    tone: str
    time: int
