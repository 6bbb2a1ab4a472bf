"""Mock helpers for Gemini LLM responses."""

from typing import Any
from unittest.mock import MagicMock


def create_mock_ai_message(content: str | list[Any] = "Test response") -> MagicMock:
    """Create a mock AIMessage.

    Args:
        content: Message content, a string or a list of content parts

    Returns:
        Mock AIMessage object
    """
    msg = MagicMock()
    msg.content = content
    msg.tool_calls = []
    return msg


def create_mock_content_parts(*texts: str) -> list[dict[str, Any]]:
    """Build Gemini-style list content, with a non-text part mixed in."""
    parts: list[dict[str, Any]] = [{"type": "text", "text": text} for text in texts]
    parts.append({"type": "thinking", "thinking": "internal"})
    return parts
