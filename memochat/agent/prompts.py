"""Prompt assembly for the reply model.

The prompt is plain text, one part per line: persona, known facts, tone
guidance, the user's message and an open assistant turn.
"""

import json

from memochat.agent.tone import Tone
from memochat.config import Config

NO_FACTS_TEXT = "No known facts about the user yet."

# Each hint names its tone; the offline generator keys on these words
TONE_GUIDANCE = {
    Tone.EMPATHETIC: "Respond in an empathetic way, warm and short.",
    Tone.PLAYFUL: "Respond playful and light-hearted.",
    Tone.NEUTRAL: "Respond neutrally and helpfully.",
}


def get_persona(assistant_name: str | None = None) -> str:
    """Persona sentence naming the assistant."""
    name = assistant_name or Config.ASSISTANT_NAME
    return f"You are a helpful chatbot named '{name}'. Keep replies concise."


def format_facts(facts: dict[str, str]) -> str:
    """Render known facts as compact JSON, or the no-facts sentence."""
    if not facts:
        return NO_FACTS_TEXT
    serialized = json.dumps(facts, ensure_ascii=False, separators=(",", ":"))
    return f"Known facts about the USER: {serialized}"


def build_prompt(
    message: str,
    facts: dict[str, str],
    tone: Tone,
    assistant_name: str | None = None,
) -> str:
    """Compose the full prompt for one chat turn.

    Args:
        message: The user's message, included verbatim
        facts: Known facts about the user
        tone: Detected tone of the message
        assistant_name: Persona name override, defaults to Config.ASSISTANT_NAME

    Returns:
        Prompt text ending with the "Assistant:" marker
    """
    lines = [
        get_persona(assistant_name),
        format_facts(facts),
        TONE_GUIDANCE[tone],
        f"User: {message}",
        "Assistant:",
    ]
    return "\n".join(lines)
