"""Reply generation with Gemini, or canned replies when offline.

Without GEMINI_API_KEY the service still answers: one of three fixed replies is
picked by the tone words in the prompt's guidance line. Provider errors are
not raised. They come back as a simulated reply carrying the error text.
"""

from dataclasses import dataclass
from typing import Any

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from memochat.config import Config
from memochat.utils.logging import get_logger

logger = get_logger(__name__)

PROMPT_LOG_SNIPPET_LENGTH = 80

EMPATHETIC_REPLY = "I'm sorry you're feeling that way — I hear you. Tell me more, and I'll help."
PLAYFUL_REPLY = "Haha nice! You're on fire — tell me more and I'll roast you gently 😉"
NEUTRAL_REPLY = "Thanks for telling me. I can help with that — what would you like to try next?"


@dataclass(frozen=True)
class GeneratedReply:
    """Reply text and whether it came from somewhere other than the live model."""

    text: str
    simulated: bool


def extract_text_content(content: str | list[Any] | dict[str, Any]) -> str:
    """Extract text from message content, handling the formats Gemini returns."""
    if isinstance(content, str):
        return content

    if isinstance(content, dict):
        return str(content.get("text", ""))

    if isinstance(content, list):
        text_parts = []
        for part in content:
            if isinstance(part, str):
                text_parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                text_parts.append(str(part.get("text", "")))
        return "".join(text_parts)

    return str(content)


def offline_reply(prompt: str) -> GeneratedReply:
    """Pick a canned reply by the tone words present in the prompt."""
    if "empathetic" in prompt:
        text = EMPATHETIC_REPLY
    elif "playful" in prompt:
        text = PLAYFUL_REPLY
    else:
        text = NEUTRAL_REPLY
    return GeneratedReply(text=text, simulated=True)


def create_chat_model(api_key: str) -> ChatGoogleGenerativeAI:
    """Create the Gemini chat model client."""
    return ChatGoogleGenerativeAI(
        model=Config.GEMINI_MODEL,
        google_api_key=api_key,
        temperature=Config.GEMINI_TEMPERATURE,
    )


def generate_reply(prompt: str) -> GeneratedReply:
    """Generate a reply for a fully built prompt.

    The mode is decided on every call from Config.GEMINI_API_KEY.

    Args:
        prompt: Prompt text from build_prompt()

    Returns:
        GeneratedReply. simulated is False only for a successful live call.
    """
    api_key = Config.GEMINI_API_KEY
    if not api_key:
        logger.debug("No Gemini API key configured, using offline reply")
        return offline_reply(prompt)

    try:
        model = create_chat_model(api_key)
        logger.info(
            "Calling Gemini",
            extra={
                "model": Config.GEMINI_MODEL,
                "prompt_snippet": prompt[:PROMPT_LOG_SNIPPET_LENGTH] + "...",
                "prompt_length": len(prompt),
            },
        )
        response = model.invoke([HumanMessage(content=prompt)])
        text = extract_text_content(response.content)
    except Exception as e:
        # Any provider failure degrades to a simulated reply
        logger.error(
            "Gemini call failed",
            extra={"model": Config.GEMINI_MODEL, "error": str(e)},
            exc_info=True,
        )
        return GeneratedReply(text=f"Error calling Gemini: {e}", simulated=True)

    logger.debug("Gemini reply received", extra={"reply_length": len(text)})
    return GeneratedReply(text=text, simulated=False)
