"""Rule-based tone classification for incoming messages."""

import re
from enum import Enum


class Tone(str, Enum):
    """Coarse emotional register of a message, used to steer reply style."""

    EMPATHETIC = "empathetic"
    PLAYFUL = "playful"
    NEUTRAL = "neutral"


# Plain substring matches: "down" also matches "download"
EMPATHETIC_PATTERN = re.compile(r"sad|depressed|unhappy|down|not good|worried")
PLAYFUL_PATTERN = re.compile(r"joke|roast|funny|lol|haha")


def detect_tone(message: str) -> Tone:
    """Classify a message. Empathetic keywords win over playful ones."""
    text = message.lower()
    if EMPATHETIC_PATTERN.search(text):
        return Tone.EMPATHETIC
    if PLAYFUL_PATTERN.search(text):
        return Tone.PLAYFUL
    return Tone.NEUTRAL
