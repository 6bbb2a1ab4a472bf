"""Name fact capture and recall.

The only fact learned from free text is the user's name, from messages like
"my name is Alex". Questions like "what is my name?" are answered straight from
the fact store without calling the model.
"""

import re

NAME_FACT_KEY = "name"

# Letters and spaces only, so "my name is Alex!" captures "Alex"
NAME_PATTERN = re.compile(r"my name is ([A-Za-z ]{1,40})", re.IGNORECASE)
NAME_QUESTION_PATTERN = re.compile(r"what(['’]s| is)? my name\??", re.IGNORECASE)

UNKNOWN_NAME_REPLY = "I don't know your name yet. What should I call you?"


def extract_name(message: str) -> str | None:
    """Return the name stated in the message, if any."""
    match = NAME_PATTERN.search(message)
    if not match:
        return None
    name = match.group(1).strip()
    return name or None


def is_name_question(message: str) -> bool:
    """Check whether the user is asking for their own name."""
    return NAME_QUESTION_PATTERN.search(message) is not None


def name_recall_reply(facts: dict[str, str]) -> str:
    """Build the reply to a name question from the known facts."""
    name = facts.get(NAME_FACT_KEY)
    if name:
        return f"Your name is {name}."
    return UNKNOWN_NAME_REPLY
