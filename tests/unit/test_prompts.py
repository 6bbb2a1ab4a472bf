"""Unit tests for prompt assembly."""

from unittest.mock import patch

import pytest

from memochat.agent.prompts import NO_FACTS_TEXT, TONE_GUIDANCE, build_prompt
from memochat.agent.tone import Tone


class TestBuildPrompt:
    """Tests for build_prompt()."""

    def test_line_order(self) -> None:
        """Persona, facts, guidance, message and assistant marker, one per line."""
        prompt = build_prompt("hello", {}, Tone.NEUTRAL, assistant_name="Riyaz Assistant")

        assert prompt.split("\n") == [
            "You are a helpful chatbot named 'Riyaz Assistant'. Keep replies concise.",
            NO_FACTS_TEXT,
            "Respond neutrally and helpfully.",
            "User: hello",
            "Assistant:",
        ]

    def test_facts_serialized_compactly(self) -> None:
        prompt = build_prompt("hi", {"name": "Alex", "city": "Brno"}, Tone.NEUTRAL)

        assert 'Known facts about the USER: {"name":"Alex","city":"Brno"}' in prompt
        assert NO_FACTS_TEXT not in prompt

    def test_non_ascii_facts_kept_readable(self) -> None:
        prompt = build_prompt("hi", {"name": "Zoë"}, Tone.NEUTRAL)

        assert '{"name":"Zoë"}' in prompt

    @pytest.mark.parametrize("tone", list(Tone))
    def test_tone_guidance(self, tone: Tone) -> None:
        prompt = build_prompt("hi", {}, tone)

        assert TONE_GUIDANCE[tone] in prompt

    def test_guidance_names_its_tone(self) -> None:
        """Empathetic and playful hints contain their own label."""
        assert "empathetic" in TONE_GUIDANCE[Tone.EMPATHETIC]
        assert "playful" in TONE_GUIDANCE[Tone.PLAYFUL]
        assert "empathetic" not in TONE_GUIDANCE[Tone.NEUTRAL]
        assert "playful" not in TONE_GUIDANCE[Tone.NEUTRAL]

    def test_message_included_verbatim(self) -> None:
        message = "line one\nline two {with braces}"
        prompt = build_prompt(message, {}, Tone.NEUTRAL)

        assert f"User: {message}\nAssistant:" in prompt

    def test_assistant_name_from_config(self) -> None:
        with patch("memochat.agent.prompts.Config.ASSISTANT_NAME", "Testy"):
            prompt = build_prompt("hi", {}, Tone.NEUTRAL)

        assert prompt.startswith("You are a helpful chatbot named 'Testy'.")
