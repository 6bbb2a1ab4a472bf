"""Unit tests for reply generation."""

from unittest.mock import MagicMock, patch

import pytest

from memochat.agent.generator import (
    EMPATHETIC_REPLY,
    NEUTRAL_REPLY,
    PLAYFUL_REPLY,
    GeneratedReply,
    extract_text_content,
    generate_reply,
    offline_reply,
)
from memochat.agent.prompts import build_prompt
from memochat.agent.tone import Tone
from tests.mocks.gemini import create_mock_ai_message, create_mock_content_parts


class TestOfflineReply:
    """Tests for canned replies without a Gemini credential."""

    def test_neutral_prompt(self) -> None:
        prompt = build_prompt("what's the weather", {}, Tone.NEUTRAL)

        reply = generate_reply(prompt)

        assert reply == GeneratedReply(text=NEUTRAL_REPLY, simulated=True)
        assert reply.text.startswith("Thanks for telling me")

    def test_empathetic_prompt(self) -> None:
        prompt = build_prompt("I'm feeling down", {}, Tone.EMPATHETIC)

        assert generate_reply(prompt) == GeneratedReply(text=EMPATHETIC_REPLY, simulated=True)

    def test_playful_prompt(self) -> None:
        prompt = build_prompt("tell me a joke", {}, Tone.PLAYFUL)

        assert generate_reply(prompt) == GeneratedReply(text=PLAYFUL_REPLY, simulated=True)

    def test_empathetic_checked_before_playful(self) -> None:
        assert offline_reply("playful and empathetic").text == EMPATHETIC_REPLY

    def test_does_not_call_provider(self) -> None:
        with patch("memochat.agent.generator.ChatGoogleGenerativeAI") as mock_llm:
            generate_reply("anything")

        mock_llm.assert_not_called()


class TestLiveReply:
    """Tests for replies from Gemini."""

    def test_returns_model_text(self, mock_gemini_llm: MagicMock) -> None:
        reply = generate_reply("User: hi\nAssistant:")

        assert reply == GeneratedReply(text="Test response from LLM", simulated=False)

    def test_sends_prompt_as_single_human_message(self, mock_gemini_llm: MagicMock) -> None:
        generate_reply("the prompt")

        messages = mock_gemini_llm.return_value.invoke.call_args[0][0]
        assert len(messages) == 1
        assert messages[0].content == "the prompt"

    def test_uses_configured_model_and_key(self, mock_gemini_llm: MagicMock) -> None:
        with patch("memochat.agent.generator.Config.GEMINI_MODEL", "gemini-test"):
            generate_reply("prompt")

        kwargs = mock_gemini_llm.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["google_api_key"] == "test-api-key"

    def test_list_content(self, mock_gemini_llm: MagicMock) -> None:
        mock_gemini_llm.return_value.invoke.return_value = create_mock_ai_message(
            create_mock_content_parts("Hello ", "there")
        )

        assert generate_reply("prompt").text == "Hello there"

    def test_provider_error_becomes_simulated_reply(self, mock_gemini_llm: MagicMock) -> None:
        mock_gemini_llm.return_value.invoke.side_effect = RuntimeError("quota exceeded")

        reply = generate_reply("prompt")

        assert reply == GeneratedReply(text="Error calling Gemini: quota exceeded", simulated=True)

    def test_client_construction_error_becomes_simulated_reply(self, live_mode: None) -> None:
        with patch(
            "memochat.agent.generator.ChatGoogleGenerativeAI",
            side_effect=ValueError("bad key"),
        ):
            reply = generate_reply("prompt")

        assert reply.simulated is True
        assert reply.text == "Error calling Gemini: bad key"


class TestExtractTextContent:
    """Tests for extract_text_content()."""

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("plain", "plain"),
            ({"type": "text", "text": "dict"}, "dict"),
            (["a", {"type": "text", "text": "b"}, {"text": "c"}], "abc"),
            ([{"type": "image", "url": "x"}], ""),
        ],
    )
    def test_formats(self, content: object, expected: str) -> None:
        assert extract_text_content(content) == expected  # type: ignore[arg-type]
