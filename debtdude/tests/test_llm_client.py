"""Tests for the LLM client wrapper."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from debtdude.services.llm_client import GenerationError, _get_api_base, _get_model_name, generate_text


def make_response(content):
    """Build an object shaped like a litellm completion response."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestProviderSelection:
    """Test model and endpoint selection per provider."""

    @pytest.mark.parametrize(
        "provider, expected_model, expected_base",
        [
            ("ollama", "ollama/llama3.2", "http://localhost:11434"),
            ("openai", "gpt-4o-mini", None),
            ("gemini", "gemini/gemini-1.5-flash", None),
        ],
    )
    def test_model_and_base(self, provider, expected_model, expected_base):
        """Should pick the model name and API base for the provider."""
        with patch("debtdude.services.llm_client.settings") as mock_settings:
            mock_settings.llm_provider = provider
            mock_settings.ollama_model = "llama3.2"
            mock_settings.ollama_host = "http://localhost:11434"
            mock_settings.openai_model = "gpt-4o-mini"
            mock_settings.gemini_model = "gemini-1.5-flash"

            assert _get_model_name() == expected_model
            assert _get_api_base() == expected_base


class TestGenerateText:
    """Test reply extraction and error mapping."""

    @pytest.mark.asyncio
    async def test_returns_stripped_text(self):
        """Should return the reply text without surrounding whitespace."""
        with patch(
            "debtdude.services.llm_client.acompletion", new=AsyncMock(return_value=make_response("  Hi there \n"))
        ) as mock_completion:
            text = await generate_text("Say hi")

        assert text == "Hi there"
        kwargs = mock_completion.await_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "Say hi"}]
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 500

    @pytest.mark.asyncio
    async def test_call_failure_raises_generation_error(self):
        """Should wrap call failures in GenerationError."""
        with patch("debtdude.services.llm_client.acompletion", new=AsyncMock(side_effect=ConnectionError("down"))):
            with pytest.raises(GenerationError, match="LLM call failed"):
                await generate_text("Say hi")

    @pytest.mark.asyncio
    async def test_malformed_response_raises_generation_error(self):
        """Should raise GenerationError for a response without choices."""
        with patch("debtdude.services.llm_client.acompletion", new=AsyncMock(return_value=SimpleNamespace(choices=[]))):
            with pytest.raises(GenerationError, match="Malformed"):
                await generate_text("Say hi")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "  "])
    async def test_empty_response_raises_generation_error(self, content):
        """Should raise GenerationError for empty content."""
        with patch("debtdude.services.llm_client.acompletion", new=AsyncMock(return_value=make_response(content))):
            with pytest.raises(GenerationError, match="empty"):
                await generate_text("Say hi")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
