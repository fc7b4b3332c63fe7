"""Tests for settings loading."""

import pytest

from debtdude.config import DEFAULT_GROUNDING_KEYWORDS, Settings


class TestSettings:
    """Test settings loading from the environment."""

    def test_defaults(self, monkeypatch):
        """Should use the built-in defaults."""
        monkeypatch.delenv("GROUNDING_KEYWORDS", raising=False)
        settings = Settings(_env_file=None)

        assert settings.grounding_keywords == DEFAULT_GROUNDING_KEYWORDS
        assert settings.transaction_excerpt_size == 10
        assert settings.top_counterparties == 5

    def test_keywords_from_comma_separated_env(self, monkeypatch):
        """Should split comma-separated trigger terms and drop blanks."""
        monkeypatch.setenv("GROUNDING_KEYWORDS", "rent, savings ,,loan")

        settings = Settings(_env_file=None)

        assert settings.grounding_keywords == ["rent", "savings", "loan"]

    def test_cors_origins_from_env(self, monkeypatch):
        """Should split comma-separated CORS origins."""
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000,https://app.example.com")

        settings = Settings(_env_file=None)

        assert settings.cors_origins == ["http://localhost:3000", "https://app.example.com"]

    @pytest.mark.parametrize(
        "provider, key_field, expected",
        [("openai", "openai_api_key", "sk-test"), ("gemini", "gemini_api_key", "g-test"), ("ollama", None, None)],
    )
    def test_active_api_key(self, provider, key_field, expected):
        """Should return the key for the selected provider."""
        overrides = {key_field: expected} if key_field else {}
        settings = Settings(_env_file=None, llm_provider=provider, **overrides)

        assert settings.active_api_key == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
