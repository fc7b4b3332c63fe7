"""Configuration management for DebtDude."""

import logging
from typing import Annotated, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_GROUNDING_KEYWORDS = [
    "balance",
    "spend",
    "spent",
    "expense",
    "income",
    "receive",
    "received",
    "transaction",
    "money",
    "payment",
    "transfer",
    "budget",
    "financial",
    "analysis",
    "summary",
    "total",
    "amount",
    "cost",
    "price",
    "bill",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM Configuration
    llm_provider: Literal["ollama", "openai", "gemini"] = "ollama"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 500
    llm_timeout: float = 30.0

    # Response routing
    grounding_keywords: Annotated[list[str], NoDecode] = DEFAULT_GROUNDING_KEYWORDS
    transaction_excerpt_size: int = 10
    top_counterparties: int = 5

    # Development mode
    dev_mode: bool = True
    log_level: str = "INFO"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_origins: Annotated[list[str], NoDecode] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # LLM_PROVIDER and llm_provider both work
        extra="ignore",  # Ignore extra environment variables
    )

    @field_validator("grounding_keywords", "cors_origins", mode="before")
    @classmethod
    def _split_csv(cls, value: object) -> list[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if value is None:
            return []
        return list(value)

    @property
    def active_api_key(self) -> str | None:
        """API key for the selected provider, if it needs one."""
        if self.llm_provider == "openai":
            return self.openai_api_key or None
        if self.llm_provider == "gemini":
            return self.gemini_api_key or None
        return None

    def log_config(self) -> None:
        """Log current configuration with sensitive values redacted."""

        def _redact(key: str) -> str:
            if not key:
                return "not set"
            return f"set ({key[:4]}...{key[-2:]})"

        logger.info("LLM provider:        %s", self.llm_provider)
        logger.info("OpenAI API key:      %s", _redact(self.openai_api_key))
        logger.info("OpenAI model:        %s", self.openai_model)
        logger.info("Ollama host:         %s", self.ollama_host)
        logger.info("Ollama model:        %s", self.ollama_model)
        logger.info("Gemini API key:      %s", _redact(self.gemini_api_key))
        logger.info("Gemini model:        %s", self.gemini_model)
        logger.info("Grounding keywords:  %d terms", len(self.grounding_keywords))
        logger.info("Dev mode:            %s", self.dev_mode)
        logger.info("API host:            %s:%s", self.api_host, self.api_port)


# Global settings instance
settings = Settings()
