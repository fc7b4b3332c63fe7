"""LLM client for free-text chat replies."""

import logging
from collections.abc import Awaitable, Callable

from litellm import acompletion

from debtdude.config import settings

logger = logging.getLogger(__name__)

# Anything that turns a prompt into reply text, raising on failure
TextGenerator = Callable[[str], Awaitable[str]]


class GenerationError(Exception):
    """Raised when the LLM produces no usable reply."""

    pass


def _get_model_name() -> str:
    """Get the appropriate model name based on provider."""
    if settings.llm_provider == "openai":
        return settings.openai_model
    if settings.llm_provider == "gemini":
        return f"gemini/{settings.gemini_model}"
    return f"ollama/{settings.ollama_model}"


def _get_api_base() -> str | None:
    """Get the API base URL for Ollama."""
    if settings.llm_provider == "ollama":
        return settings.ollama_host
    return None


async def generate_text(prompt: str) -> str:
    """
    Send a single-turn prompt to the configured LLM.

    Args:
        prompt: Full prompt text

    Returns:
        The reply text, stripped

    Raises:
        GenerationError: If the call fails or the response has no text
    """
    try:
        response = await acompletion(
            model=_get_model_name(),
            messages=[{"role": "user", "content": prompt}],
            api_base=_get_api_base(),
            api_key=settings.active_api_key,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout,
        )
    except Exception as e:
        raise GenerationError(f"LLM call failed: {e}") from e

    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as e:
        raise GenerationError(f"Malformed LLM response: {e}") from e

    if not content or not content.strip():
        raise GenerationError("LLM returned an empty response")

    logger.debug(f"LLM reply: {len(content)} chars from {_get_model_name()}")
    return content.strip()
