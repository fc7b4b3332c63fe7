"""
Response routing for chat messages.

Every message goes through the same gate: questions about the user's own
money are only answered with their transactions in the prompt, and any
failure to produce a reply becomes a refusal rather than partial text.
"""

import asyncio
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from debtdude.config import settings
from debtdude.models import AnalysisPeriod, AnalysisSummary, Transaction
from debtdude.services.analysis import analyze_transactions
from debtdude.services.classifier import requires_grounding
from debtdude.services.llm_client import TextGenerator, generate_text

logger = logging.getLogger(__name__)


class RefusalReason(str, Enum):
    """Why no answer was produced. Internal only; callers see one outcome."""

    MISSING_DATA = "missing_data"
    GENERATOR_UNAVAILABLE = "generator_unavailable"


@dataclass(frozen=True)
class Grounded:
    """Reply generated with the user's transaction summary in context."""

    text: str


@dataclass(frozen=True)
class Ungrounded:
    """Reply generated as general advice, with no transaction context."""

    text: str


@dataclass(frozen=True)
class Refused:
    """No reply may be given."""

    reason: RefusalReason


RoutedResult = Grounded | Ungrounded | Refused


def build_grounded_prompt(message: str, summary: AnalysisSummary, excerpt: Sequence[Transaction]) -> str:
    """Prompt for questions that must be answered from the user's data."""
    summary_json = json.dumps(summary.model_dump(mode="json", by_alias=True), indent=2)
    excerpt_json = json.dumps([t.model_dump(mode="json", by_alias=True) for t in excerpt], indent=2)

    return f"""You are DebtDude, a financial assistant. Based on the user's transaction data and their message: "{message}", provide a helpful response about their finances.

Transaction analysis:
{summary_json}

Raw transactions (last {len(excerpt)}):
{excerpt_json}

Respond in a conversational, helpful manner. Keep responses concise and actionable. Focus specifically on answering their question using the transaction data."""


def build_general_prompt(message: str) -> str:
    """Prompt for general financial questions. Carries no user data."""
    return f"""You are DebtDude, a financial assistant. The user asked: "{message}"

Provide a helpful response about general financial advice, budgeting tips, or financial concepts. Keep responses concise and actionable."""


async def _generate(prompt: str, generator: TextGenerator) -> str | None:
    """Run the generator, mapping every kind of failure to None."""
    # CancelledError is not an Exception and propagates, so a cancelled
    # request still ends with no answer and the task stays cancellable.
    try:
        text = await asyncio.wait_for(generator(prompt), timeout=settings.llm_timeout)
    except TimeoutError:
        logger.error(f"Text generation timed out after {settings.llm_timeout}s")
        return None
    except Exception as e:
        logger.error(f"Text generation failed: {e}")
        return None

    if not text or not text.strip():
        logger.error("Text generation returned no text")
        return None
    return text.strip()


async def route_message(
    message: str,
    transactions: Sequence[Transaction] | None,
    generator: TextGenerator | None = None,
    now: datetime | None = None,
) -> RoutedResult:
    """
    Decide how (and whether) to answer a chat message.

    Args:
        message: The user's message
        transactions: The user's transactions, oldest first. None if not synced.
        generator: Async prompt -> text callable. Defaults to the configured LLM.
        now: End of the analysis window. Defaults to the current UTC time.

    Returns:
        Grounded or Ungrounded with the reply text, or Refused.
    """
    generator = generator or generate_text

    if not requires_grounding(message):
        text = await _generate(build_general_prompt(message), generator)
        if text is None:
            return Refused(RefusalReason.GENERATOR_UNAVAILABLE)
        return Ungrounded(text)

    if not transactions:
        logger.info("Refusing message that needs transaction data: none supplied")
        return Refused(RefusalReason.MISSING_DATA)

    summary = analyze_transactions(transactions, AnalysisPeriod.WEEK, now)
    size = settings.transaction_excerpt_size
    excerpt = list(transactions)[-size:] if size > 0 else []

    text = await _generate(build_grounded_prompt(message, summary, excerpt), generator)
    if text is None:
        return Refused(RefusalReason.GENERATOR_UNAVAILABLE)
    return Grounded(text)
