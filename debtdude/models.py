"""Data models for DebtDude."""

import logging
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from debtdude.utils.time import as_utc

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """Base model that speaks the camelCase wire format of the mobile client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisPeriod(str, Enum):
    """Trailing windows supported by the analyzer."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: object) -> "AnalysisPeriod":
        """
        Resolve a period name, defaulting to WEEK.

        Names match exactly ("MONTH" is not "month"). Unknown names are not
        an error: they fall back to a one-week window, which is what clients
        have always received for them.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            logger.warning(f"Unrecognized analysis period {value!r}, falling back to week")
            return cls.WEEK


class Transaction(CamelModel):
    """A monetary transaction. Positive amounts were received, negative were spent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    timestamp: datetime
    amount: float
    name: str

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class CounterpartyAggregate(CamelModel):
    """Totals for one counterparty within a set of transactions."""

    name: str
    amount: float = 0.0  # Sum of absolute amounts
    count: int = 0


class AnalysisSummary(CamelModel):
    """Spend/income statistics for a trailing window."""

    period: AnalysisPeriod
    total_spent: float
    total_received: float
    net_amount: float
    transaction_count: int
    top_senders: list[CounterpartyAggregate] = Field(default_factory=list)
    top_receivers: list[CounterpartyAggregate] = Field(default_factory=list)


class DashboardSummary(CamelModel):
    """Headline numbers for the dashboard."""

    total_balance: float
    weekly_spending: float
    weekly_received: float
    net_weekly: float


class Conversation(CamelModel):
    """A chat thread between a user and the assistant."""

    id: str
    title: str = "New Conversation"
    user_id: str | None = None
    created_at: datetime
    last_message: str = "Conversation started"
    last_message_time: datetime


class Message(CamelModel):
    """A single chat message."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    text: str
    is_me: bool  # True when written by the user
    timestamp: datetime
    display_time: str  # HH:MM


# ==================== API REQUESTS / RESPONSES ====================


class AnalyzeRequest(CamelModel):
    """Windowed analysis request."""

    transactions: list[Transaction]
    period: str | None = AnalysisPeriod.WEEK.value

    @field_validator("period", mode="before")
    @classmethod
    def _non_string_period(cls, value: object) -> str | None:
        # Any other JSON value is an unrecognized period, resolved to week later
        return value if isinstance(value, str) else None


class DashboardRequest(CamelModel):
    """Dashboard request."""

    transactions: list[Transaction]


class ConversationCreate(CamelModel):
    """New conversation request."""

    title: str | None = None
    user_id: str | None = None


class MessageCreate(CamelModel):
    """Chat message request."""

    message: str = ""
    user_id: str = ""
    transactions: list[Transaction] | None = None


class MessageExchange(CamelModel):
    """The user's message and the assistant's reply."""

    user_message: Message
    ai_message: Message
