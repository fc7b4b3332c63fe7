"""Windowed spend/income analysis over raw transactions."""

import calendar
from collections.abc import Sequence
from datetime import datetime, timedelta

from debtdude.config import settings
from debtdude.models import (
    AnalysisPeriod,
    AnalysisSummary,
    CounterpartyAggregate,
    DashboardSummary,
    Transaction,
)
from debtdude.utils.time import as_utc, utc_now


def _subtract_months(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping to the last day of the target month."""
    total = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def window_start(period: AnalysisPeriod | str | None, now: datetime) -> datetime:
    """
    Get the (exclusive) start of the trailing window ending at now.

    Unrecognized periods resolve to a one-week window.
    """
    period = AnalysisPeriod.parse(period)

    if period == AnalysisPeriod.DAY:
        return now - timedelta(days=1)
    if period == AnalysisPeriod.MONTH:
        return _subtract_months(now, 1)
    if period == AnalysisPeriod.YEAR:
        return _subtract_months(now, 12)
    return now - timedelta(weeks=1)


def rank_counterparties(
    transactions: Sequence[Transaction], limit: int | None = None
) -> list[CounterpartyAggregate]:
    """
    Rank counterparties by total absolute amount.

    Groups by exact name. Ties keep the order in which each name first
    appeared, since dicts preserve insertion order and sorted() is stable.
    """
    if limit is None:
        limit = settings.top_counterparties

    people: dict[str, CounterpartyAggregate] = {}
    for t in transactions:
        if t.name not in people:
            people[t.name] = CounterpartyAggregate(name=t.name)
        people[t.name].amount += abs(t.amount)
        people[t.name].count += 1

    return sorted(people.values(), key=lambda p: p.amount, reverse=True)[:limit]


def filter_window(
    transactions: Sequence[Transaction], period: AnalysisPeriod | str | None, now: datetime
) -> list[Transaction]:
    """Transactions strictly after the window start, in input order."""
    start = window_start(period, as_utc(now))
    return [t for t in transactions if t.timestamp > start]


def analyze_transactions(
    transactions: Sequence[Transaction],
    period: AnalysisPeriod | str | None = AnalysisPeriod.WEEK,
    now: datetime | None = None,
) -> AnalysisSummary:
    """
    Summarize spending and income over a trailing window.

    Args:
        transactions: Transactions to analyze, in any order
        period: day, week, month or year. Anything else means week.
        now: End of the window. Defaults to the current UTC time.

    Returns:
        AnalysisSummary. Empty input yields zero totals and empty rankings.
    """
    resolved = AnalysisPeriod.parse(period)
    in_window = filter_window(transactions, resolved, now or utc_now())

    received = [t for t in in_window if t.amount > 0]
    spent = [t for t in in_window if t.amount < 0]

    total_spent = sum(abs(t.amount) for t in spent)
    total_received = sum(t.amount for t in received)

    return AnalysisSummary(
        period=resolved,
        total_spent=total_spent,
        total_received=total_received,
        net_amount=total_received - total_spent,
        transaction_count=len(in_window),
        top_senders=rank_counterparties(received),
        top_receivers=rank_counterparties(spent),
    )


def dashboard_summary(transactions: Sequence[Transaction], now: datetime | None = None) -> DashboardSummary:
    """All-time balance plus this week's totals."""
    weekly = analyze_transactions(transactions, AnalysisPeriod.WEEK, now)

    return DashboardSummary(
        total_balance=sum(t.amount for t in transactions),
        weekly_spending=weekly.total_spent,
        weekly_received=weekly.total_received,
        net_weekly=weekly.net_amount,
    )
