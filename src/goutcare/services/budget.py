"""Daily purine budget aggregation."""

from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from goutcare.domain.budget import BudgetStatus, DailyPurineBudget
from goutcare.domain.logs import LogEntry

APPROACHING_RATIO = 0.75


def compute_daily_budget(
    entries: Iterable[LogEntry],
    day: date,
    goal: int,
    tz: tzinfo | None = None,
) -> DailyPurineBudget:
    """Sum purine intake logged on a local calendar day and classify it."""
    consumed = 0
    count = 0
    for entry in entries:
        intake = entry.purine_intake
        if intake is None:
            continue
        if _local_date(entry.timestamp, tz) != day:
            continue
        consumed += intake.total_purine_score
        count += 1
    return DailyPurineBudget(
        day=day,
        consumed_total=consumed,
        goal=goal,
        status=classify_budget(consumed, goal),
        entry_count=count,
    )


def classify_budget(consumed: int, goal: int) -> BudgetStatus:
    """Classify a running total against the daily goal."""
    if consumed > goal:
        return BudgetStatus.OVER
    if consumed > APPROACHING_RATIO * goal:
        return BudgetStatus.APPROACHING
    return BudgetStatus.UNDER


def _local_date(timestamp: datetime, tz: tzinfo | None) -> date:
    if timestamp.tzinfo is None:
        return timestamp.date()
    return timestamp.astimezone(tz).date()
