"""Domain models for the daily purine budget."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class BudgetStatus(StrEnum):
    """Running total relative to the daily goal."""

    UNDER = "under"
    APPROACHING = "approaching"
    OVER = "over"


@dataclass(frozen=True)
class DailyPurineBudget:
    """Purine intake consumed on one calendar day against a goal."""

    day: date
    consumed_total: int
    goal: int
    status: BudgetStatus
    entry_count: int = 0

    @property
    def remaining(self) -> int:
        return max(self.goal - self.consumed_total, 0)
