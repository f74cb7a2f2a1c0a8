"""Meal logging on top of the persisted health log."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import uuid4
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from goutcare.domain.budget import DailyPurineBudget
from goutcare.domain.logs import LogEntry, LogType, PurineIntakeData, TimeOfDay
from goutcare.domain.meals import AnalysisContext, MealAnalysis
from goutcare.services.budget import compute_daily_budget
from goutcare.services.store import LOGS_KEY, KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class MealLogService:
    """Service that records purine intake and reports the daily budget."""

    store: KeyValueStore
    timezone: ZoneInfo

    def list_logs(self) -> list[LogEntry]:
        """Return all readable log entries, newest first."""
        raw = self.store.get(LOGS_KEY)
        if not isinstance(raw, list):
            return []
        entries: list[LogEntry] = []
        for row in raw:
            try:
                entries.append(LogEntry.model_validate(row))
            except ValidationError:
                _logger.warning("Skipping unreadable log entry")
        return entries

    def log_meal(
        self,
        meal: MealAnalysis,
        time_of_day: TimeOfDay,
        timestamp: datetime | None = None,
    ) -> LogEntry:
        """Create a purine intake entry with its own id for a meal."""
        entry = LogEntry(
            id=str(uuid4()),
            timestamp=timestamp or datetime.now(tz=UTC),
            type=LogType.PURINE_INTAKE,
            data=PurineIntakeData.from_meal(meal, time_of_day),
        )
        raw = self.store.get(LOGS_KEY)
        rows = raw if isinstance(raw, list) else []
        self.store.set(LOGS_KEY, [entry.to_json(), *rows])
        _logger.info(
            "Logged purine intake: meal_id=%s score=%s",
            meal.id,
            meal.total_purine_score,
        )
        return entry

    def today(self) -> date:
        return datetime.now(tz=self.timezone).date()

    def daily_budget(self, goal: int, day: date | None = None) -> DailyPurineBudget:
        """Return the purine budget for a day (today by default)."""
        return compute_daily_budget(
            self.list_logs(), day or self.today(), goal, tz=self.timezone
        )

    def analysis_context(self, goal: int) -> AnalysisContext:
        """Build the analysis context from today's intake."""
        budget = self.daily_budget(goal)
        return AnalysisContext(daily_goal=goal, consumed_so_far=budget.consumed_total)
