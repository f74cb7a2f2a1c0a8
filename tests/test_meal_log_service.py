"""Tests for meal logging."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from goutcare.domain.budget import BudgetStatus
from goutcare.domain.logs import LogType, TimeOfDay
from goutcare.services.logs import MealLogService
from goutcare.services.store import LOGS_KEY, InMemoryKeyValueStore
from tests.conftest import make_meal


def _service(store: InMemoryKeyValueStore | None = None) -> MealLogService:
    return MealLogService(store or InMemoryKeyValueStore(), timezone=ZoneInfo("UTC"))


def test_log_meal_prepends_entry_with_its_own_id() -> None:
    service = _service()
    meal = make_meal("meal-1", score=40)

    first = service.log_meal(meal, TimeOfDay.BREAKFAST)
    second = service.log_meal(meal, TimeOfDay.DINNER)

    logs = service.list_logs()
    assert [entry.id for entry in logs] == [second.id, first.id]
    assert first.id != meal.id
    assert first.type == LogType.PURINE_INTAKE
    assert logs[1].purine_intake.time_of_day == TimeOfDay.BREAKFAST
    assert logs[1].purine_intake.id == "meal-1"


def test_logs_keep_other_entry_kinds() -> None:
    store = InMemoryKeyValueStore()
    store.set(
        LOGS_KEY,
        [
            {
                "id": "s1",
                "timestamp": "2026-03-14T08:00:00+00:00",
                "type": "symptom",
                "data": {"painLevel": 4},
            }
        ],
    )
    service = _service(store)

    service.log_meal(make_meal("m"), TimeOfDay.LUNCH)

    logs = service.list_logs()
    assert [entry.type for entry in logs] == [LogType.PURINE_INTAKE, LogType.SYMPTOM]
    assert logs[1].purine_intake is None
    assert logs[1].data == {"painLevel": 4}


def test_daily_budget_counts_todays_intake() -> None:
    service = _service()
    now = datetime.now(tz=UTC)
    service.log_meal(make_meal("a", score=70), TimeOfDay.LUNCH, timestamp=now)
    service.log_meal(make_meal("b", score=50), TimeOfDay.DINNER, timestamp=now)
    service.log_meal(
        make_meal("c", score=90), TimeOfDay.DINNER, timestamp=now - timedelta(days=2)
    )

    budget = service.daily_budget(150)
    context = service.analysis_context(150)

    assert budget.consumed_total == 120
    assert budget.status == BudgetStatus.APPROACHING
    assert context.consumed_so_far == 120
    assert context.daily_goal == 150


def test_unreadable_entries_are_skipped() -> None:
    store = InMemoryKeyValueStore()
    store.set(LOGS_KEY, [{"id": "x"}, "garbage"])

    assert _service(store).list_logs() == []
