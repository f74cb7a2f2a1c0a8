"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import datetime

import pytest

from goutcare.config import Settings, parse_timezone
from goutcare.containers import AppContainer
from goutcare.domain.logs import LogEntry, LogType, PurineIntakeData, TimeOfDay
from goutcare.domain.meals import FoodItem, MealAnalysis, PurineLevel, RiskLevel
from goutcare.services.advice import AdviceService
from goutcare.services.analysis import GenerationClient, MealAnalysisService
from goutcare.services.history import MealHistoryService
from goutcare.services.logs import MealLogService
from goutcare.services.preferences import PreferencesService
from goutcare.services.store import InMemoryKeyValueStore


def analysis_payload(**overrides: object) -> dict[str, object]:
    """Return a valid structured analysis payload."""
    payload: dict[str, object] = {
        "mealName": "Toast and milk",
        "mealDescription": "Two slices of white bread with a glass of milk",
        "totalPurineScore": 12,
        "overallRiskLevel": "low",
        "overallSummary": "A low-purine breakfast.",
        "items": [
            {
                "foodName": "White bread",
                "purineLevel": "low",
                "purineAmount": "10-20mg/100g",
                "explanation": "Refined grains are low in purines.",
            },
            {
                "foodName": "Milk",
                "purineLevel": "low",
                "purineAmount": "0-5mg/100g",
                "explanation": "Dairy is associated with lower gout risk.",
            },
        ],
        "recommendations": "Keep choosing low-fat dairy.",
        "alternatives": [],
        "dailyImpactAnalysis": None,
    }
    payload.update(overrides)
    return payload


def make_meal(meal_id: str, score: int = 50, **overrides: object) -> MealAnalysis:
    """Build a meal analysis for list and budget tests."""
    fields: dict[str, object] = {
        "id": meal_id,
        "meal_name": f"Meal {meal_id}",
        "meal_description": f"Description of {meal_id}",
        "total_purine_score": score,
        "overall_risk_level": RiskLevel.CAUTION,
        "overall_summary": "Summary",
        "items": [
            FoodItem(
                name="Chicken",
                purine_level=PurineLevel.MEDIUM,
                purine_amount_estimate="100-150mg/100g",
                explanation="Poultry is moderate in purines.",
            )
        ],
        "recommendations": "Smaller portions.",
        "alternatives": ["Tofu"],
    }
    fields.update(overrides)
    return MealAnalysis(**fields)


def intake_entry(
    entry_id: str,
    score: int,
    timestamp: datetime,
    time_of_day: TimeOfDay = TimeOfDay.LUNCH,
) -> LogEntry:
    """Build a purine intake log entry."""
    return LogEntry(
        id=entry_id,
        timestamp=timestamp,
        type=LogType.PURINE_INTAKE,
        data=PurineIntakeData.from_meal(make_meal(f"meal-{entry_id}", score), time_of_day),
    )


@dataclass
class FakeGenerationClient(GenerationClient):
    """Fake generation client returning queued outputs and recording calls."""

    outputs: list[str | Exception] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)

    def queue_json(self, payload: dict[str, object]) -> None:
        self.outputs.append(json.dumps(payload, ensure_ascii=False))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
        image_data_url: str | None = None,
        schema: dict[str, object] | None = None,
        schema_name: str | None = None,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "instructions": instructions,
                "prompt": prompt,
                "image_data_url": image_data_url,
                "schema": schema,
                "schema_name": schema_name,
            }
        )
        output = self.outputs.pop(0) if self.outputs else ""
        if isinstance(output, Exception):
            raise output
        return output


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def generation_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def analysis_service(generation_client: FakeGenerationClient) -> MealAnalysisService:
    return MealAnalysisService(
        client=generation_client,
        model="gpt-5.2",
        reasoning_effort="low",
        store=False,
    )


@pytest.fixture
def advice_service(generation_client: FakeGenerationClient) -> AdviceService:
    return AdviceService(
        client=generation_client,
        model="gpt-5.2",
        reasoning_effort="low",
        store=False,
    )


@pytest.fixture
def container(
    settings: Settings,
    analysis_service: MealAnalysisService,
    advice_service: AdviceService,
) -> AppContainer:
    store = InMemoryKeyValueStore()

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        analysis_service=analysis_service,
        advice_service=advice_service,
        history_service=MealHistoryService(store, cap=settings.history_cap),
        meal_log_service=MealLogService(
            store, timezone=parse_timezone(settings.timezone)
        ),
        preferences_service=PreferencesService(
            store, default_daily_purine_goal=settings.default_daily_purine_goal
        ),
        close_resources=close_resources,
    )
