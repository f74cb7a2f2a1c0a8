"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from goutcare.adapters.openai_generation_client import OpenAIGenerationClient
from goutcare.adapters.supabase_key_value_store import SupabaseKeyValueStore
from goutcare.config import Settings, parse_timezone
from goutcare.services.advice import AdviceService
from goutcare.services.analysis import MealAnalysisService
from goutcare.services.history import MealHistoryService
from goutcare.services.logs import MealLogService
from goutcare.services.preferences import PreferencesService
from goutcare.services.store import KeyValueStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    analysis_service: MealAnalysisService
    advice_service: AdviceService
    history_service: MealHistoryService
    meal_log_service: MealLogService
    preferences_service: PreferencesService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    store = SupabaseKeyValueStore(
        client=supabase_client, table=resolved_settings.supabase_table
    )
    openai_client = OpenAIGenerationClient.create(resolved_settings.openai_api_key)
    analysis_service = MealAnalysisService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    advice_service = AdviceService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        analysis_service=analysis_service,
        advice_service=advice_service,
        history_service=MealHistoryService(store, cap=resolved_settings.history_cap),
        meal_log_service=MealLogService(
            store, timezone=parse_timezone(resolved_settings.timezone)
        ),
        preferences_service=PreferencesService(
            store,
            default_daily_purine_goal=resolved_settings.default_daily_purine_goal,
        ),
        close_resources=close_resources,
    )
