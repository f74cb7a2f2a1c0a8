"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from goutcare.api.models import (
    AnalyzeImageRequest,
    AnalyzeTextRequest,
    CompareMealsRequest,
    LogMealRequest,
    MealPlanRequest,
    SuggestionRequest,
)
from goutcare.app_logging import configure_logging
from goutcare.containers import AppContainer
from goutcare.domain.advice import RiskForecast
from goutcare.domain.budget import DailyPurineBudget
from goutcare.domain.errors import (
    AnalysisUnavailableError,
    InvalidInputError,
    MalformedResponseError,
)
from goutcare.domain.labels import (
    budget_status_label,
    purine_level_label,
    risk_level_label,
)
from goutcare.domain.meals import AnalysisContext, MealAnalysis
from goutcare.services.preferences import Preferences
from goutcare.units import format_fluid, format_weight

NO_IDEAS_MESSAGE = (
    "Sorry, we couldn't come up with meal ideas right now. Please try again."
)
NO_PLAN_MESSAGE = "Sorry, we couldn't create a meal plan right now. Please try again."


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(InvalidInputError)
    async def invalid_input(_request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.exception_handler(MalformedResponseError)
    @app.exception_handler(AnalysisUnavailableError)
    async def no_result(
        _request: Request, exc: MalformedResponseError | AnalysisUnavailableError
    ) -> JSONResponse:
        logger.warning("Analysis produced no result: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "no result", "reason": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/meals/analyze/text")
    async def analyze_text(
        body: AnalyzeTextRequest, request: Request, lang: str | None = None
    ) -> dict[str, object]:
        """Analyze a text meal description and record it in history."""
        state_container: AppContainer = request.app.state.container
        meal = await state_container.analysis_service.analyze_from_text(
            body.description.strip(),
            context=_analysis_context(state_container, body.use_daily_context),
        )
        state_container.history_service.record(meal)
        return _format_meal(meal, lang)

    @app.post("/meals/analyze/image")
    async def analyze_image(
        body: AnalyzeImageRequest, request: Request, lang: str | None = None
    ) -> dict[str, object]:
        """Analyze a meal photo and record it in history."""
        state_container: AppContainer = request.app.state.container
        try:
            image_bytes = base64.b64decode(body.image_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidInputError("Image data is not valid base64") from exc
        meal = await state_container.analysis_service.analyze_from_image(
            image_bytes,
            mime_type=body.mime_type,
            caption=body.caption,
            context=_analysis_context(state_container, body.use_daily_context),
        )
        state_container.history_service.record(meal)
        return _format_meal(meal, lang)

    @app.post("/meals/compare")
    async def compare_meals(
        body: CompareMealsRequest, request: Request
    ) -> dict[str, str]:
        """Compare previously analyzed meals."""
        state_container: AppContainer = request.app.state.container
        meals = [_require_meal(state_container, meal_id) for meal_id in body.meal_ids]
        verdict = await state_container.analysis_service.compare_meals(meals)
        return {"verdict": verdict}

    @app.post("/meals/suggestions")
    async def suggest_meals(
        body: SuggestionRequest, request: Request
    ) -> dict[str, object]:
        """Return gout-friendly meal ideas for a query."""
        state_container: AppContainer = request.app.state.container
        suggestions = await state_container.advice_service.suggest_meals(body.query)
        return {
            "suggestions": [
                item.model_dump(mode="json", by_alias=True) for item in suggestions
            ],
            "message": None if suggestions else NO_IDEAS_MESSAGE,
        }

    @app.post("/meals/plan")
    async def plan_meals(body: MealPlanRequest, request: Request) -> dict[str, object]:
        """Return a low-purine meal plan."""
        state_container: AppContainer = request.app.state.container
        meals = await state_container.advice_service.plan_meals(body.prompt)
        return {
            "meals": [item.model_dump(mode="json", by_alias=True) for item in meals],
            "message": None if meals else NO_PLAN_MESSAGE,
        }

    @app.get("/meals/history")
    async def list_history(
        request: Request, lang: str | None = None
    ) -> dict[str, object]:
        """Return analysis history, most recent first."""
        state_container: AppContainer = request.app.state.container
        history = state_container.history_service.list_history()
        return {"meals": [_format_meal(meal, lang) for meal in history]}

    @app.delete("/meals/history/{meal_id}")
    async def delete_history(meal_id: str, request: Request) -> dict[str, object]:
        """Delete a meal from history; unknown ids are ignored."""
        state_container: AppContainer = request.app.state.container
        history = state_container.history_service.delete(meal_id)
        return {"meals": [meal.to_json() for meal in history]}

    @app.get("/meals/favorites")
    async def list_favorites(
        request: Request, lang: str | None = None
    ) -> dict[str, object]:
        """Return favorite meals."""
        state_container: AppContainer = request.app.state.container
        favorites = state_container.history_service.list_favorites()
        return {"meals": [_format_meal(meal, lang) for meal in favorites]}

    @app.post("/meals/favorites/{meal_id}/toggle")
    async def toggle_favorite(meal_id: str, request: Request) -> dict[str, object]:
        """Toggle favorite membership of a meal from history or favorites."""
        state_container: AppContainer = request.app.state.container
        meal = _require_meal(state_container, meal_id)
        favorites = state_container.history_service.toggle_favorite(meal)
        return {
            "isFavorite": any(item.id == meal_id for item in favorites),
            "meals": [item.to_json() for item in favorites],
        }

    @app.get("/logs")
    async def list_logs(request: Request) -> dict[str, object]:
        """Return persisted log entries."""
        state_container: AppContainer = request.app.state.container
        logs = state_container.meal_log_service.list_logs()
        return {"logs": [entry.to_json() for entry in logs]}

    @app.post("/logs/purine-intake", status_code=status.HTTP_201_CREATED)
    async def log_purine_intake(
        body: LogMealRequest, request: Request
    ) -> dict[str, object]:
        """Log an analyzed meal as purine intake for a meal occasion."""
        state_container: AppContainer = request.app.state.container
        meal = _require_meal(state_container, body.meal_id)
        entry = state_container.meal_log_service.log_meal(
            meal, body.time_of_day, timestamp=body.timestamp
        )
        return entry.to_json()

    @app.get("/budget")
    async def daily_budget(
        request: Request, day: date | None = None, lang: str = "en"
    ) -> dict[str, object]:
        """Return the purine budget for a day (today by default)."""
        state_container: AppContainer = request.app.state.container
        goal = state_container.preferences_service.daily_purine_goal()
        budget = state_container.meal_log_service.daily_budget(goal, day=day)
        return _format_budget(budget, lang)

    @app.get("/forecast")
    async def forecast(request: Request, lang: str = "en") -> dict[str, object]:
        """Return today's gout risk forecast."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.advice_service.generate_forecast(
            state_container.meal_log_service.list_logs(),
            state_container.preferences_service.get(),
        )
        return _format_forecast(result, lang)

    @app.get("/preferences")
    async def get_preferences(request: Request) -> dict[str, object]:
        """Return stored preferences."""
        state_container: AppContainer = request.app.state.container
        preferences = state_container.preferences_service.get()
        return _format_preferences(preferences)

    @app.put("/preferences")
    async def put_preferences(body: Preferences, request: Request) -> dict[str, object]:
        """Replace stored preferences."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.preferences_service.save(body)
        return _format_preferences(saved)

    return app


def _analysis_context(
    container: AppContainer, use_daily_context: bool
) -> AnalysisContext | None:
    """Build today's intake context for an analysis prompt, if requested."""
    if not use_daily_context:
        return None
    goal = container.preferences_service.daily_purine_goal()
    return container.meal_log_service.analysis_context(goal)


def _require_meal(container: AppContainer, meal_id: str) -> MealAnalysis:
    meal = container.history_service.find(meal_id)
    if meal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Meal {meal_id} not found",
        )
    return meal


def _format_meal(meal: MealAnalysis, lang: str | None) -> dict[str, object]:
    """Serialize a meal, adding display labels when a language is requested."""
    body = meal.to_json()
    if lang is None:
        return body
    body["overallRiskLevelLabel"] = risk_level_label(meal.overall_risk_level, lang)
    for row, item in zip(body["items"], meal.items, strict=True):
        row["purineLevelLabel"] = purine_level_label(item.purine_level, lang)
    return body


def _format_preferences(preferences: Preferences) -> dict[str, object]:
    """Serialize preferences with quantities formatted in the chosen units."""
    body = preferences.model_dump(mode="json", by_alias=True)
    body["dailyFluidGoalDisplay"] = format_fluid(
        preferences.daily_fluid_goal, preferences.fluid_unit
    )
    body["weightDisplay"] = (
        format_weight(preferences.weight_kg, preferences.weight_unit)
        if preferences.weight_kg is not None
        else None
    )
    return body


def _format_budget(budget: DailyPurineBudget, lang: str) -> dict[str, object]:
    return {
        "day": budget.day.isoformat(),
        "consumedTotal": budget.consumed_total,
        "goal": budget.goal,
        "remaining": budget.remaining,
        "status": budget.status.value,
        "statusLabel": budget_status_label(budget.status, lang),
        "entryCount": budget.entry_count,
    }


def _format_forecast(result: RiskForecast, lang: str) -> dict[str, object]:
    level = result.risk_level
    return {
        "riskLevel": level.value if level else None,
        "riskLabel": risk_level_label(level, lang) if level else result.risk_label,
        "summary": result.summary,
        "forecast": result.forecast,
    }
