"""Advisory generators: daily risk forecast, meal ideas and meal plans."""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import ValidationError

from goutcare.domain.advice import (
    MealPlan,
    MealSuggestion,
    MealSuggestionList,
    PlannedMeal,
    RiskForecast,
)
from goutcare.domain.errors import AnalysisUnavailableError, MalformedResponseError
from goutcare.domain.logs import LogEntry, LogType
from goutcare.services.analysis import GenerationClient
from goutcare.services.preferences import Preferences

_logger = logging.getLogger(__name__)

QUOTA_EXCEEDED_STATUS = 429
RECENT_LOG_LIMIT = 30

FORECAST_INSTRUCTIONS = (
    "You are a health analyst AI. Follow the output format precisely."
)

FORECAST_PROMPT = """Based on the user's health profile, generate a personalized gout risk advisor for today.
The output must be structured exactly as follows, with each section on a new line:
RISK_LEVEL: [Assess today's risk as 'Low', 'Moderate', or 'High']
SUMMARY: [Summarize the key reasons for the risk assessment in one sentence]
FORECAST: [Provide 1-2 specific, actionable pieces of advice for today. Use a positive and supportive tone.]

Analyze patterns. If a symptom log includes high pain (>6) along with 'swelling' or 'redness', the risk is automatically 'High'. If the user often logs poor sleep or high stress before a flare-up, mention it as a possible personal trigger. If hydration is low and they ate high-purine food, or if there is any alcohol log, the risk is 'Moderate' or 'High'. If they missed medication, risk increases. If they are eating well and staying hydrated, risk is 'Low'. Consider the user's profile (age, gender, BMI) when available.
Do not give medical advice. Offer gentle tips linked to their data.

Health Profile Summary:
User Profile: {profile}
Recent Logs: {logs}
"""

FORECAST_QUOTA_EXCEEDED = RiskForecast(
    risk_label="Quota Exceeded",
    summary="API request limit has been exceeded.",
    forecast="Please try again after a while by pressing the refresh button.",
)

FORECAST_ERROR = RiskForecast(
    risk_label="Error",
    summary="Sorry, we couldn't generate a forecast at this time.",
    forecast="Please try again after a while by pressing the refresh button.",
)

_IDEA_PROPERTIES: dict[str, object] = {
    "mealName": {"type": "string"},
    "description": {"type": "string"},
    "estimatedPurineScore": {"type": "integer", "minimum": 0, "maximum": 100},
    "riskLevel": {"type": "string", "enum": ["low", "caution", "high"]},
}

MEAL_SUGGESTIONS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "suggestions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    **_IDEA_PROPERTIES,
                    "keyIngredients": {"type": "array", "items": {"type": "string"}},
                },
                "required": [*_IDEA_PROPERTIES, "keyIngredients"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["suggestions"],
    "additionalProperties": False,
}

MEAL_PLAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "meals": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    **_IDEA_PROPERTIES,
                    "ingredients": {"type": "array", "items": {"type": "string"}},
                    "recipe": {"type": "string"},
                },
                "required": [*_IDEA_PROPERTIES, "ingredients", "recipe"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["meals"],
    "additionalProperties": False,
}

SUGGESTION_INSTRUCTIONS = (
    "You are an expert nutritionist specializing in gout-friendly diets. "
    "Provide 3-5 diverse, practical, gout-friendly meal suggestions based on "
    "the user's query. Follow the requested JSON schema precisely and do not "
    "include markdown or any other formatting."
)

PLANNER_INSTRUCTIONS = (
    "You are an expert nutritionist and chef specializing in gout-friendly "
    "diets. Generate creative, delicious, low-purine meal plans based on the "
    "user's request, using any ingredients they mention. Keep the plans "
    "practical and easy to follow. Follow the requested JSON schema precisely "
    "and do not include markdown or any other formatting."
)


@dataclass
class AdviceService:
    """Service for advisory text that degrades to fallbacks on failure."""

    client: GenerationClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def generate_forecast(
        self, logs: Sequence[LogEntry], preferences: Preferences
    ) -> RiskForecast:
        """Return today's gout risk forecast from recent logs."""
        prompt = FORECAST_PROMPT.format(
            profile=_profile_summary(preferences),
            logs=json.dumps(
                [_summarize_log(entry) for entry in logs[:RECENT_LOG_LIMIT]],
                ensure_ascii=False,
            ),
        )
        try:
            text = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=FORECAST_INSTRUCTIONS,
                prompt=prompt,
            )
        except AnalysisUnavailableError as exc:
            _logger.warning("Forecast generation failed (status=%s)", exc.status_code)
            if exc.status_code == QUOTA_EXCEEDED_STATUS:
                return FORECAST_QUOTA_EXCEEDED
            return FORECAST_ERROR
        except MalformedResponseError:
            _logger.warning("Forecast generation returned no text")
            return FORECAST_ERROR
        return parse_forecast(text)

    async def suggest_meals(self, query: str) -> list[MealSuggestion]:
        """Return gout-friendly meal ideas, or an empty list on failure."""
        if not query.strip():
            return []
        raw = await self._generate_structured(
            instructions=SUGGESTION_INSTRUCTIONS,
            prompt=(
                "Recommend some meal ideas for a gout patient. "
                f'User\'s request: "{query.strip()}"'
            ),
            schema=MEAL_SUGGESTIONS_SCHEMA,
            schema_name="meal_suggestions",
        )
        if raw is None:
            return []
        try:
            return MealSuggestionList.model_validate_json(raw).suggestions
        except ValidationError:
            _logger.warning("Meal suggestions failed validation")
            return []

    async def plan_meals(self, request: str) -> list[PlannedMeal]:
        """Return a low-purine meal plan, or an empty list on failure."""
        if not request.strip():
            return []
        raw = await self._generate_structured(
            instructions=PLANNER_INSTRUCTIONS,
            prompt=request.strip(),
            schema=MEAL_PLAN_SCHEMA,
            schema_name="meal_plan",
        )
        if raw is None:
            return []
        try:
            return MealPlan.model_validate_json(raw).meals
        except ValidationError:
            _logger.warning("Meal plan failed validation")
            return []

    async def _generate_structured(
        self,
        *,
        instructions: str,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
    ) -> str | None:
        try:
            return await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=instructions,
                prompt=prompt,
                schema=schema,
                schema_name=schema_name,
            )
        except (AnalysisUnavailableError, MalformedResponseError):
            _logger.exception("Generation failed for %s", schema_name)
            return None


def parse_forecast(text: str) -> RiskForecast:
    """Parse labelled forecast lines, each located independently."""
    lines = [line.strip() for line in text.splitlines()]
    return RiskForecast(
        risk_label=_labelled_value(lines, "RISK_LEVEL:") or "Unknown",
        summary=_labelled_value(lines, "SUMMARY:") or "Failed to load forecast.",
        forecast=_labelled_value(lines, "FORECAST:") or "",
    )


def _labelled_value(lines: list[str], label: str) -> str | None:
    for line in lines:
        if line.startswith(label):
            return line.removeprefix(label).strip()
    return None


def _profile_summary(preferences: Preferences) -> str:
    if not (
        preferences.gender
        and preferences.birth_year
        and preferences.height_cm
        and preferences.weight_kg
    ):
        return "User profile not provided."
    age = datetime.now(tz=UTC).year - preferences.birth_year
    bmi = preferences.weight_kg / ((preferences.height_cm / 100) ** 2)
    return f"User is a {age}-year-old {preferences.gender}, with a BMI of {bmi:.1f}."


def _summarize_log(entry: LogEntry) -> dict[str, object]:
    summary: dict[str, object] = {
        "type": entry.type.value,
        "date": entry.timestamp.isoformat(),
    }
    intake = entry.purine_intake
    if intake is not None:
        summary["meal"] = intake.meal_name[:30]
        summary["purineScore"] = intake.total_purine_score
        return summary
    data = entry.data if isinstance(entry.data, dict) else {}
    if entry.type == LogType.SYMPTOM:
        summary["pain"] = data.get("painLevel")
        summary["details"] = data.get("symptoms")
    else:
        summary["data"] = data
    return summary
