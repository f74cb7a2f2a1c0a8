"""Meal purine analysis using a structured-generation service."""

import base64
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from pydantic import ValidationError

from goutcare.domain.errors import InvalidInputError, MalformedResponseError
from goutcare.domain.meals import AnalysisContext, MealAnalysis, MealAnalysisDraft

_logger = logging.getLogger(__name__)

MEAL_ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "mealName": {"type": "string"},
        "mealDescription": {"type": "string"},
        "totalPurineScore": {"type": "integer", "minimum": 0, "maximum": 100},
        "overallRiskLevel": {"type": "string", "enum": ["low", "caution", "high"]},
        "overallSummary": {"type": "string"},
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "foodName": {"type": "string"},
                    "purineLevel": {
                        "type": "string",
                        "enum": ["low", "medium", "high", "very_high"],
                    },
                    "purineAmount": {"type": "string"},
                    "explanation": {"type": "string"},
                },
                "required": ["foodName", "purineLevel", "purineAmount", "explanation"],
                "additionalProperties": False,
            },
        },
        "recommendations": {"type": "string"},
        "alternatives": {"type": "array", "items": {"type": "string"}},
        "dailyImpactAnalysis": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": [
        "mealName",
        "mealDescription",
        "totalPurineScore",
        "overallRiskLevel",
        "overallSummary",
        "items",
        "recommendations",
        "alternatives",
        "dailyImpactAnalysis",
    ],
    "additionalProperties": False,
}

_SCORING_GUIDE = (
    "Score the whole meal from 0 to 100, higher meaning riskier for gout. "
    "Use overallRiskLevel 'low' below 40, 'caution' from 40 to 74 and 'high' "
    "from 75. Rate each item as 'low', 'medium', 'high' or 'very_high' and "
    "estimate its purine amount per 100g (e.g. '50-100mg/100g'). "
    "Suggest up to 3 safer alternatives to the highest-purine items. "
    "Set dailyImpactAnalysis to null unless personalization context is given."
)

TEXT_INSTRUCTIONS = (
    "You are a nutritional expert specializing in gout. The user will provide "
    "a text description of a meal. Identify the food items from the text and "
    "provide a comprehensive purine content analysis. The `mealName` field is "
    "a short title and `mealDescription` a detailed summary. "
    f"{_SCORING_GUIDE} Follow the requested JSON schema precisely and do not "
    "include markdown or any other formatting."
)

IMAGE_INSTRUCTIONS = (
    "You are a nutritional expert specializing in gout. The user will provide "
    "an image of a meal and may include additional text for context. Identify "
    "the food items and provide a comprehensive purine content analysis. The "
    "`mealName` field is a short title and `mealDescription` a detailed "
    "summary of every food item you identified. "
    f"{_SCORING_GUIDE} Follow the requested JSON schema precisely and do not "
    "include markdown or any other formatting."
)

COMPARISON_INSTRUCTIONS = (
    "You are a gout management expert and nutritionist. The user will provide "
    "data for two or more meals. Compare them and give a clear, concise "
    "recommendation for which meal is the better choice for a gout patient. "
    "Explain why, referencing purine scores and risk levels. Be encouraging "
    "and supportive."
)

COMPARISON_FALLBACK = "Sorry, an error occurred while comparing the meals."


class GenerationClient(Protocol):
    """Interface for the generative analysis service."""

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
        """Return the raw text produced for a single request."""


@dataclass
class MealAnalysisService:
    """Service that prepares analysis prompts and validates results."""

    client: GenerationClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze_from_text(
        self, description: str, context: AnalysisContext | None = None
    ) -> MealAnalysis:
        """Analyze a meal described in text.

        The returned analysis echoes ``description`` verbatim as its meal
        description, whatever summary the service produced.
        """
        if not description or not description.strip():
            raise InvalidInputError("Meal description must not be empty")
        prompt = (
            "Please analyze the purine content of the following meal for a "
            f'gout patient: "{description.strip()}"'
        ) + _context_prompt(context)
        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            instructions=TEXT_INSTRUCTIONS,
            prompt=prompt,
            schema=MEAL_ANALYSIS_SCHEMA,
            schema_name="meal_analysis",
        )
        draft = parse_meal_analysis(raw)
        meal = _assign_id(draft, meal_description=description)
        _logger.info(
            "Analyzed meal from text: id=%s score=%s",
            meal.id,
            meal.total_purine_score,
        )
        return meal

    async def analyze_from_image(
        self,
        image_bytes: bytes,
        mime_type: str | None = None,
        caption: str | None = None,
        context: AnalysisContext | None = None,
    ) -> MealAnalysis:
        """Analyze a meal photo, keeping the service's own meal description."""
        if not image_bytes:
            raise InvalidInputError("Meal image must not be empty")
        prompt = (
            "Please analyze the purine content of the meal in this image "
            "for a gout patient."
        )
        if caption and caption.strip():
            prompt += (
                f' The user provided this additional information: "{caption.strip()}". '
                "Use it to improve the accuracy of your analysis."
            )
        prompt += _context_prompt(context)
        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            instructions=IMAGE_INSTRUCTIONS,
            prompt=prompt,
            image_data_url=_to_data_url(image_bytes, mime_type),
            schema=MEAL_ANALYSIS_SCHEMA,
            schema_name="meal_analysis",
        )
        meal = _assign_id(parse_meal_analysis(raw))
        _logger.info(
            "Analyzed meal from image: id=%s score=%s",
            meal.id,
            meal.total_purine_score,
        )
        return meal

    async def compare_meals(self, meals: Sequence[MealAnalysis]) -> str:
        """Return a free-text verdict on which meal is the better choice."""
        if len(meals) < 2:  # noqa: PLR2004
            raise InvalidInputError("At least two meals are needed for a comparison")
        summaries = [
            {
                "id": meal.id,
                "mealName": meal.meal_name,
                "description": meal.meal_description,
                "purineScore": meal.total_purine_score,
                "riskLevel": meal.overall_risk_level.value,
            }
            for meal in meals
        ]
        prompt = (
            "For a gout patient, compare the following meals and recommend the "
            "better choice with a clear explanation. Answer with a short, "
            "easy-to-understand summary of one or two paragraphs.\n\n"
            "[Meals to Compare]\n"
            f"{json.dumps(summaries, ensure_ascii=False, indent=2)}"
        )
        try:
            text = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=COMPARISON_INSTRUCTIONS,
                prompt=prompt,
            )
        except MalformedResponseError:
            _logger.warning("Meal comparison returned no usable text")
            return COMPARISON_FALLBACK
        if not text.strip():
            return COMPARISON_FALLBACK
        return text.strip()


def parse_meal_analysis(raw_text: str) -> MealAnalysisDraft:
    """Strictly parse service output into a meal analysis draft."""
    try:
        payload = json.loads(raw_text.strip())
    except json.JSONDecodeError as exc:
        raise MalformedResponseError("Analysis response is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise MalformedResponseError("Analysis response is not a JSON object")
    try:
        return MealAnalysisDraft.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Analysis response failed validation ({exc.error_count()} errors)"
        ) from exc


def _assign_id(
    draft: MealAnalysisDraft, meal_description: str | None = None
) -> MealAnalysis:
    fields = draft.model_dump()
    if meal_description is not None:
        fields["meal_description"] = meal_description
    return MealAnalysis(**fields, id=str(uuid4()))


def _context_prompt(context: AnalysisContext | None) -> str:
    if context is None:
        return ""
    return (
        "\n\n[Important Personalization Context] The user's current status is:\n"
        f"- Daily purine score goal: {context.daily_goal}\n"
        f"- Purine score consumed so far today: {context.consumed_so_far}\n"
        "Based on this, fill 'dailyImpactAnalysis' with how eating this meal "
        "would affect their daily goal: explain whether it would exceed the "
        "goal or leave room, and advise accordingly."
    )


def _to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    resolved = mime_type or _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{resolved};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
