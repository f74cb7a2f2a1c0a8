"""Pydantic models for API request payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from goutcare.domain.logs import TimeOfDay


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeTextRequest(_Request):
    """Text meal analysis request."""

    description: str
    use_daily_context: bool = True


class AnalyzeImageRequest(_Request):
    """Photo meal analysis request with base64 image data."""

    image_base64: str
    mime_type: str | None = None
    caption: str | None = None
    use_daily_context: bool = True


class CompareMealsRequest(_Request):
    """Meal comparison request by meal ids."""

    meal_ids: list[str]


class SuggestionRequest(_Request):
    """Meal idea search request."""

    query: str


class MealPlanRequest(_Request):
    """Meal plan request."""

    prompt: str


class LogMealRequest(_Request):
    """Request to log an analyzed meal as purine intake."""

    meal_id: str
    time_of_day: TimeOfDay
    timestamp: datetime | None = None
