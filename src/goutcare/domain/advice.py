"""Models for advisory generation results."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from goutcare.domain.meals import RiskLevel


@dataclass(frozen=True)
class RiskForecast:
    """Parsed daily gout risk forecast."""

    risk_label: str
    summary: str
    forecast: str

    @property
    def risk_level(self) -> RiskLevel | None:
        """Return the canonical risk level when the label names one."""
        label = self.risk_label.strip().lower()
        if label == "moderate":
            return RiskLevel.CAUTION
        try:
            return RiskLevel(label)
        except ValueError:
            return None


class _Idea(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    meal_name: str
    description: str
    estimated_purine_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel


class MealSuggestion(_Idea):
    """Gout-friendly meal idea."""

    key_ingredients: list[str]


class PlannedMeal(_Idea):
    """Planned meal with a simple recipe."""

    ingredients: list[str]
    recipe: str


class MealSuggestionList(BaseModel):
    """Structured output wrapper for meal suggestions."""

    suggestions: list[MealSuggestion]


class MealPlan(BaseModel):
    """Structured output wrapper for a meal plan."""

    meals: list[PlannedMeal]
