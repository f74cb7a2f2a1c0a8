"""Domain models for meal purine analysis."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PurineLevel(StrEnum):
    """Purine content rating of a single food item."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class RiskLevel(StrEnum):
    """Overall purine risk rating of a meal."""

    LOW = "low"
    CAUTION = "caution"
    HIGH = "high"


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class FoodItem(_Record):
    """One identified component of a meal."""

    name: str = Field(alias="foodName", min_length=1)
    purine_level: PurineLevel
    purine_amount_estimate: str = Field(alias="purineAmount")
    explanation: str


class MealAnalysisDraft(_Record):
    """Validated analysis output before the client assigns an id."""

    meal_name: str
    meal_description: str
    total_purine_score: int = Field(ge=0, le=100, strict=True)
    overall_risk_level: RiskLevel
    overall_summary: str
    items: list[FoodItem]
    recommendations: str
    alternatives: list[str]
    daily_impact_analysis: str | None = None


class MealAnalysis(MealAnalysisDraft):
    """Result of analyzing one meal, identified by a client-generated id."""

    id: str = Field(min_length=1)

    def to_json(self) -> dict[str, object]:
        """Return the JSON-serializable form used for persistence."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class AnalysisContext:
    """Daily intake context passed into an analysis prompt."""

    daily_goal: int
    consumed_so_far: int
