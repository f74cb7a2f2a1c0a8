"""Domain models for health log entries."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from goutcare.domain.meals import MealAnalysis


class LogType(StrEnum):
    """Kinds of entries in the health log."""

    SYMPTOM = "symptom"
    MEDICATION = "medication"
    WELLNESS = "wellness"
    PURINE_INTAKE = "purine_intake"
    HYDRATION = "hydration"
    ALCOHOL = "alcohol"


class TimeOfDay(StrEnum):
    """Meal occasion a purine intake was logged for."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class PurineIntakeData(MealAnalysis):
    """A meal analysis bound to a logging occasion."""

    time_of_day: TimeOfDay

    @classmethod
    def from_meal(
        cls, meal: MealAnalysis, time_of_day: TimeOfDay
    ) -> "PurineIntakeData":
        """Copy a meal analysis into intake data for a meal occasion."""
        return cls(**meal.model_dump(), time_of_day=time_of_day)


class LogEntry(BaseModel):
    """Common log envelope; purine intake entries carry typed data."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    timestamp: datetime
    type: LogType
    data: PurineIntakeData | dict[str, object]

    @field_validator("data", mode="before")
    @classmethod
    def _parse_purine_intake(cls, value: object, info: ValidationInfo) -> object:
        if info.data.get("type") == LogType.PURINE_INTAKE and isinstance(value, dict):
            return PurineIntakeData.model_validate(value)
        return value

    @property
    def purine_intake(self) -> PurineIntakeData | None:
        """Return the intake data when this is a purine intake entry."""
        if self.type == LogType.PURINE_INTAKE and isinstance(
            self.data, PurineIntakeData
        ):
            return self.data
        return None

    def to_json(self) -> dict[str, object]:
        """Return the JSON-serializable form used for persistence."""
        return self.model_dump(mode="json", by_alias=True)
