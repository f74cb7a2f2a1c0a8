"""User preferences service."""

import logging
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from goutcare.services.store import PREFERENCES_KEY, KeyValueStore

_logger = logging.getLogger(__name__)


class Preferences(BaseModel):
    """Display units, daily goals and optional profile data."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    weight_unit: Literal["kg", "lbs"] = "kg"
    fluid_unit: Literal["ml", "oz"] = "ml"
    daily_fluid_goal: int = Field(default=2500, gt=0)
    daily_purine_goal: int = Field(default=150, gt=0)
    gender: str | None = None
    birth_year: int | None = None
    height_cm: float | None = Field(default=None, alias="height")
    weight_kg: float | None = Field(default=None, alias="weight")


@dataclass
class PreferencesService:
    """Service for stored user preferences."""

    store: KeyValueStore
    default_daily_purine_goal: int = 150

    def get(self) -> Preferences:
        """Return stored preferences, or defaults when unset or unreadable."""
        raw = self.store.get(PREFERENCES_KEY)
        if isinstance(raw, dict):
            try:
                return Preferences.model_validate(raw)
            except ValidationError:
                _logger.warning("Stored preferences are unreadable, using defaults")
        return Preferences(daily_purine_goal=self.default_daily_purine_goal)

    def save(self, preferences: Preferences) -> Preferences:
        """Persist preferences."""
        self.store.set(
            PREFERENCES_KEY, preferences.model_dump(mode="json", by_alias=True)
        )
        return preferences

    def daily_purine_goal(self) -> int:
        return self.get().daily_purine_goal
