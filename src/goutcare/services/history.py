"""Meal analysis history and favorites."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import ValidationError

from goutcare.domain.meals import MealAnalysis
from goutcare.services.store import (
    FAVORITE_MEALS_KEY,
    MEAL_HISTORY_KEY,
    KeyValueStore,
)

DEFAULT_HISTORY_CAP = 50

_logger = logging.getLogger(__name__)


def append_to_history(
    history: Sequence[MealAnalysis], item: MealAnalysis, cap: int = DEFAULT_HISTORY_CAP
) -> list[MealAnalysis]:
    """Return history with item at the front, deduplicated by id and capped."""
    remaining = [meal for meal in history if meal.id != item.id]
    return [item, *remaining][: max(cap, 0)]


def toggle_favorite(
    favorites: Sequence[MealAnalysis], item: MealAnalysis
) -> list[MealAnalysis]:
    """Remove item from favorites if present, otherwise add it at the front."""
    if is_favorite(favorites, item.id):
        return [meal for meal in favorites if meal.id != item.id]
    return [item, *favorites]


def delete_from_history(
    history: Sequence[MealAnalysis], meal_id: str
) -> list[MealAnalysis]:
    """Return history without the meal with the given id."""
    return [meal for meal in history if meal.id != meal_id]


def is_favorite(favorites: Sequence[MealAnalysis], meal_id: str) -> bool:
    return any(meal.id == meal_id for meal in favorites)


def find_meal(
    meal_id: str, *collections: Sequence[MealAnalysis]
) -> MealAnalysis | None:
    """Return the first meal with the id across the given collections."""
    for collection in collections:
        for meal in collection:
            if meal.id == meal_id:
                return meal
    return None


@dataclass
class MealHistoryService:
    """Loads and saves history and favorites around the list operations."""

    store: KeyValueStore
    cap: int = DEFAULT_HISTORY_CAP

    def list_history(self) -> list[MealAnalysis]:
        return _load_meals(self.store, MEAL_HISTORY_KEY)

    def list_favorites(self) -> list[MealAnalysis]:
        return _load_meals(self.store, FAVORITE_MEALS_KEY)

    def record(self, meal: MealAnalysis) -> list[MealAnalysis]:
        """Append a fresh analysis to the persisted history."""
        history = append_to_history(self.list_history(), meal, self.cap)
        _save_meals(self.store, MEAL_HISTORY_KEY, history)
        return history

    def delete(self, meal_id: str) -> list[MealAnalysis]:
        """Delete a meal from history; favorites keep their own copy."""
        history = delete_from_history(self.list_history(), meal_id)
        _save_meals(self.store, MEAL_HISTORY_KEY, history)
        return history

    def toggle_favorite(self, meal: MealAnalysis) -> list[MealAnalysis]:
        """Toggle favorite membership of a meal and persist the result."""
        favorites = toggle_favorite(self.list_favorites(), meal)
        _save_meals(self.store, FAVORITE_MEALS_KEY, favorites)
        return favorites

    def find(self, meal_id: str) -> MealAnalysis | None:
        """Look a meal up in history, then in favorites."""
        return find_meal(meal_id, self.list_history(), self.list_favorites())


def _load_meals(store: KeyValueStore, key: str) -> list[MealAnalysis]:
    raw = store.get(key)
    if not isinstance(raw, list):
        return []
    meals: list[MealAnalysis] = []
    for row in raw:
        try:
            meals.append(MealAnalysis.model_validate(row))
        except ValidationError:
            _logger.warning("Skipping unreadable meal in %s", key)
    return meals


def _save_meals(store: KeyValueStore, key: str, meals: Sequence[MealAnalysis]) -> None:
    store.set(key, [meal.to_json() for meal in meals])
