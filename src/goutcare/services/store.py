"""Key-value persistence abstractions."""

import copy
from dataclasses import dataclass, field
from typing import Protocol

LOGS_KEY = "goutcare-logs"
MEAL_HISTORY_KEY = "goutcare-meal-history"
FAVORITE_MEALS_KEY = "goutcare-favorite-meals"
PREFERENCES_KEY = "goutcare-prefs"


class KeyValueStore(Protocol):
    """Store of JSON-serializable values addressed by stable keys."""

    def get(self, key: str) -> object | None:
        """Return the stored value, or None when absent."""

    def set(self, key: str, value: object) -> None:
        """Store a value under a key, replacing any previous value."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store for tests and local runs."""

    _values: dict[str, object] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        """Return a copy of the stored value."""
        if key not in self._values:
            return None
        return copy.deepcopy(self._values[key])

    def set(self, key: str, value: object) -> None:
        """Store a copy of the value."""
        self._values[key] = copy.deepcopy(value)
