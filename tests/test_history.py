"""Tests for meal history and favorites."""

from goutcare.services.history import (
    MealHistoryService,
    append_to_history,
    delete_from_history,
    find_meal,
    is_favorite,
    toggle_favorite,
)
from goutcare.services.store import MEAL_HISTORY_KEY, InMemoryKeyValueStore
from tests.conftest import make_meal


def test_append_puts_newest_first() -> None:
    history = [make_meal("a"), make_meal("b")]

    result = append_to_history(history, make_meal("c"))

    assert [meal.id for meal in result] == ["c", "a", "b"]
    assert [meal.id for meal in history] == ["a", "b"]


def test_append_moves_existing_id_to_front() -> None:
    history = [make_meal("a"), make_meal("b"), make_meal("c")]

    result = append_to_history(history, make_meal("b", score=70))

    assert [meal.id for meal in result] == ["b", "a", "c"]
    assert result[0].total_purine_score == 70


def test_append_respects_cap() -> None:
    history = [make_meal(str(index)) for index in range(50)]

    result = append_to_history(history, make_meal("new"))

    assert len(result) == 50
    assert result[0].id == "new"
    assert result[-1].id == "48"


def test_append_with_small_cap() -> None:
    history = [make_meal("a"), make_meal("b")]

    assert [meal.id for meal in append_to_history(history, make_meal("c"), cap=2)] == [
        "c",
        "a",
    ]
    assert append_to_history(history, make_meal("c"), cap=0) == []


def test_toggle_favorite_twice_restores_membership() -> None:
    favorites = [make_meal("a")]
    meal = make_meal("b")

    added = toggle_favorite(favorites, meal)
    removed = toggle_favorite(added, meal)

    assert [item.id for item in added] == ["b", "a"]
    assert is_favorite(added, "b")
    assert not is_favorite(removed, "b")
    assert [item.id for item in removed] == ["a"]


def test_delete_removes_only_matching_meal() -> None:
    history = [make_meal("a"), make_meal("b")]

    assert [meal.id for meal in delete_from_history(history, "a")] == ["b"]
    assert [meal.id for meal in delete_from_history(history, "missing")] == ["a", "b"]


def test_find_meal_searches_collections_in_order() -> None:
    history = [make_meal("a", score=10)]
    favorites = [make_meal("a", score=90), make_meal("b")]

    assert find_meal("a", history, favorites).total_purine_score == 10
    assert find_meal("b", history, favorites).id == "b"
    assert find_meal("c", history, favorites) is None


def test_service_persists_history_and_favorites() -> None:
    store = InMemoryKeyValueStore()
    service = MealHistoryService(store, cap=3)
    meal = make_meal("a")

    service.record(meal)
    service.toggle_favorite(meal)
    service.delete("a")

    assert service.list_history() == []
    assert [item.id for item in service.list_favorites()] == ["a"]
    assert service.find("a") == meal


def test_service_applies_cap() -> None:
    service = MealHistoryService(InMemoryKeyValueStore(), cap=3)

    for meal_id in ["a", "b", "c", "d"]:
        service.record(make_meal(meal_id))

    assert [meal.id for meal in service.list_history()] == ["d", "c", "b"]


def test_service_stores_camel_case_rows() -> None:
    store = InMemoryKeyValueStore()
    MealHistoryService(store).record(make_meal("a", score=33))

    row = store.get(MEAL_HISTORY_KEY)[0]

    assert row["totalPurineScore"] == 33
    assert row["items"][0]["foodName"] == "Chicken"
    assert row["items"][0]["purineAmount"] == "100-150mg/100g"


def test_service_skips_unreadable_rows() -> None:
    store = InMemoryKeyValueStore()
    store.set(MEAL_HISTORY_KEY, [{"id": "broken"}, make_meal("a").to_json()])

    history = MealHistoryService(store).list_history()

    assert [meal.id for meal in history] == ["a"]


def test_repeated_appends_stay_unique_and_capped() -> None:
    history: list = []
    for meal_id in ["a", "b", "a", "c", "b", "d", "a"]:
        history = append_to_history(history, make_meal(meal_id), cap=3)
        ids = [meal.id for meal in history]
        assert len(ids) <= 3
        assert len(set(ids)) == len(ids)

    assert [meal.id for meal in history] == ["a", "d", "b"]


def test_append_toggle_append_scenario() -> None:
    meal = make_meal("m1", score=80)
    history: list = []
    favorites: list = []

    history = append_to_history(history, meal)
    favorites = toggle_favorite(favorites, meal)
    history = append_to_history(history, meal)

    assert history == [meal]
    assert favorites == [meal]
    assert toggle_favorite(favorites, meal) == []
