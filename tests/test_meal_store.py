"""Tests for the meal store and shared collection behavior."""

import json

import pytest

from fitness_ledger.domain.errors import PersistenceFailure, ValidationError
from fitness_ledger.services.meals import MealStore
from tests.conftest import (
    FIXED_NOW,
    FailingKeyValueStore,
    InMemoryKeyValueStore,
    fixed_clock,
)


def _meal(**overrides: object) -> dict[str, object]:
    meal: dict[str, object] = {
        "date": "2024-03-15",
        "type": "Breakfast",
        "foodName": "Oats",
        "calories": 300,
        "protein": 10,
        "carbs": 50,
        "fat": 5,
    }
    meal.update(overrides)
    return meal


def test_add_assigns_id_and_timestamp_and_persists() -> None:
    storage = InMemoryKeyValueStore()
    store = MealStore(storage, clock=fixed_clock)

    meal = store.add(_meal())

    assert meal.id
    assert meal.created_at == FIXED_NOW
    assert store.by_date("2024-03-15") == [meal]
    persisted = json.loads(storage.blobs["meals"])
    assert persisted[0]["foodName"] == "Oats"
    assert persisted[0]["id"] == meal.id


def test_add_accepts_snake_case_and_ignores_supplied_id() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)

    meal = store.add(
        {
            "id": "chosen",
            "date": "2024-03-15",
            "type": "Breakfast",
            "food_name": "Eggs",
            "calories": 150,
        }
    )

    assert meal.food_name == "Eggs"
    assert meal.id != "chosen"


def test_add_rejects_zero_calories_without_persisting() -> None:
    storage = InMemoryKeyValueStore()
    store = MealStore(storage, clock=fixed_clock)

    with pytest.raises(ValidationError) as excinfo:
        store.add(_meal(calories=0))

    assert "calories" in excinfo.value.errors
    assert store.all() == []
    assert storage.writes == []


def test_add_reports_missing_and_invalid_fields() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)

    with pytest.raises(ValidationError) as excinfo:
        store.add({"date": "2024-02-30", "type": "Brunch", "calories": 100})

    errors = excinfo.value.errors
    assert "date" in errors
    assert "type" in errors
    assert "foodName" in errors


def test_ids_are_unique() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)

    ids = {store.add(_meal()).id for _ in range(20)}

    assert len(ids) == 20


def test_by_date_keeps_insertion_order() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)
    first = store.add(_meal(foodName="Oats"))
    store.add(_meal(date="2024-03-14", foodName="Pasta"))
    third = store.add(_meal(foodName="Apple", type="Snack"))

    assert store.by_date("2024-03-15") == [first, third]
    assert store.by_date("2024-03-16") == []


def test_update_merges_partial_changes() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)
    meal = store.add(_meal())

    updated = store.update(meal.id, {"calories": 350, "id": "other"})

    assert updated is not None
    assert updated.id == meal.id
    assert updated.calories == 350
    assert updated.food_name == "Oats"
    assert updated.created_at == meal.created_at
    assert store.get(meal.id) == updated


def test_update_with_no_changes_keeps_entry() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)
    meal = store.add(_meal())

    assert store.update(meal.id, {}) == meal
    assert store.all() == [meal]


def test_update_unknown_id_does_not_write() -> None:
    storage = InMemoryKeyValueStore()
    store = MealStore(storage, clock=fixed_clock)
    store.add(_meal())
    writes = list(storage.writes)

    assert store.update("missing", {"calories": 1}) is None
    assert storage.writes == writes


def test_update_rejects_invalid_values() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)
    meal = store.add(_meal())

    with pytest.raises(ValidationError):
        store.update(meal.id, {"protein": -1})

    assert store.get(meal.id) == meal


def test_remove_is_idempotent() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)
    meal = store.add(_meal())

    assert store.remove(meal.id) is True
    assert store.remove(meal.id) is False
    assert store.get(meal.id) is None


def test_load_restores_persisted_collection() -> None:
    storage = InMemoryKeyValueStore()
    first = MealStore(storage, clock=fixed_clock)
    meal = first.add(_meal())

    second = MealStore(storage)

    assert second.load() is True
    assert second.all() == [meal]


def test_load_ignores_absent_and_unreadable_blobs() -> None:
    storage = InMemoryKeyValueStore()
    store = MealStore(storage, clock=fixed_clock)
    meal = store.add(_meal())
    storage.blobs.pop("meals")

    assert store.load() is False

    storage.blobs["meals"] = b"{not json"
    assert store.load() is False

    storage.blobs["meals"] = b'{"meals": []}'
    assert store.load() is False
    assert store.all() == [meal]


def test_load_keeps_valid_records_next_to_invalid_ones() -> None:
    storage = InMemoryKeyValueStore()
    valid = {
        "id": "m1",
        "date": "2024-03-15",
        "type": "Lunch",
        "foodName": "Soup",
        "calories": 200,
        "createdAt": "2024-03-15T12:00:00Z",
    }
    invalid = {**valid, "id": "m2", "type": "Brunch"}
    storage.blobs["meals"] = json.dumps([valid, invalid, 42]).encode()
    store = MealStore(storage, clock=fixed_clock)

    assert store.load() is True
    assert [meal.id for meal in store.all()] == ["m1"]
    assert store.rejected == [invalid, 42]

    store.add(_meal(foodName="Toast"))

    persisted = json.loads(storage.blobs["meals"])
    assert persisted[0]["id"] == "m1"
    assert persisted[1]["foodName"] == "Toast"
    assert persisted[2:] == [invalid, 42]


def test_unreadable_blob_is_moved_aside_before_first_write() -> None:
    storage = InMemoryKeyValueStore()
    storage.blobs["meals"] = b"{not json"
    store = MealStore(storage, clock=fixed_clock)

    assert store.load() is False
    assert storage.writes == []

    store.add(_meal())

    assert storage.blobs["meals-unreadable"] == b"{not json"
    assert len(json.loads(storage.blobs["meals"])) == 1

    store.add(_meal(foodName="Toast"))

    assert storage.writes.count("meals-unreadable") == 1


def test_add_keeps_names_as_entered() -> None:
    store = MealStore(InMemoryKeyValueStore(), clock=fixed_clock)

    meal = store.add(_meal(foodName=" Oats "))

    assert meal.food_name == " Oats "
    assert store.by_date("2024-03-15")[0].food_name == " Oats "
    with pytest.raises(ValidationError):
        store.add(_meal(foodName="   "))


def test_load_ignores_unknown_fields() -> None:
    storage = InMemoryKeyValueStore()
    storage.blobs["meals"] = json.dumps(
        [
            {
                "id": "m1",
                "date": "2024-03-15",
                "type": "Lunch",
                "foodName": "Soup",
                "calories": 200,
                "createdAt": "2024-03-15T12:00:00.000Z",
                "favourite": True,
            }
        ]
    ).encode()
    store = MealStore(storage)

    assert store.load() is True
    meal = store.get("m1")
    assert meal is not None
    assert meal.protein == 0


def test_failed_write_rolls_back() -> None:
    storage = FailingKeyValueStore(failing=False)
    store = MealStore(storage, clock=fixed_clock)
    meal = store.add(_meal())
    storage.failing = True

    with pytest.raises(PersistenceFailure):
        store.add(_meal(foodName="Toast"))
    with pytest.raises(PersistenceFailure):
        store.update(meal.id, {"calories": 999})
    with pytest.raises(PersistenceFailure):
        store.remove(meal.id)

    assert store.all() == [meal]
