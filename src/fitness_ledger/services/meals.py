"""Meal logging store."""

from dataclasses import dataclass

from fitness_ledger.domain.errors import ValidationError
from fitness_ledger.domain.models import Meal, StorageKey
from fitness_ledger.services.collections import CollectionStore


@dataclass
class MealStore(CollectionStore[Meal]):
    """Store for logged meals."""

    key = StorageKey.MEALS
    model = Meal

    def _check_new(self, entity: Meal) -> None:
        if entity.calories <= 0:
            raise ValidationError({"calories": "Calories must be greater than 0"})
