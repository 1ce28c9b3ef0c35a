"""Workout logging store."""

from dataclasses import dataclass

from fitness_ledger.domain.models import StorageKey, Workout
from fitness_ledger.services.collections import CollectionStore
from fitness_ledger.services.stats import DAYS_PER_WEEK, shift_day


@dataclass
class WorkoutStore(CollectionStore[Workout]):
    """Store for logged workouts."""

    key = StorageKey.WORKOUTS
    model = Workout

    def by_week(self, week_start: str) -> list[Workout]:
        """Return workouts in the seven days starting at ``week_start``."""
        week_end = shift_day(week_start, DAYS_PER_WEEK - 1)
        return [item for item in self.items if week_start <= item.date <= week_end]
