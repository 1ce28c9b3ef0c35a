"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from fitness_ledger.config import Settings
from fitness_ledger.containers import AppContainer
from fitness_ledger.domain.errors import PersistenceFailure
from fitness_ledger.services.backup import BackupService
from fitness_ledger.services.body_stats import BodyStatStore
from fitness_ledger.services.goals import GoalsStore
from fitness_ledger.services.images import ImageEncoder
from fitness_ledger.services.meals import MealStore
from fitness_ledger.services.storage import KeyValueStore
from fitness_ledger.services.workouts import WorkoutStore

FIXED_NOW = datetime(2024, 3, 15, 8, 30, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed key-value store for tests."""

    blobs: dict[str, bytes] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get(self, key: str) -> bytes | None:
        return self.blobs.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.writes.append(key)
        self.blobs[key] = value

    def remove(self, key: str) -> None:
        self.blobs.pop(key, None)


@dataclass
class FailingKeyValueStore(InMemoryKeyValueStore):
    """Store whose writes fail once ``failing`` is switched on."""

    failing: bool = True

    def set(self, key: str, value: bytes) -> None:
        if self.failing:
            raise PersistenceFailure(f"disk full while writing {key}")
        super().set(key, value)


@dataclass
class FakeImageEncoder(ImageEncoder):
    """Encoder that records its input and returns a fixed reference."""

    encoded: list[bytes] = field(default_factory=list)

    def encode(self, image_bytes: bytes) -> str:
        self.encoded.append(image_bytes)
        return "data:image/jpeg;base64,resized"


class BrokenImageEncoder(ImageEncoder):
    """Encoder that always fails."""

    def encode(self, image_bytes: bytes) -> str:
        raise OSError("cannot identify image file")


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(storage_backend="file", data_dir=tmp_path / "ledger")


@pytest.fixture
def container(settings: Settings, storage: InMemoryKeyValueStore) -> AppContainer:
    return AppContainer(
        settings=settings,
        storage=storage,
        meal_store=MealStore(storage, clock=fixed_clock),
        workout_store=WorkoutStore(storage, clock=fixed_clock),
        body_stat_store=BodyStatStore(
            storage, clock=fixed_clock, image_encoder=FakeImageEncoder()
        ),
        goals_store=GoalsStore(storage),
        backup_service=BackupService(storage),
    )
