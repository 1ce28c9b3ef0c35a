"""Dependency container wiring for the application."""

import logging
from dataclasses import dataclass

from supabase import create_client

from fitness_ledger.adapters.file_key_value_store import FileKeyValueStore
from fitness_ledger.adapters.pillow_image_encoder import PillowImageEncoder
from fitness_ledger.adapters.supabase_key_value_store import SupabaseKeyValueStore
from fitness_ledger.config import Settings
from fitness_ledger.services.backup import BackupService
from fitness_ledger.services.body_stats import BodyStatStore
from fitness_ledger.services.goals import GoalsStore
from fitness_ledger.services.meals import MealStore
from fitness_ledger.services.storage import KeyValueStore
from fitness_ledger.services.workouts import WorkoutStore

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: KeyValueStore
    meal_store: MealStore
    workout_store: WorkoutStore
    body_stat_store: BodyStatStore
    goals_store: GoalsStore
    backup_service: BackupService

    def reload(self) -> None:
        """Reload every store from persistence, e.g. after an import."""
        for store in (
            self.meal_store,
            self.workout_store,
            self.body_stat_store,
            self.goals_store,
        ):
            if not store.load():
                logger.info("Nothing loaded for %s", store.key)


def build_storage(settings: Settings) -> KeyValueStore:
    """Create the configured persistence backend."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "Supabase storage needs SUPABASE_URL and SUPABASE_SERVICE_KEY"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    return FileKeyValueStore(settings.data_dir)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container and load persisted state."""
    resolved_settings = settings or Settings()
    storage = build_storage(resolved_settings)
    image_encoder = PillowImageEncoder(
        max_width=resolved_settings.photo_max_width,
        quality=resolved_settings.photo_quality,
    )
    container = AppContainer(
        settings=resolved_settings,
        storage=storage,
        meal_store=MealStore(storage),
        workout_store=WorkoutStore(storage),
        body_stat_store=BodyStatStore(storage, image_encoder=image_encoder),
        goals_store=GoalsStore(storage),
        backup_service=BackupService(storage),
    )
    container.reload()
    return container
