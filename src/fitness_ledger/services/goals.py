"""User goals store."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar

from pydantic import ValidationError as PydanticValidationError

from fitness_ledger.domain.errors import PersistenceFailure, ValidationError
from fitness_ledger.domain.models import StorageKey, UserGoals
from fitness_ledger.services.storage import KeyValueStore, set_aside

logger = logging.getLogger(__name__)


@dataclass
class GoalsStore:
    """Holds the single goals object, merged onto defaults."""

    key: ClassVar[StorageKey] = StorageKey.USER_GOALS

    storage: KeyValueStore
    goals: UserGoals = field(default_factory=UserGoals)
    _unreadable: bytes | None = field(default=None, init=False, repr=False)

    def load(self) -> bool:
        """Merge persisted goals onto the defaults field by field.

        A stored field that fails validation falls back to its default; the
        other stored fields are kept.
        """
        raw = self.storage.get(self.key)
        if raw is None:
            return False
        try:
            stored = json.loads(raw)
        except ValueError:
            stored = None
        if not isinstance(stored, dict):
            logger.warning("Ignoring %s blob that is not a JSON object", self.key)
            self._unreadable = raw
            return False
        accepted: dict[str, object] = {}
        for name, value in UserGoals.normalize_keys(stored).items():
            try:
                UserGoals.model_validate({name: value})
            except PydanticValidationError:
                logger.warning(
                    "Using the default for invalid %s field %s", self.key, name
                )
                continue
            accepted[name] = value
        self.goals = UserGoals.model_validate(accepted)
        self._unreadable = None
        return True

    def update(self, changes: Mapping[str, object]) -> UserGoals:
        """Merge changes onto the current goals and persist the result."""
        merged = {**self.goals.to_document(), **UserGoals.normalize_keys(changes)}
        try:
            goals = UserGoals.model_validate(merged)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc
        self._commit(goals)
        return goals

    def reset(self) -> UserGoals:
        """Restore the built-in defaults."""
        goals = UserGoals()
        self._commit(goals)
        return goals

    def _commit(self, goals: UserGoals) -> None:
        previous = self.goals
        self.goals = goals
        payload = goals.model_dump_json(by_alias=True, exclude_none=True)
        try:
            if self._unreadable is not None:
                set_aside(self.storage, self.key, self._unreadable)
                self._unreadable = None
            self.storage.set(self.key, payload.encode("utf-8"))
        except PersistenceFailure:
            self.goals = previous
            logger.exception("Failed to persist %s, rolled back", self.key)
            raise
