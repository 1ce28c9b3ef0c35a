"""Base store for dated ledger collections."""

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar, Generic, TypeVar
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from fitness_ledger.domain.errors import PersistenceFailure, ValidationError
from fitness_ledger.domain.models import LedgerEntity, StorageKey
from fitness_ledger.services.storage import KeyValueStore, set_aside

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=LedgerEntity)

IMMUTABLE_FIELDS = ("id", "createdAt")


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


@dataclass
class CollectionStore(Generic[EntityT]):
    """In-memory collection kept in sync with one persisted blob.

    Every mutation writes the whole collection before returning. When the
    write fails the previous collection is restored and the failure is
    re-raised.

    Stored records that fail validation are kept in ``rejected`` and written
    back unchanged. A blob that is not a JSON list is moved to its side key
    before the first write replaces it.
    """

    key: ClassVar[StorageKey]
    model: ClassVar[type[LedgerEntity]]

    storage: KeyValueStore
    clock: Callable[[], datetime] = utc_now
    items: list[EntityT] = field(default_factory=list)
    rejected: list[object] = field(default_factory=list)
    _unreadable: bytes | None = field(default=None, init=False, repr=False)

    def load(self) -> bool:
        """Replace in-memory state with the persisted collection, if usable.

        Records are validated one by one; invalid ones are logged and kept
        aside rather than dropping the whole collection.
        """
        raw = self.storage.get(self.key)
        if raw is None:
            return False
        try:
            records = json.loads(raw)
        except ValueError:
            records = None
        if not isinstance(records, list):
            logger.warning("Ignoring %s blob that is not a JSON list", self.key)
            self._unreadable = raw
            return False
        items: list[EntityT] = []
        rejected: list[object] = []
        for position, record in enumerate(records):
            try:
                entity = self.model.model_validate(record)
            except PydanticValidationError as exc:
                logger.warning(
                    "Keeping invalid %s record %d aside (%d errors)",
                    self.key,
                    position,
                    exc.error_count(),
                )
                rejected.append(record)
                continue
            items.append(entity)  # type: ignore[arg-type]
        self.items = items
        self.rejected = rejected
        self._unreadable = None
        return True

    def all(self) -> list[EntityT]:
        """Return every entry in insertion order."""
        return list(self.items)

    def get(self, entity_id: str) -> EntityT | None:
        """Return an entry by id, if present."""
        index = self._index_of(entity_id)
        return None if index is None else self.items[index]

    def by_date(self, day: str) -> list[EntityT]:
        """Return entries logged on a day, in insertion order."""
        return [item for item in self.items if item.date == day]

    def add(self, data: Mapping[str, object]) -> EntityT:
        """Validate and append a new entry, assigning its id and timestamp."""
        payload = self.model.normalize_keys(data)
        for name in IMMUTABLE_FIELDS:
            payload.pop(name, None)
        payload["id"] = self._new_id()
        payload["createdAt"] = self.clock()
        entity = self._validate(payload)
        self._check_new(entity)
        self._commit([*self.items, entity])
        return entity

    def update(self, entity_id: str, changes: Mapping[str, object]) -> EntityT | None:
        """Merge changes into an entry; unknown ids are ignored."""
        index = self._index_of(entity_id)
        if index is None:
            logger.debug("No %s entry with id %s to update", self.key, entity_id)
            return None
        current = self.items[index]
        payload = current.to_document()
        for name, value in self.model.normalize_keys(changes).items():
            if name not in IMMUTABLE_FIELDS:
                payload[name] = value
        entity = self._validate(payload)
        items = list(self.items)
        items[index] = entity
        self._commit(items)
        return entity

    def remove(self, entity_id: str) -> bool:
        """Delete an entry; returns False when nothing matched."""
        remaining = [item for item in self.items if item.id != entity_id]
        if len(remaining) == len(self.items):
            return False
        self._commit(remaining)
        return True

    def _check_new(self, entity: EntityT) -> None:
        """Hook for rules that only apply when an entry is first logged."""

    def _validate(self, payload: dict[str, object]) -> EntityT:
        try:
            return self.model.model_validate(payload)  # type: ignore[return-value]
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

    def _index_of(self, entity_id: str) -> int | None:
        for index, item in enumerate(self.items):
            if item.id == entity_id:
                return index
        return None

    def _new_id(self) -> str:
        while True:
            candidate = str(uuid4())
            if self._index_of(candidate) is None:
                return candidate

    def _commit(self, items: list[EntityT]) -> None:
        previous = self.items
        self.items = items
        try:
            if self._unreadable is not None:
                set_aside(self.storage, self.key, self._unreadable)
                self._unreadable = None
            self.storage.set(self.key, self._encode(items))
        except PersistenceFailure:
            self.items = previous
            logger.exception("Failed to persist %s, rolled back", self.key)
            raise

    def _encode(self, items: list[EntityT]) -> bytes:
        documents = [item.to_document() for item in items]
        return json.dumps(
            [*documents, *self.rejected], separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")
