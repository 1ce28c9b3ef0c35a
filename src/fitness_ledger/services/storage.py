"""Key-value persistence interface shared by stores and backups."""

import logging
from typing import Protocol

from fitness_ledger.domain.models import StorageKey

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Byte blob storage addressed by key.

    Implementations raise ``PersistenceFailure`` when a write cannot be made
    durable.
    """

    def get(self, key: str) -> bytes | None:
        """Return the blob for a key, or None if it was never written."""

    def set(self, key: str, value: bytes) -> None:
        """Replace the blob stored under a key."""

    def remove(self, key: str) -> None:
        """Delete the blob stored under a key, if any."""


def set_aside(storage: KeyValueStore, key: StorageKey, raw: bytes) -> None:
    """Copy a blob that failed to load to its side key."""
    storage.set(key.unreadable_name, raw)
    logger.warning("Moved unreadable %s blob to %s", key, key.unreadable_name)
