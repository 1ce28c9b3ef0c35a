"""File-backed key-value store, one JSON file per key."""

from dataclasses import dataclass
from pathlib import Path

from fitness_ledger.domain.errors import PersistenceFailure
from fitness_ledger.services.storage import KeyValueStore


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each blob in ``<root>/<key>.json``, replaced atomically."""

    root: Path

    def get(self, key: str) -> bytes | None:
        """Return the blob for a key, if the file exists."""
        try:
            return self._path(key).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PersistenceFailure(f"Could not read {key}") from exc

    def set(self, key: str, value: bytes) -> None:
        """Write the blob to a temporary file and move it into place."""
        path = self._path(key)
        staging = path.with_name(f"{path.name}.tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            staging.write_bytes(value)
            staging.replace(path)
        except OSError as exc:
            raise PersistenceFailure(f"Could not write {key}") from exc

    def remove(self, key: str) -> None:
        """Delete the file for a key, if any."""
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceFailure(f"Could not remove {key}") from exc

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"
