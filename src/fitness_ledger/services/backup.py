"""Whole-ledger export and selective import."""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from fitness_ledger.domain.errors import MalformedImport
from fitness_ledger.domain.models import StorageKey
from fitness_ledger.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class BackupService:
    """Reads and writes persisted blobs directly, bypassing the stores.

    Stores are not reloaded after an import; callers refresh them.
    """

    storage: KeyValueStore

    def export_snapshot(self) -> dict[str, object]:
        """Return every persisted key with its parsed value, or None."""
        return {key.value: self._read(key) for key in StorageKey}

    def export_document(self) -> bytes:
        """Return the snapshot as an indented JSON document."""
        return json.dumps(self.export_snapshot(), indent=2, ensure_ascii=False).encode(
            "utf-8"
        )

    def import_preview(self, raw: bytes) -> dict[str, object]:
        """Parse an import document, keeping known keys with non-null values."""
        try:
            document = json.loads(raw)
        except ValueError as exc:
            raise MalformedImport("Import file is not valid JSON") from exc
        if not isinstance(document, dict):
            raise MalformedImport("Import file must contain a JSON object")
        preview: dict[str, object] = {}
        for key in StorageKey:
            value = document.get(key.value)
            if value is None:
                value = document.get(key.legacy_name)
            if value is not None:
                preview[key.value] = value
        return preview

    def apply_import(
        self, selected_keys: Iterable[str], preview: Mapping[str, object]
    ) -> list[str]:
        """Overwrite each selected key with its previewed value."""
        applied: list[str] = []
        for key in selected_keys:
            if key not in preview:
                logger.warning("Skipping %s: not present in the import preview", key)
                continue
            self.storage.set(key, _encode(preview[key]))
            applied.append(key)
        logger.info("Imported %d keys: %s", len(applied), ", ".join(applied))
        return applied

    def _read(self, key: StorageKey) -> object:
        raw = self.storage.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Exporting unreadable %s blob as null", key)
            return None


def describe_preview(preview: Mapping[str, object]) -> dict[str, str]:
    """Summarize each previewed key for a confirmation prompt."""
    summary: dict[str, str] = {}
    for key, value in preview.items():
        if isinstance(value, list):
            summary[key] = f"{len(value)} entries"
        else:
            summary[key] = _json_type(value)
    return summary


def backup_filename(day: str) -> str:
    """Return the download name for a backup taken on ``day``."""
    return f"fittracker-backup-{day}.json"


def _encode(value: object) -> bytes:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _json_type(value: object) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    return "null"
