"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from fitness_ledger.domain.errors import PersistenceFailure
from fitness_ledger.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores each blob as a text row keyed by name."""

    client: Client
    table: str = "ledger_blobs"

    def get(self, key: str) -> bytes | None:
        """Return the stored blob for a key, if present."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise PersistenceFailure(f"Could not read {key}") from exc
        if not response.data:
            return None
        value = response.data[0].get("value")
        if value is None:
            return None
        return str(value).encode("utf-8")

    def set(self, key: str, value: bytes) -> None:
        """Insert or replace the row for a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "key": key,
                    "value": value.decode("utf-8"),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            ).execute()
        except (APIError, httpx.HTTPError, UnicodeDecodeError) as exc:
            raise PersistenceFailure(f"Could not write {key}") from exc

    def remove(self, key: str) -> None:
        """Delete the row for a key."""
        try:
            self.client.table(self.table).delete().eq("key", key).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise PersistenceFailure(f"Could not remove {key}") from exc
