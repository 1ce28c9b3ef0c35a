"""Tests for the Supabase key-value store."""

from dataclasses import dataclass, field

import httpx
import pytest
from postgrest.exceptions import APIError

from fitness_ledger.adapters.supabase_key_value_store import SupabaseKeyValueStore
from fitness_ledger.domain.errors import PersistenceFailure


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value: object) -> "FakeTable":
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        key = self.last_filters[-1][1] if self.last_filters else None
        if self._action == "select":
            value = self.rows.get(str(key))
            return FakeResponse([] if value is None else [{"value": value}])
        if self._action == "upsert":
            payload = self.last_payload
            assert isinstance(payload, dict)
            self.rows[payload["key"]] = payload["value"]
            return FakeResponse([payload])
        self.rows.pop(str(key), None)
        return FakeResponse([])


@dataclass
class FakeClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_set_then_get_round_trips_text() -> None:
    client = FakeClient()
    store = SupabaseKeyValueStore(client, table="blobs")  # type: ignore[arg-type]

    store.set("meals", '[{"foodName": "Crème brûlée"}]'.encode())

    assert store.get("meals") == '[{"foodName": "Crème brûlée"}]'.encode()
    payload = client.tables["blobs"].last_payload
    assert isinstance(payload, dict)
    assert payload["key"] == "meals"
    assert "updated_at" in payload


def test_get_missing_key_returns_none() -> None:
    store = SupabaseKeyValueStore(FakeClient())  # type: ignore[arg-type]

    assert store.get("workouts") is None


def test_remove_deletes_row() -> None:
    client = FakeClient()
    store = SupabaseKeyValueStore(client)  # type: ignore[arg-type]
    store.set("user-goals", b"{}")

    store.remove("user-goals")

    assert store.get("user-goals") is None
    assert ("key", "user-goals") in client.tables["ledger_blobs"].last_filters


@pytest.mark.parametrize(
    "error",
    [
        APIError({"message": "permission denied", "code": "42501"}),
        httpx.ConnectError("connection refused"),
    ],
)
def test_transport_errors_become_persistence_failures(error: Exception) -> None:
    client = FakeClient()
    client.table("ledger_blobs").error = error
    store = SupabaseKeyValueStore(client)  # type: ignore[arg-type]

    with pytest.raises(PersistenceFailure):
        store.set("meals", b"[]")
    with pytest.raises(PersistenceFailure):
        store.get("meals")
    with pytest.raises(PersistenceFailure):
        store.remove("meals")


def test_set_rejects_non_utf8_blob() -> None:
    store = SupabaseKeyValueStore(FakeClient())  # type: ignore[arg-type]

    with pytest.raises(PersistenceFailure):
        store.set("meals", b"\xff\xfe")
