"""Endpoints for meals, workouts and body stats."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, HTTPException, Request, status

from fitness_ledger.api.params import resolve_day

if TYPE_CHECKING:
    from fitness_ledger.containers import AppContainer
    from fitness_ledger.services.collections import CollectionStore

router = APIRouter(prefix="/entries", tags=["entries"])


class Collection(StrEnum):
    """Entry collections exposed over HTTP."""

    MEALS = "meals"
    WORKOUTS = "workouts"
    BODY_STATS = "body-stats"


def _store(request: Request, collection: Collection) -> CollectionStore:
    container: AppContainer = request.app.state.container
    stores: dict[Collection, CollectionStore] = {
        Collection.MEALS: container.meal_store,
        Collection.WORKOUTS: container.workout_store,
        Collection.BODY_STATS: container.body_stat_store,
    }
    return stores[collection]


@router.put("/body-stats/{entry_id}/photo")
async def attach_photo(entry_id: str, request: Request) -> dict[str, object]:
    """Attach a progress photo sent as the raw request body."""
    container: AppContainer = request.app.state.container
    photo = await request.body()
    if not photo:
        raise HTTPException(status_code=422, detail="Empty photo")
    stat = container.body_stat_store.attach_photo(entry_id, photo)
    if stat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"entry": stat.to_document()}


@router.get("/{collection}")
async def list_entries(
    collection: Collection, request: Request, date: str | None = None
) -> dict[str, object]:
    """List entries, optionally only those logged on one day."""
    store = _store(request, collection)
    items = store.all() if date is None else store.by_date(resolve_day(date))
    return {"entries": [item.to_document() for item in items]}


@router.post("/{collection}", status_code=status.HTTP_201_CREATED)
async def add_entry(
    collection: Collection, request: Request, payload: dict[str, Any] = Body(...)
) -> dict[str, object]:
    """Log a new entry."""
    entity = _store(request, collection).add(payload)
    return {"entry": entity.to_document()}


@router.get("/{collection}/{entry_id}")
async def get_entry(
    collection: Collection, entry_id: str, request: Request
) -> dict[str, object]:
    """Return one entry."""
    entity = _store(request, collection).get(entry_id)
    if entity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"entry": entity.to_document()}


@router.patch("/{collection}/{entry_id}")
async def update_entry(
    collection: Collection,
    entry_id: str,
    request: Request,
    changes: dict[str, Any] = Body(...),
) -> dict[str, object]:
    """Merge changes into an entry; unknown ids return a null entry."""
    entity = _store(request, collection).update(entry_id, changes)
    return {"entry": entity.to_document() if entity else None}


@router.delete("/{collection}/{entry_id}")
async def remove_entry(
    collection: Collection, entry_id: str, request: Request
) -> dict[str, object]:
    """Delete an entry; deleting twice is harmless."""
    return {"removed": _store(request, collection).remove(entry_id)}
