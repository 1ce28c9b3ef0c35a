"""Backup, restore and CSV export endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Query, Request, Response

from fitness_ledger.services.backup import backup_filename, describe_preview
from fitness_ledger.services.csv_export import meals_csv, workouts_csv

if TYPE_CHECKING:
    from fitness_ledger.containers import AppContainer

router = APIRouter(prefix="/backup", tags=["backup"])


def _attachment(content: bytes | str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export")
async def export_backup(request: Request) -> Response:
    """Download every persisted key as one JSON document."""
    container: AppContainer = request.app.state.container
    return _attachment(
        container.backup_service.export_document(),
        "application/json",
        backup_filename(date.today().isoformat()),
    )


@router.post("/preview")
async def preview_import(request: Request) -> dict[str, object]:
    """Show which keys an uploaded backup would restore."""
    container: AppContainer = request.app.state.container
    preview = container.backup_service.import_preview(await request.body())
    return {"summary": describe_preview(preview), "preview": preview}


@router.post("/apply")
async def apply_import(
    request: Request, keys: Annotated[list[str], Query()]
) -> dict[str, object]:
    """Restore the selected keys from an uploaded backup and reload."""
    container: AppContainer = request.app.state.container
    preview = container.backup_service.import_preview(await request.body())
    applied = container.backup_service.apply_import(keys, preview)
    container.reload()
    return {"applied": applied}


@router.get("/meals.csv")
async def export_meals_csv(request: Request) -> Response:
    """Download meals as CSV."""
    container: AppContainer = request.app.state.container
    today = date.today().isoformat()
    return _attachment(
        meals_csv(container.meal_store.all()), "text/csv", f"meals-{today}.csv"
    )


@router.get("/workouts.csv")
async def export_workouts_csv(request: Request) -> Response:
    """Download workouts as CSV."""
    container: AppContainer = request.app.state.container
    today = date.today().isoformat()
    return _attachment(
        workouts_csv(container.workout_store.all()),
        "text/csv",
        f"workouts-{today}.csv",
    )
