"""Endpoints serving derived views."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Query, Request

from fitness_ledger.api.params import resolve_day
from fitness_ledger.services.stats import (
    daily_macro_totals,
    dashboard_summary,
    latest_weight,
    macro_calorie_breakdown,
    meal_type_distribution,
    seven_day_calorie_series,
    weight_series,
    weight_trend,
    workout_heatmap,
)

if TYPE_CHECKING:
    from fitness_ledger.containers import AppContainer

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/dashboard")
async def dashboard(request: Request, today: str | None = None) -> dict[str, object]:
    """Headline numbers for the dashboard."""
    container: AppContainer = request.app.state.container
    summary = dashboard_summary(
        container.meal_store.all(),
        container.workout_store.all(),
        container.body_stat_store.all(),
        container.goals_store.goals,
        resolve_day(today),
    )
    return asdict(summary)


@router.get("/daily")
async def daily(request: Request, date: str | None = None) -> dict[str, object]:
    """Macro totals, macro calories and meal-type split for a day."""
    container: AppContainer = request.app.state.container
    day = resolve_day(date)
    meals = container.meal_store.all()
    totals = daily_macro_totals(meals, day)
    return {
        "totals": asdict(totals),
        "macro_calories": asdict(macro_calorie_breakdown(totals)),
        "by_meal_type": meal_type_distribution(meals, day),
    }


@router.get("/heatmap")
async def heatmap(
    request: Request,
    anchor: str | None = None,
    days: Annotated[int | None, Query(ge=1, le=366)] = None,
) -> dict[str, object]:
    """Workout counts per day over a trailing window."""
    container: AppContainer = request.app.state.container
    window = days or container.settings.heatmap_days
    cells = workout_heatmap(container.workout_store.all(), window, resolve_day(anchor))
    return {"days": [asdict(cell) for cell in cells]}


@router.get("/calories")
async def calories(request: Request, anchor: str | None = None) -> dict[str, object]:
    """Seven-day calorie series ending at ``anchor``."""
    container: AppContainer = request.app.state.container
    series = seven_day_calorie_series(container.meal_store.all(), resolve_day(anchor))
    return {
        "days": [asdict(totals) for totals in series],
        "goal": container.goals_store.goals.daily_calories,
    }


@router.get("/weight")
async def weight(request: Request) -> dict[str, object]:
    """Latest weight, trend and the full weight series."""
    container: AppContainer = request.app.state.container
    stats = container.body_stat_store.all()
    latest = latest_weight(stats)
    return {
        "latest": latest.weight if latest else None,
        "trend": weight_trend(stats),
        "series": [asdict(point) for point in weight_series(stats)],
    }
