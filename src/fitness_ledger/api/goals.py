"""Endpoints for nutrition goals."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from fastapi import APIRouter, Body, HTTPException, Query, Request, status

from fitness_ledger.domain.models import GoalType  # noqa: TC001
from fitness_ledger.services.targets import (
    MACRO_PRESETS,
    Sex,
    apply_macro_preset,
    calculate_bmi,
    calculate_calorie_goal,
    macros_match_calories,
)

if TYPE_CHECKING:
    from fitness_ledger.containers import AppContainer
    from fitness_ledger.domain.models import UserGoals

router = APIRouter(prefix="/goals", tags=["goals"])


def _goals_response(goals: UserGoals) -> dict[str, object]:
    return {
        "goals": goals.to_document(),
        "macros_match_calories": macros_match_calories(goals),
    }


@router.get("")
async def get_goals(request: Request) -> dict[str, object]:
    """Return the current goals."""
    container: AppContainer = request.app.state.container
    return _goals_response(container.goals_store.goals)


@router.patch("")
async def update_goals(
    request: Request, changes: dict[str, Any] = Body(...)
) -> dict[str, object]:
    """Merge changes onto the current goals."""
    container: AppContainer = request.app.state.container
    return _goals_response(container.goals_store.update(changes))


@router.post("/reset")
async def reset_goals(request: Request) -> dict[str, object]:
    """Restore the default goals."""
    container: AppContainer = request.app.state.container
    return _goals_response(container.goals_store.reset())


@router.post("/presets/{preset}")
async def apply_preset(preset: str, request: Request) -> dict[str, object]:
    """Split the calorie goal into macros using a named preset."""
    container: AppContainer = request.app.state.container
    if preset not in MACRO_PRESETS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    goals = container.goals_store.goals
    updated = container.goals_store.update(
        apply_macro_preset(goals.daily_calories, preset)
    )
    return _goals_response(updated)


@router.get("/calorie-target")
async def calorie_target(  # noqa: PLR0913
    weight_kg: Annotated[float, Query(gt=0)],
    height_cm: Annotated[float, Query(gt=0)],
    age: Annotated[int, Query(ge=0)],
    sex: Sex,
    activity_level: Annotated[float, Query(gt=0)],
    goal: GoalType,
) -> dict[str, object]:
    """Suggest a daily calorie goal from body measurements."""
    return {
        "daily_calories": calculate_calorie_goal(
            weight_kg, height_cm, age, sex, activity_level, goal
        ),
        "bmi": round(calculate_bmi(weight_kg, height_cm), 1),
    }
