"""Tests for calorie and macro target helpers."""

import pytest

from fitness_ledger.domain.models import UserGoals
from fitness_ledger.services.targets import (
    ACTIVITY_LEVELS,
    apply_macro_preset,
    calculate_bmi,
    calculate_calorie_goal,
    macro_calories,
    macros_match_calories,
)


def test_calculate_bmi() -> None:
    assert calculate_bmi(80, 200) == pytest.approx(20.0)


@pytest.mark.parametrize(
    ("sex", "goal", "expected"),
    [
        ("male", "maintain", 2759),
        ("male", "lose", 2259),
        ("female", "gain", 3002),
    ],
)
def test_calculate_calorie_goal(sex: str, goal: str, expected: int) -> None:
    result = calculate_calorie_goal(
        weight_kg=80,
        height_cm=180,
        age=30,
        sex=sex,
        activity_level=ACTIVITY_LEVELS["moderately_active"],
        goal=goal,
    )

    assert result == expected


def test_apply_macro_preset_balanced() -> None:
    assert apply_macro_preset(2000, "balanced") == {
        "daily_protein": 150,
        "daily_carbs": 200,
        "daily_fat": 67,
    }


def test_apply_macro_preset_unknown_raises() -> None:
    with pytest.raises(KeyError):
        apply_macro_preset(2000, "keto")


def test_macro_calories() -> None:
    assert macro_calories(150, 200, 65) == 1985


def test_default_goals_match_calories() -> None:
    assert macros_match_calories(UserGoals()) is True
    assert macros_match_calories(UserGoals(daily_calories=3000)) is False
