"""Calorie and macro target helpers used when setting goals."""

from dataclasses import dataclass
from typing import Literal

from fitness_ledger.domain.models import GoalType, UserGoals
from fitness_ledger.services.stats import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
    round_half_up,
)

Sex = Literal["male", "female"]

ACTIVITY_LEVELS: dict[str, float] = {
    "sedentary": 1.2,
    "lightly_active": 1.375,
    "moderately_active": 1.55,
    "very_active": 1.725,
    "extremely_active": 1.9,
}

GOAL_CALORIE_ADJUSTMENT: dict[str, int] = {"lose": -500, "maintain": 0, "gain": 500}

MACRO_MATCH_TOLERANCE = 50


@dataclass(frozen=True)
class MacroSplit:
    """Share of daily calories assigned to each macronutrient."""

    protein: float
    carbs: float
    fat: float


MACRO_PRESETS: dict[str, MacroSplit] = {
    "balanced": MacroSplit(protein=0.30, carbs=0.40, fat=0.30),
    "high_protein": MacroSplit(protein=0.40, carbs=0.30, fat=0.30),
    "high_carb": MacroSplit(protein=0.25, carbs=0.50, fat=0.25),
}


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index from weight in kilograms and height in centimetres."""
    return weight_kg / (height_cm * height_cm) * 10000


def calculate_calorie_goal(  # noqa: PLR0913
    weight_kg: float,
    height_cm: float,
    age: int,
    sex: Sex,
    activity_level: float,
    goal: GoalType,
) -> int:
    """Daily calorie target from the Mifflin-St Jeor equation."""
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    bmr += 5 if sex == "male" else -161
    tdee = bmr * activity_level
    return round_half_up(tdee + GOAL_CALORIE_ADJUSTMENT[goal])


def apply_macro_preset(daily_calories: float, preset: str) -> dict[str, int]:
    """Gram targets for a named preset, ready for ``GoalsStore.update``."""
    split = MACRO_PRESETS[preset]
    return {
        "daily_protein": round_half_up(
            daily_calories * split.protein / PROTEIN_KCAL_PER_G
        ),
        "daily_carbs": round_half_up(daily_calories * split.carbs / CARBS_KCAL_PER_G),
        "daily_fat": round_half_up(daily_calories * split.fat / FAT_KCAL_PER_G),
    }


def macro_calories(protein: float, carbs: float, fat: float) -> float:
    """Calories implied by macro gram targets."""
    return (
        protein * PROTEIN_KCAL_PER_G + carbs * CARBS_KCAL_PER_G + fat * FAT_KCAL_PER_G
    )


def macros_match_calories(
    goals: UserGoals, tolerance: float = MACRO_MATCH_TOLERANCE
) -> bool:
    """Return True when macro targets add up to roughly the calorie target."""
    implied = macro_calories(goals.daily_protein, goals.daily_carbs, goals.daily_fat)
    return abs(implied - goals.daily_calories) < tolerance
