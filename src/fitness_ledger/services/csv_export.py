"""CSV exports of meals and workouts."""

import csv
import io
from collections.abc import Iterable

from fitness_ledger.domain.models import Exercise, Meal, Workout

MEAL_COLUMNS = ["date", "type", "foodName", "calories", "protein", "carbs", "fat"]
WORKOUT_COLUMNS = ["date", "type", "duration", "exercises", "notes"]


def meals_csv(meals: Iterable[Meal]) -> str:
    """Render meals as CSV with one row per meal."""
    rows = (
        {
            "date": meal.date,
            "type": meal.type,
            "foodName": meal.food_name,
            "calories": meal.calories,
            "protein": meal.protein,
            "carbs": meal.carbs,
            "fat": meal.fat,
        }
        for meal in meals
    )
    return _write(MEAL_COLUMNS, rows)


def workouts_csv(workouts: Iterable[Workout]) -> str:
    """Render workouts as CSV; exercises are joined with ``|``."""
    rows = (
        {
            "date": workout.date,
            "type": workout.type,
            "duration": workout.duration,
            "exercises": "|".join(
                _format_exercise(exercise) for exercise in workout.exercises
            ),
            "notes": workout.notes or "",
        }
        for workout in workouts
    )
    return _write(WORKOUT_COLUMNS, rows)


def _write(columns: list[str], rows: Iterable[dict[str, object]]) -> str:
    buffer = io.StringIO()
    buffer.write(",".join(columns) + "\n")
    writer = csv.DictWriter(
        buffer, fieldnames=columns, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n"
    )
    writer.writerows(rows)
    return buffer.getvalue()


def _format_exercise(exercise: Exercise) -> str:
    reps = _join_sets(exercise.reps)
    weights = _join_sets(exercise.weights or [])
    suffix = f" @{weights}kg" if weights else ""
    return f"{exercise.name}({exercise.sets}x{reps}{suffix})"


def _join_sets(values: list[int | None] | list[float | None]) -> str:
    return "/".join("-" if value is None else f"{value:g}" for value in values)
