"""Derived views computed from ledger entries.

Every function here is pure: it reads the entries it is given and returns a
new value, so callers can recompute on every render.
"""

import math
from collections import Counter
from collections.abc import Iterable
from datetime import date, timedelta

from fitness_ledger.domain.models import BodyStat, Meal, Trend, UserGoals, Workout
from fitness_ledger.domain.stats import (
    DailyTotals,
    DashboardSummary,
    DayCount,
    MacroCalories,
    WeightPoint,
)

TREND_THRESHOLD = 0.5
HEATMAP_DAYS = 90
CALORIE_SERIES_DAYS = 7
DAYS_PER_WEEK = 7

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


def shift_day(day: str, days: int) -> str:
    """Return the calendar day ``days`` after ``day``."""
    return (date.fromisoformat(day) + timedelta(days=days)).isoformat()


def day_range(end: str, count: int) -> list[str]:
    """Return ``count`` consecutive days ending at ``end``, oldest first."""
    if count < 0:
        raise ValueError("count must not be negative")
    return [shift_day(end, offset - count + 1) for offset in range(count)]


def week_bounds(anchor: str) -> tuple[str, str]:
    """Return the Monday and Sunday of the week containing ``anchor``."""
    day = date.fromisoformat(anchor)
    start = day - timedelta(days=day.weekday())
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    return start.isoformat(), end.isoformat()


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def daily_macro_totals(meals: Iterable[Meal], day: str) -> DailyTotals:
    """Sum macros over meals logged on ``day``."""
    total = DailyTotals(day=day, calories=0, protein=0, carbs=0, fat=0)
    for meal in meals:
        if meal.date != day:
            continue
        total = DailyTotals(
            day=day,
            calories=total.calories + meal.calories,
            protein=total.protein + meal.protein,
            carbs=total.carbs + meal.carbs,
            fat=total.fat + meal.fat,
        )
    return total


def weekly_workout_count(
    workouts: Iterable[Workout], week_start: str, week_end: str
) -> int:
    """Count workouts dated within ``[week_start, week_end]``."""
    return sum(1 for workout in workouts if week_start <= workout.date <= week_end)


def weekly_calories(meals: Iterable[Meal], week_start: str, week_end: str) -> float:
    """Sum calories over meals dated within ``[week_start, week_end]``."""
    return sum(
        (meal.calories for meal in meals if week_start <= meal.date <= week_end), 0.0
    )


def _weighted_by_recency(body_stats: Iterable[BodyStat]) -> list[BodyStat]:
    """Weight-bearing stats, newest date first; later entries win ties."""
    weighted = [stat for stat in body_stats if stat.weight is not None]
    return sorted(reversed(weighted), key=lambda stat: stat.date, reverse=True)


def latest_weight(body_stats: Iterable[BodyStat]) -> BodyStat | None:
    """Return the most recent stat that records a weight."""
    ranked = _weighted_by_recency(body_stats)
    return ranked[0] if ranked else None


def weight_trend(body_stats: Iterable[BodyStat]) -> Trend:
    """Classify the change between the two most recent weights."""
    ranked = _weighted_by_recency(body_stats)
    if len(ranked) < 2:
        return "stable"
    latest, previous = ranked[0], ranked[1]
    diff = latest.weight - previous.weight  # type: ignore[operator]
    if abs(diff) < TREND_THRESHOLD:
        return "stable"
    return "up" if diff > 0 else "down"


def weight_series(body_stats: Iterable[BodyStat]) -> list[WeightPoint]:
    """Weight measurements ordered oldest first."""
    weighted = [stat for stat in body_stats if stat.weight is not None]
    return [
        WeightPoint(day=stat.date, weight=stat.weight)  # type: ignore[arg-type]
        for stat in sorted(weighted, key=lambda stat: stat.date)
    ]


def goal_progress(actual: float, goal: float) -> int:
    """Percentage of ``goal`` reached; not clamped, 0 when no goal is set."""
    if goal <= 0:
        return 0
    return round_half_up(actual / goal * 100)


def workout_heatmap(
    workouts: Iterable[Workout], window_days: int, anchor: str
) -> list[DayCount]:
    """Workout counts for each day of the window ending at ``anchor``."""
    counts = Counter(workout.date for workout in workouts)
    return [
        DayCount(day=day, count=counts[day]) for day in day_range(anchor, window_days)
    ]


def seven_day_calorie_series(meals: Iterable[Meal], anchor: str) -> list[DailyTotals]:
    """Daily totals for the seven days ending at ``anchor``."""
    logged = list(meals)
    return [
        daily_macro_totals(logged, day)
        for day in day_range(anchor, CALORIE_SERIES_DAYS)
    ]


def meal_type_distribution(meals: Iterable[Meal], day: str) -> dict[str, float]:
    """Calories per meal type on ``day``, in first-logged order."""
    distribution: dict[str, float] = {}
    for meal in meals:
        if meal.date == day:
            distribution[meal.type] = distribution.get(meal.type, 0.0) + meal.calories
    return distribution


def macro_calorie_breakdown(totals: DailyTotals) -> MacroCalories:
    """Calories supplied by each macronutrient."""
    return MacroCalories(
        protein=totals.protein * PROTEIN_KCAL_PER_G,
        carbs=totals.carbs * CARBS_KCAL_PER_G,
        fat=totals.fat * FAT_KCAL_PER_G,
    )


def dashboard_summary(
    meals: Iterable[Meal],
    workouts: Iterable[Workout],
    body_stats: Iterable[BodyStat],
    goals: UserGoals,
    today: str,
) -> DashboardSummary:
    """Combine the headline derivations for ``today``."""
    logged_meals = list(meals)
    logged_stats = list(body_stats)
    week_start, week_end = week_bounds(today)
    totals = daily_macro_totals(logged_meals, today)
    latest = latest_weight(logged_stats)
    return DashboardSummary(
        today=totals,
        weekly_workouts=weekly_workout_count(workouts, week_start, week_end),
        weekly_calories=weekly_calories(logged_meals, week_start, week_end),
        current_weight=latest.weight if latest else None,
        weight_trend=weight_trend(logged_stats),
        calorie_progress=goal_progress(totals.calories, goals.daily_calories),
        protein_progress=goal_progress(totals.protein, goals.daily_protein),
    )
