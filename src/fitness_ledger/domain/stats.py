"""Domain models for derived views."""

from dataclasses import dataclass

from fitness_ledger.domain.models import Trend


@dataclass(frozen=True)
class DailyTotals:
    """Daily total macros."""

    day: str
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DayCount:
    """Number of workouts logged on a day."""

    day: str
    count: int


@dataclass(frozen=True)
class WeightPoint:
    """A weight measurement for charting."""

    day: str
    weight: float


@dataclass(frozen=True)
class MacroCalories:
    """Calories contributed by each macronutrient."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DashboardSummary:
    """Headline numbers for the dashboard view."""

    today: DailyTotals
    weekly_workouts: int
    weekly_calories: float
    current_weight: float | None
    weight_trend: Trend
    calorie_progress: int
    protein_progress: int
