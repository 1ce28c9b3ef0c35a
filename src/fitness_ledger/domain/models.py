"""Ledger entity models and their persisted shapes."""

import re
from collections.abc import Mapping
from datetime import date, datetime
from enum import StrEnum
from typing import Annotated, Literal, get_args
from uuid import uuid4

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveFloat,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

LEGACY_KEY_PREFIX = "fitness-app-"

_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class StorageKey(StrEnum):
    """Persistence keys, one blob per key."""

    MEALS = "meals"
    WORKOUTS = "workouts"
    BODY_STATS = "body-stats"
    USER_GOALS = "user-goals"

    @property
    def legacy_name(self) -> str:
        """Key name used by backups from earlier releases."""
        return f"{LEGACY_KEY_PREFIX}{self.value}"

    @property
    def unreadable_name(self) -> str:
        """Key an unreadable blob is moved to before it is overwritten."""
        return f"{self.value}-unreadable"


def _check_day(value: str) -> str:
    if not _DAY_PATTERN.match(value):
        raise ValueError("date must use the YYYY-MM-DD format")
    date.fromisoformat(value)
    return value


def _check_not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


Day = Annotated[str, AfterValidator(_check_day)]
NonEmptyStr = Annotated[str, AfterValidator(_check_not_blank)]

MealType = Literal["Breakfast", "Lunch", "Dinner", "Snack"]
WorkoutType = Literal[
    "Push", "Pull", "Legs", "Upper", "Lower", "Full Body", "Cardio", "Rest"
]
GoalType = Literal["lose", "maintain", "gain"]
Trend = Literal["up", "down", "stable"]

MEAL_TYPES: tuple[str, ...] = get_args(MealType)
WORKOUT_TYPES: tuple[str, ...] = get_args(WorkoutType)


class LedgerModel(BaseModel):
    """Base model persisted with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def normalize_keys(cls, data: Mapping[str, object]) -> dict[str, object]:
        """Rename snake_case attribute names to their persisted aliases."""
        fields = cls.model_fields
        return {
            (fields[key].alias or key) if key in fields else key: value
            for key, value in data.items()
        }

    def to_document(self) -> dict[str, object]:
        """Return the JSON-ready persisted form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LedgerEntity(LedgerModel):
    """Dated entry owned by a collection store."""

    id: str
    date: Day
    created_at: datetime


class Meal(LedgerEntity):
    """A single logged food item."""

    type: MealType
    food_name: NonEmptyStr
    calories: NonNegativeFloat
    protein: NonNegativeFloat = 0
    carbs: NonNegativeFloat = 0
    fat: NonNegativeFloat = 0


class Exercise(LedgerModel):
    """Exercise embedded in a workout, with per-set reps and weights."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: NonEmptyStr
    sets: NonNegativeInt = 0
    reps: list[NonNegativeInt | None] = Field(default_factory=list)
    weights: list[NonNegativeFloat | None] | None = None
    duration: NonNegativeFloat | None = None
    notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_scalars(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        reps = data.get("reps")
        if isinstance(reps, int | float) and not isinstance(reps, bool):
            data["reps"] = [reps]
        legacy_weight = data.pop("weight", None)
        if data.get("weights") is None and isinstance(legacy_weight, int | float):
            data["weights"] = [legacy_weight]
        return data

    @model_validator(mode="after")
    def _check_per_set_lengths(self) -> "Exercise":
        for label, values in (("reps", self.reps), ("weights", self.weights)):
            if values is not None and len(values) > 1 and len(values) != self.sets:
                raise ValueError(f"{label} must have one entry per set")
        return self


class Workout(LedgerEntity):
    """A training session made of ordered exercises."""

    type: WorkoutType
    exercises: list[Exercise] = Field(default_factory=list)
    duration: NonNegativeFloat = 0
    notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _assign_exercise_ids(cls, data: object) -> object:
        """Give id-less exercises ids derived from the workout id and position.

        The same stored workout always decodes to the same exercise ids.
        """
        if not isinstance(data, dict) or not isinstance(data.get("id"), str):
            return data
        exercises = data.get("exercises")
        if not isinstance(exercises, list):
            return data
        taken = {
            exercise["id"]
            for exercise in exercises
            if isinstance(exercise, dict) and isinstance(exercise.get("id"), str)
        }
        assigned: list[object] = []
        for position, exercise in enumerate(exercises):
            if isinstance(exercise, dict) and not exercise.get("id"):
                suffix = position
                while f"{data['id']}-{suffix}" in taken:
                    suffix += 1
                exercise = {**exercise, "id": f"{data['id']}-{suffix}"}
                taken.add(exercise["id"])
            assigned.append(exercise)
        return {**data, "exercises": assigned}

    @field_validator("duration", mode="before")
    @classmethod
    def _missing_duration(cls, value: object) -> object:
        return 0 if value is None else value


class BodyStat(LedgerEntity):
    """Body measurements taken on a day; every measurement is optional."""

    weight: NonNegativeFloat | None = None
    body_fat: float | None = Field(default=None, ge=0, le=100)
    muscle: NonNegativeFloat | None = None
    waist: NonNegativeFloat | None = None
    chest: NonNegativeFloat | None = None
    arms: NonNegativeFloat | None = None
    thighs: NonNegativeFloat | None = None
    notes: str | None = None
    photo_path: str | None = None


class UserGoals(LedgerModel):
    """Daily nutrition targets; the defaults apply until the user edits them."""

    daily_calories: NonNegativeFloat = 2000
    daily_protein: NonNegativeFloat = 150
    daily_carbs: NonNegativeFloat = 200
    daily_fat: NonNegativeFloat = 65
    target_weight: NonNegativeFloat | None = None
    activity_level: PositiveFloat = 1.375
    goal: GoalType = "maintain"
