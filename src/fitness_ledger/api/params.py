"""Shared request parameter helpers."""

from datetime import date

from fastapi import HTTPException
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fitness_ledger.domain.models import Day

_DAY = TypeAdapter(Day)


def resolve_day(value: str | None) -> str:
    """Validate a ``YYYY-MM-DD`` query value, defaulting to today."""
    if value is None:
        return date.today().isoformat()
    try:
        return _DAY.validate_python(value)
    except PydanticValidationError as exc:
        raise HTTPException(
            status_code=422, detail=f"Invalid date: {value}"
        ) from exc
