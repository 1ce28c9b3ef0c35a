"""Errors raised by the ledger core."""

from pydantic import ValidationError as PydanticValidationError


class LedgerError(Exception):
    """Base class for ledger failures reported to callers."""


class ValidationError(LedgerError):
    """A write was rejected because fields are missing or out of range."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        detail = "; ".join(f"{field}: {message}" for field, message in errors.items())
        super().__init__(detail or "invalid entry")

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Collapse pydantic error details into one message per field."""
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "entry"
            errors.setdefault(field, error["msg"])
        return cls(errors)


class MalformedImport(LedgerError):
    """Import bytes are not a JSON object."""


class PersistenceFailure(LedgerError):
    """The key-value store could not write a blob."""
