"""Structured business errors and the result wrapper returned by services."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from identity_vault.domain.exceptions import RecordServiceError

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Expected business outcomes a caller must handle."""

    VALIDATION_ERROR = "validation_error"
    DUPLICATE_FIELD = "duplicate_field"
    IMMUTABLE_FIELD = "immutable_field"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RecordError:
    """A business error: its kind, the offending field (if any) and a safe message."""

    kind: ErrorKind
    message: str
    field: str | None = None

    @classmethod
    def validation(cls, message: str, field: str | None = None) -> "RecordError":
        return cls(ErrorKind.VALIDATION_ERROR, message, field)

    @classmethod
    def duplicate(cls, field: str) -> "RecordError":
        return cls(ErrorKind.DUPLICATE_FIELD, f"{field} already exists", field)

    @classmethod
    def immutable(cls, field: str) -> "RecordError":
        return cls(ErrorKind.IMMUTABLE_FIELD, f"{field} cannot be changed after creation", field)

    @classmethod
    def not_found(cls, record_id: str) -> "RecordError":
        return cls(ErrorKind.NOT_FOUND, f"IdentityRecord with id '{record_id}' not found")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a service operation — exactly one of ``value`` / ``error`` is set."""

    value: T | None = None
    error: RecordError | None = None

    @classmethod
    def ok(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: RecordError) -> "ServiceResult[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise ``RecordServiceError`` carrying the error."""
        if self.error is not None:
            raise RecordServiceError(self.error)
        return self.value  # type: ignore[return-value]
