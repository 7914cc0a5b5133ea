"""Pydantic DTOs (Data Transfer Objects) for the IdentityRecord feature."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

MOBILE_PATTERN = r"^\+?[1-9]\d{1,14}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# Fields sealed at creation; an update carrying either is rejected by the service.
IMMUTABLE_FIELDS: tuple[str, ...] = ("national_id", "tax_id")
# Fields an update may carry as ``null``; only secondary_mobile is actually cleared.
_NULLABLE_ON_UPDATE = frozenset({"secondary_mobile", *IMMUTABLE_FIELDS})


class IdentityRecordCreate(BaseModel):
    """Schema for creating a new identity record."""

    name: str = Field(..., min_length=2, examples=["John Doe"])
    email: str = Field(..., pattern=EMAIL_PATTERN, examples=["john.doe@example.com"])
    primary_mobile: str = Field(..., pattern=MOBILE_PATTERN, examples=["9876543210"])
    secondary_mobile: str | None = Field(None, pattern=MOBILE_PATTERN)
    national_id: str = Field(..., min_length=12, max_length=12, examples=["123456789012"])
    tax_id: str = Field(..., min_length=10, max_length=10, examples=["ABCDE1234F"])
    date_of_birth: date
    place_of_birth: str = Field(..., examples=["Mumbai"])
    current_address: str = Field(..., min_length=5)
    permanent_address: str = Field(..., min_length=5)


class IdentityRecordUpdate(BaseModel):
    """Schema for a partial update — all fields optional.

    Presence is tracked by pydantic's ``model_fields_set``: a field left out
    of the payload is untouched, while ``secondary_mobile=None`` explicitly
    clears it. ``national_id``/``tax_id`` are accepted here so the service can
    reject them with a precise error instead of silently dropping them.
    """

    name: str | None = Field(None, min_length=2)
    email: str | None = Field(None, min_length=1, pattern=EMAIL_PATTERN)
    primary_mobile: str | None = Field(None, min_length=1, pattern=MOBILE_PATTERN)
    secondary_mobile: str | None = Field(None, min_length=1, pattern=MOBILE_PATTERN)
    # Sealed fields: any value, including null or a malformed one, is accepted
    # so the service reports IMMUTABLE_FIELD rather than a format error.
    national_id: Any = None
    tax_id: Any = None
    date_of_birth: date | None = None
    place_of_birth: str | None = Field(None, min_length=1)
    current_address: str | None = Field(None, min_length=5)
    permanent_address: str | None = Field(None, min_length=5)

    @model_validator(mode="after")
    def _reject_null_for_required_fields(self) -> "IdentityRecordUpdate":
        for name in self.model_fields_set:
            if name not in _NULLABLE_ON_UPDATE and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def provided_fields(self) -> dict[str, Any]:
        """Return only the fields explicitly supplied by the caller."""
        return self.model_dump(exclude_unset=True)


class IdentityRecordResponse(BaseModel):
    """Schema returned to the client — never carries ciphertext or fingerprints."""

    id: str
    name: str
    email: str
    primary_mobile: str
    secondary_mobile: str | None
    date_of_birth: date
    place_of_birth: str
    current_address: str
    permanent_address: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    model_config = {"from_attributes": True}


class IdentityRecordListResponse(BaseModel):
    """Paginated listing of live identity records."""

    records: list[IdentityRecordResponse]
    pagination: PaginationResponse

    model_config = {"from_attributes": True}
