from .identity_record import (
    IMMUTABLE_FIELDS,
    IdentityRecordCreate,
    IdentityRecordListResponse,
    IdentityRecordResponse,
    IdentityRecordUpdate,
    PaginationResponse,
)

__all__ = [
    "IMMUTABLE_FIELDS",
    "IdentityRecordCreate",
    "IdentityRecordListResponse",
    "IdentityRecordResponse",
    "IdentityRecordUpdate",
    "PaginationResponse",
]
