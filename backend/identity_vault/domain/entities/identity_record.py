"""Domain entity — pure Python business object for an identity record."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import uuid4


@dataclass
class IdentityRecord:
    """Core domain entity for a person's identity details.

    ``national_id`` and ``tax_id`` hold ciphertext only. The matching
    ``*_hash`` fields hold deterministic fingerprints of the plaintext and
    exist solely for duplicate detection.
    """

    name: str
    email: str
    primary_mobile: str
    national_id: str
    national_id_hash: str
    tax_id: str
    tax_id_hash: str
    date_of_birth: date
    place_of_birth: str
    current_address: str
    permanent_address: str
    secondary_mobile: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
