"""Abstract repository interface (port) for IdentityRecord persistence."""

from abc import ABC, abstractmethod
from typing import Any

from identity_vault.domain.entities import IdentityRecord

# Columns guarded by a storage-level unique constraint, in pre-check order.
UNIQUE_FIELDS: tuple[str, ...] = (
    "email",
    "primary_mobile",
    "national_id_hash",
    "tax_id_hash",
)


class IdentityRecordRepository(ABC):
    """Port for identity record persistence — implemented in the infrastructure layer.

    "Live" means ``deleted_at IS NULL``. Uniqueness lookups deliberately
    include soft-deleted rows.
    """

    @abstractmethod
    async def find_by_unique_field(self, field: str, value: str) -> IdentityRecord | None:
        """Find any record (live or soft-deleted) whose unique ``field`` equals ``value``."""
        ...

    @abstractmethod
    async def insert(self, record: IdentityRecord) -> IdentityRecord:
        """Persist a new record.

        Raises:
            ConstraintViolation: a unique column already holds the value.
        """
        ...

    @abstractmethod
    async def find_live_by_id(self, record_id: str) -> IdentityRecord | None:
        """Retrieve a live record by its UUID."""
        ...

    @abstractmethod
    async def update(self, record_id: str, changes: dict[str, Any]) -> IdentityRecord | None:
        """Apply ``changes`` to a live record. Returns None if no live record matched.

        Raises:
            ConstraintViolation: a changed unique column collides with another row.
        """
        ...

    @abstractmethod
    async def count_live(self) -> int:
        """Count live records."""
        ...

    @abstractmethod
    async def list_live(self, *, offset: int = 0, limit: int = 10) -> list[IdentityRecord]:
        """Retrieve a page of live records, newest ``created_at`` first."""
        ...
