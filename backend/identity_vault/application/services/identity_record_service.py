"""Application service (use case) for IdentityRecord operations."""

import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from identity_vault.application.interfaces import IdentityRecordRepository, SensitiveFieldCodec
from identity_vault.application.schemas import (
    IMMUTABLE_FIELDS,
    IdentityRecordCreate,
    IdentityRecordUpdate,
)
from identity_vault.domain.entities import IdentityRecord, Pagination, RecordPage
from identity_vault.domain.errors import RecordError, ServiceResult
from identity_vault.domain.exceptions import (
    ConstraintViolation,
    IdentityVaultError,
    InternalError,
)

logger = logging.getLogger(__name__)

# Storage column → name reported to callers in DUPLICATE_FIELD errors.
_DUPLICATE_FIELD_NAMES: dict[str, str] = {
    "email": "email",
    "primary_mobile": "primary_mobile",
    "national_id_hash": "national_id",
    "tax_id_hash": "tax_id",
}
# Plain unique fields an update may change.
_MUTABLE_UNIQUE_FIELDS: tuple[str, ...] = ("email", "primary_mobile")


class IdentityRecordService:
    """Orchestrates identity record logic. Depends on the repository and codec ports (DI).

    Every business outcome is returned as a ``ServiceResult``. Exceptions are
    reserved for failures the caller cannot act on: a misconfigured key
    (``EncryptionConfigError``) or a broken store (``InternalError``).
    The service keeps no state between calls.
    """

    def __init__(
        self,
        repository: IdentityRecordRepository,
        codec: SensitiveFieldCodec,
        *,
        default_page_size: int = 10,
        max_page_size: int = 50,
    ):
        self._repository = repository
        self._codec = codec
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def create_record(self, data: IdentityRecordCreate) -> ServiceResult[IdentityRecord]:
        national_id_hash = self._codec.fingerprint(data.national_id)
        tax_id_hash = self._codec.fingerprint(data.tax_id)

        duplicate = await self._first_duplicate(
            (
                ("email", data.email),
                ("primary_mobile", data.primary_mobile),
                ("national_id_hash", national_id_hash),
                ("tax_id_hash", tax_id_hash),
            )
        )
        if duplicate is not None:
            logger.info("Rejected identity record: duplicate %s", duplicate)
            return ServiceResult.fail(RecordError.duplicate(duplicate))

        now = datetime.now(timezone.utc)
        record = IdentityRecord(
            name=data.name,
            email=data.email,
            primary_mobile=data.primary_mobile,
            secondary_mobile=data.secondary_mobile,
            national_id=self._codec.encrypt(data.national_id),
            national_id_hash=national_id_hash,
            tax_id=self._codec.encrypt(data.tax_id),
            tax_id_hash=tax_id_hash,
            date_of_birth=data.date_of_birth,
            place_of_birth=data.place_of_birth,
            current_address=data.current_address,
            permanent_address=data.permanent_address,
            created_at=now,
            updated_at=now,
        )

        try:
            with self._store_guard("create"):
                created = await self._repository.insert(record)
        except ConstraintViolation as exc:
            # Lost the race against a concurrent create.
            return self._duplicate_from_violation(exc, "create")

        logger.info("Created identity record %s", created.id)
        return ServiceResult.ok(created)

    async def update_record(
        self, record_id: str, data: IdentityRecordUpdate
    ) -> ServiceResult[IdentityRecord]:
        changes: dict[str, Any] = data.provided_fields()
        if not changes:
            return ServiceResult.fail(RecordError.validation("No data provided for update"))

        for field in IMMUTABLE_FIELDS:
            if field in changes:
                logger.warning("Rejected update of immutable field %s on %s", field, record_id)
                return ServiceResult.fail(RecordError.immutable(field))

        with self._store_guard("update"):
            current = await self._repository.find_live_by_id(record_id)
        if current is None:
            return ServiceResult.fail(RecordError.not_found(record_id))

        for field in _MUTABLE_UNIQUE_FIELDS:
            if field not in changes or changes[field] == getattr(current, field):
                continue
            with self._store_guard("update"):
                holder = await self._repository.find_by_unique_field(field, changes[field])
            if holder is not None and holder.id != record_id:
                return ServiceResult.fail(RecordError.duplicate(field))

        changes["updated_at"] = datetime.now(timezone.utc)
        try:
            with self._store_guard("update"):
                updated = await self._repository.update(record_id, changes)
        except ConstraintViolation as exc:
            return self._duplicate_from_violation(exc, "update")

        if updated is None:
            # Soft-deleted between the lookup and the write.
            return ServiceResult.fail(RecordError.not_found(record_id))

        logger.info("Updated identity record %s (%s)", record_id, ", ".join(sorted(changes)))
        return ServiceResult.ok(updated)

    async def get_record(self, record_id: str) -> ServiceResult[IdentityRecord]:
        with self._store_guard("get"):
            record = await self._repository.find_live_by_id(record_id)
        if record is None:
            return ServiceResult.fail(RecordError.not_found(record_id))
        return ServiceResult.ok(record)

    async def list_records(
        self, page: int = 1, limit: int | None = None
    ) -> ServiceResult[RecordPage]:
        """Return one page of live records, newest first.

        ``page`` is clamped to at least 1 and ``limit`` to at most the
        configured maximum. A non-positive ``limit`` is a validation error.
        """
        if limit is None:
            limit = self._default_page_size
        if limit < 1:
            return ServiceResult.fail(
                RecordError.validation("limit must be at least 1", field="limit")
            )

        safe_page = max(page, 1)
        safe_limit = min(limit, self._max_page_size)
        offset = (safe_page - 1) * safe_limit

        # Both reads share one session, so they run back to back.
        with self._store_guard("list"):
            records = await self._repository.list_live(offset=offset, limit=safe_limit)
            total = await self._repository.count_live()

        return ServiceResult.ok(
            RecordPage(
                records=records,
                pagination=Pagination(
                    page=safe_page,
                    limit=safe_limit,
                    total=total,
                    total_pages=math.ceil(total / safe_limit),
                ),
            )
        )

    async def delete_record(self, record_id: str) -> ServiceResult[IdentityRecord]:
        """Soft-delete a live record. A second delete reports NOT_FOUND."""
        with self._store_guard("delete"):
            current = await self._repository.find_live_by_id(record_id)
        if current is None:
            return ServiceResult.fail(RecordError.not_found(record_id))

        now = datetime.now(timezone.utc)
        with self._store_guard("delete"):
            deleted = await self._repository.update(
                record_id,
                {"deleted_at": now, "is_active": False, "updated_at": now},
            )
        if deleted is None:
            return ServiceResult.fail(RecordError.not_found(record_id))

        logger.info("Soft-deleted identity record %s", record_id)
        return ServiceResult.ok(deleted)

    # ── Helpers ──────────────────────────────────────────────────────

    async def _first_duplicate(self, candidates: tuple[tuple[str, str], ...]) -> str | None:
        """Return the public name of the first field already taken, checking in order."""
        for column, value in candidates:
            with self._store_guard("create"):
                existing = await self._repository.find_by_unique_field(column, value)
            if existing is not None:
                return _DUPLICATE_FIELD_NAMES[column]
        return None

    @staticmethod
    def _duplicate_from_violation(
        exc: ConstraintViolation, operation: str
    ) -> ServiceResult[IdentityRecord]:
        field = _DUPLICATE_FIELD_NAMES.get(exc.field or "")
        if field is None:
            raise InternalError(operation) from exc
        logger.info("Store rejected %s: duplicate %s", operation, field)
        return ServiceResult.fail(RecordError.duplicate(field))

    @staticmethod
    @contextmanager
    def _store_guard(operation: str) -> Iterator[None]:
        """Let domain errors through; wrap anything else the store raises in InternalError."""
        try:
            yield
        except IdentityVaultError:
            raise
        except Exception as exc:
            logger.exception("Store failure during %s", operation)
            raise InternalError(operation) from exc
