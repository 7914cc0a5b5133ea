"""Concrete repository implementation for IdentityRecord backed by SQLAlchemy."""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity_vault.application.interfaces import IdentityRecordRepository, UNIQUE_FIELDS
from identity_vault.domain.entities import IdentityRecord
from identity_vault.domain.exceptions import ConstraintViolation
from identity_vault.infrastructure.database.models import IdentityRecordModel

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = frozenset({
    "name",
    "email",
    "primary_mobile",
    "secondary_mobile",
    "date_of_birth",
    "place_of_birth",
    "current_address",
    "permanent_address",
    "is_active",
    "updated_at",
    "deleted_at",
})


class SQLAlchemyIdentityRecordRepository(IdentityRecordRepository):
    """Implements the IdentityRecordRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: IdentityRecordModel) -> IdentityRecord:
        """Map ORM model → domain entity."""
        return IdentityRecord(
            id=model.id,
            name=model.name,
            email=model.email,
            primary_mobile=model.primary_mobile,
            secondary_mobile=model.secondary_mobile,
            national_id=model.national_id,
            national_id_hash=model.national_id_hash,
            tax_id=model.tax_id,
            tax_id_hash=model.tax_id_hash,
            date_of_birth=model.date_of_birth,
            place_of_birth=model.place_of_birth,
            current_address=model.current_address,
            permanent_address=model.permanent_address,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )

    def _to_model(self, entity: IdentityRecord) -> IdentityRecordModel:
        """Map domain entity → ORM model (for creation)."""
        return IdentityRecordModel(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            primary_mobile=entity.primary_mobile,
            secondary_mobile=entity.secondary_mobile,
            national_id=entity.national_id,
            national_id_hash=entity.national_id_hash,
            tax_id=entity.tax_id,
            tax_id_hash=entity.tax_id_hash,
            date_of_birth=entity.date_of_birth,
            place_of_birth=entity.place_of_birth,
            current_address=entity.current_address,
            permanent_address=entity.permanent_address,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            deleted_at=entity.deleted_at,
        )

    async def find_by_unique_field(self, field: str, value: str) -> IdentityRecord | None:
        if field not in UNIQUE_FIELDS:
            raise ValueError(f"'{field}' is not a unique IdentityRecord column")
        stmt = select(IdentityRecordModel).where(getattr(IdentityRecordModel, field) == value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def insert(self, record: IdentityRecord) -> IdentityRecord:
        model = self._to_model(record)
        self._session.add(model)
        await self._flush()
        return self._to_entity(model)

    async def find_live_by_id(self, record_id: str) -> IdentityRecord | None:
        model = await self._get_live_model(record_id)
        return self._to_entity(model) if model else None

    async def update(self, record_id: str, changes: dict[str, Any]) -> IdentityRecord | None:
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update IdentityRecord columns: {sorted(unknown)}")

        model = await self._get_live_model(record_id)
        if model is None:
            return None
        for column, value in changes.items():
            setattr(model, column, value)
        await self._flush()
        return self._to_entity(model)

    async def count_live(self) -> int:
        stmt = (
            select(func.count())
            .select_from(IdentityRecordModel)
            .where(IdentityRecordModel.deleted_at.is_(None))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_live(self, *, offset: int = 0, limit: int = 10) -> list[IdentityRecord]:
        stmt = (
            select(IdentityRecordModel)
            .where(IdentityRecordModel.deleted_at.is_(None))
            .order_by(IdentityRecordModel.created_at.desc(), IdentityRecordModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def _get_live_model(self, record_id: str) -> IdentityRecordModel | None:
        stmt = select(IdentityRecordModel).where(
            IdentityRecordModel.id == record_id,
            IdentityRecordModel.deleted_at.is_(None),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _flush(self) -> None:
        """Flush pending changes, translating unique violations into ConstraintViolation."""
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            field = _violated_column(exc)
            logger.info("Unique constraint rejected write on %s", field or "unknown column")
            raise ConstraintViolation(field) from exc


def _violated_column(exc: IntegrityError) -> str | None:
    """Work out which unique column a driver error refers to.

    PostgreSQL reports the constraint name (``uq_identity_records_<column>``),
    SQLite reports ``identity_records.<column>``.
    """
    message = str(exc.orig)
    for column in UNIQUE_FIELDS:
        if f"uq_identity_records_{column}" in message or f"identity_records.{column}" in message:
            return column
    return None
