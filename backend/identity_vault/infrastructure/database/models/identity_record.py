"""SQLAlchemy ORM model for the IdentityRecord entity."""

from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from identity_vault.infrastructure.database.base import Base
from identity_vault.infrastructure.database.types import UTCDateTime


class IdentityRecordModel(Base):
    """ORM model — maps to the 'identity_records' table.

    The four unique constraints cover soft-deleted rows too, so a value
    stays reserved after its record is deleted.
    """

    __tablename__ = "identity_records"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    primary_mobile: Mapped[str] = mapped_column(String(20), nullable=False)
    secondary_mobile: Mapped[str | None] = mapped_column(String(20), nullable=True)
    national_id: Mapped[str] = mapped_column(Text, nullable=False)
    national_id_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    tax_id: Mapped[str] = mapped_column(Text, nullable=False)
    tax_id_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    place_of_birth: Mapped[str] = mapped_column(String(255), nullable=False)
    current_address: Mapped[str] = mapped_column(Text, nullable=False)
    permanent_address: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_identity_records_email"),
        UniqueConstraint("primary_mobile", name="uq_identity_records_primary_mobile"),
        UniqueConstraint("national_id_hash", name="uq_identity_records_national_id_hash"),
        UniqueConstraint("tax_id_hash", name="uq_identity_records_tax_id_hash"),
        Index("ix_identity_records_live", "deleted_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<IdentityRecordModel(id={self.id}, active={self.is_active})>"
