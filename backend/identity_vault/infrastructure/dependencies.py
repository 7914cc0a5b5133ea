"""Dependency wiring — builds application services from infrastructure adapters."""

from sqlalchemy.ext.asyncio import AsyncSession

from identity_vault.config import Settings, get_settings
from identity_vault.application.services import IdentityRecordService
from identity_vault.infrastructure.database.repositories import (
    SQLAlchemyIdentityRecordRepository,
)
from identity_vault.infrastructure.security import AesGcmFieldCodec


def build_field_codec(settings: Settings | None = None) -> AesGcmFieldCodec:
    """Codec keyed from settings. A bad key surfaces on first encrypt/decrypt."""
    settings = settings or get_settings()
    return AesGcmFieldCodec(settings.encryption_key, settings.fingerprint_pepper)


def build_identity_record_service(
    session: AsyncSession, settings: Settings | None = None
) -> IdentityRecordService:
    """Provides an IdentityRecordService bound to the given session."""
    settings = settings or get_settings()
    return IdentityRecordService(
        SQLAlchemyIdentityRecordRepository(session),
        build_field_codec(settings),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
