"""Process startup for hosts embedding the identity vault."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from identity_vault.config import Settings, get_settings
from identity_vault.infrastructure.database import init_models
from identity_vault.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger(__name__)


async def startup(engine: AsyncEngine | None = None, settings: Settings | None = None) -> None:
    """Configure logging and make sure the schema exists."""
    settings = settings or get_settings()
    setup_logging(settings)
    if not settings.encryption_key:
        logger.warning("ENCRYPTION_KEY is not configured; creating records will fail.")
    if not settings.fingerprint_pepper:
        logger.warning(
            "FINGERPRINT_PEPPER is not configured; identifier fingerprints are unkeyed SHA-256."
        )
    await init_models(engine)
    logger.info("%s v%s ready (%s)", settings.app_title, settings.app_version, settings.app_env)
