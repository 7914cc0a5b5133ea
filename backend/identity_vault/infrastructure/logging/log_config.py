"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(e.g. SQLAlchemy SQL statements) can be silenced without affecting the
record service.

Usage:
    from identity_vault.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once at startup
"""

import logging
import sys

from identity_vault.config import Settings, get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_service": [
        "identity_vault.application",
        "identity_vault.infrastructure.security",
        "identity_vault.infrastructure.database",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Python logging levels from application settings."""
    settings = settings or get_settings()
    root_level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # Ensure at least one handler exists when running scripts or tests.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s — %(message)s",
            )
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, sql=%s, service=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_service,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
