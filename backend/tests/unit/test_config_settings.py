"""Unit tests for application settings and wiring."""

import logging
from pathlib import Path

from identity_vault.config import Settings
from identity_vault.infrastructure.dependencies import build_field_codec
from identity_vault.infrastructure.logging.log_config import setup_logging


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_read_encryption_key_from_environment(monkeypatch):
    monkeypatch.setenv("ENCRYPTION_KEY", "ab" * 32)
    monkeypatch.setenv("MAX_PAGE_SIZE", "25")

    settings = Settings()

    assert settings.encryption_key == "ab" * 32
    assert settings.max_page_size == 25
    assert settings.default_page_size == 10


def test_build_field_codec_uses_configured_key():
    codec = build_field_codec(Settings(encryption_key="cd" * 32, fingerprint_pepper=""))

    assert codec.decrypt(codec.encrypt("ABCDE1234F")) == "ABCDE1234F"


def test_setup_logging_applies_category_levels():
    setup_logging(Settings(log_level="INFO", log_level_sql="ERROR", log_level_service="DEBUG"))

    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("identity_vault.application").level == logging.DEBUG
