"""Domain-specific exceptions — framework-independent.

Only failures that are genuinely exceptional live here. Expected business
outcomes (duplicates, missing records, ...) are returned as values, see
``identity_vault.domain.errors``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from identity_vault.domain.errors import RecordError


class IdentityVaultError(Exception):
    """Base exception for the identity vault."""


class EncryptionConfigError(IdentityVaultError):
    """Raised when the encryption key is missing or not exactly 256 bits."""


class DecryptionError(IdentityVaultError):
    """Raised when a ciphertext is malformed, tampered with or was sealed with another key."""


class ConstraintViolation(IdentityVaultError):
    """Raised by a repository when a storage-level unique constraint rejects a write."""

    def __init__(self, field: str | None):
        self.field = field
        super().__init__(
            f"Unique constraint violated on '{field}'" if field else "Unique constraint violated"
        )


class InternalError(IdentityVaultError):
    """Raised when the persistence layer fails unexpectedly."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Internal error during '{operation}'")


class RecordServiceError(IdentityVaultError):
    """Raised by ``ServiceResult.unwrap()`` when the result carries an error."""

    def __init__(self, error: RecordError):
        self.error = error
        super().__init__(error.message)
