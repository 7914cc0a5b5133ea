"""Abstract interface (port) for protecting sensitive identifier values."""

from abc import ABC, abstractmethod


class SensitiveFieldCodec(ABC):
    """Port for reversible encryption and one-way fingerprinting of secrets."""

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        """Encrypt a secret into a self-contained, storable token.

        Each call uses a fresh nonce, so encrypting the same value twice
        yields different tokens.

        Raises:
            EncryptionConfigError: the key is missing or has the wrong length.
        """
        ...

    @abstractmethod
    def decrypt(self, token: str) -> str:
        """Recover the plaintext sealed by ``encrypt``.

        Raises:
            EncryptionConfigError: the key is missing or has the wrong length.
            DecryptionError: the token is malformed, tampered with or sealed with another key.
        """
        ...

    @abstractmethod
    def fingerprint(self, plaintext: str) -> str:
        """Return a deterministic hex digest of the plaintext for equality checks."""
        ...
