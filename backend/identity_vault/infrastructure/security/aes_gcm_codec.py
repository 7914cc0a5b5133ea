"""AES-256-GCM implementation of the SensitiveFieldCodec port.

Token layout (URL-safe base64)::

    nonce (12 bytes) || ciphertext || GCM tag (16 bytes)

The nonce travels inside the token, so decryption only needs the token and
the process-wide key.
"""

import base64
import binascii
import hashlib
import hmac
import logging
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from identity_vault.application.interfaces import SensitiveFieldCodec
from identity_vault.domain.exceptions import DecryptionError, EncryptionConfigError

logger = logging.getLogger(__name__)

KEY_SIZE_BYTES = 32
NONCE_SIZE_BYTES = 12
_TAG_SIZE_BYTES = 16


class AesGcmFieldCodec(SensitiveFieldCodec):
    """Encrypts with AES-256-GCM and fingerprints with (HMAC-)SHA-256.

    The key is validated lazily: constructing the codec never fails, but the
    first ``encrypt``/``decrypt`` with a missing or malformed key raises
    ``EncryptionConfigError``.
    """

    def __init__(self, key_hex: str | None, fingerprint_pepper: str = ""):
        self._key_hex = (key_hex or "").strip()
        self._pepper = fingerprint_pepper.encode("utf-8") if fingerprint_pepper else b""
        self._aead: AESGCM | None = None

    def _cipher(self) -> AESGCM:
        if self._aead is None:
            self._aead = AESGCM(_parse_key(self._key_hex))
        return self._aead

    def encrypt(self, plaintext: str) -> str:
        aead = self._cipher()
        nonce = os.urandom(NONCE_SIZE_BYTES)
        sealed = aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.urlsafe_b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, token: str) -> str:
        aead = self._cipher()
        try:
            raw = base64.urlsafe_b64decode(token.encode("ascii"))
        except (binascii.Error, UnicodeEncodeError, ValueError) as exc:
            raise DecryptionError("Ciphertext is not valid base64") from exc

        if len(raw) < NONCE_SIZE_BYTES + _TAG_SIZE_BYTES:
            raise DecryptionError("Ciphertext is too short")

        nonce, sealed = raw[:NONCE_SIZE_BYTES], raw[NONCE_SIZE_BYTES:]
        try:
            plaintext = aead.decrypt(nonce, sealed, None)
        except InvalidTag as exc:
            logger.warning("Rejected ciphertext: authentication tag mismatch")
            raise DecryptionError("Ciphertext failed authentication") from exc
        return plaintext.decode("utf-8")

    def fingerprint(self, plaintext: str) -> str:
        data = plaintext.encode("utf-8")
        if self._pepper:
            return hmac.new(self._pepper, data, hashlib.sha256).hexdigest()
        return hashlib.sha256(data).hexdigest()


def _parse_key(key_hex: str) -> bytes:
    """Decode a hex key and check it is exactly 256 bits."""
    if not key_hex:
        raise EncryptionConfigError("ENCRYPTION_KEY is not configured")
    try:
        key = bytes.fromhex(key_hex)
    except ValueError as exc:
        raise EncryptionConfigError("ENCRYPTION_KEY must be hex-encoded") from exc
    if len(key) != KEY_SIZE_BYTES:
        raise EncryptionConfigError(
            f"ENCRYPTION_KEY must be {KEY_SIZE_BYTES * 8} bits, got {len(key) * 8}"
        )
    return key
