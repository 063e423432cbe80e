"""
Base32 secrets: random generation and decoding into raw HMAC keys.
"""

from __future__ import annotations

import base64
import binascii
import re
import secrets
from typing import Union

from ..exceptions import ConstructionError, InputValidationError

DEFAULT_BITS = 160

SecretLike = Union[bytes, bytearray, str]


class SecretGenerator:
    """Generates Base32-encoded OTP secrets."""

    @staticmethod
    def generate(bits: int = DEFAULT_BITS) -> bytes:
        """
        Generate a random Base32 secret.

        Args:
            bits: Key strength. Should be at least the output size of the HMAC
                algorithm in use (SHA1: 160, SHA256: 256, SHA512: 512).

        Returns:
            The Base32 text of ``bits // 8`` random bytes, as ASCII bytes.
        """
        if bits < 8:
            raise InputValidationError("bits must be at least 8")
        random_bytes = secrets.token_bytes(bits // 8)
        return base64.b32encode(random_bytes)

    @staticmethod
    def generate_str(bits: int = DEFAULT_BITS) -> str:
        return SecretGenerator.generate(bits).decode("ascii")


def secret_to_bytes(secret: SecretLike) -> bytes:
    if isinstance(secret, str):
        try:
            return secret.encode("ascii")
        except UnicodeEncodeError as exc:
            raise ConstructionError("Secret must be a Base32 string") from exc
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise ConstructionError(f"Unsupported secret type: {type(secret).__name__}")
    return bytes(secret)


def decode_secret(secret: SecretLike) -> bytes:
    """
    Decode Base32 secret text into the raw key bytes.

    Whitespace is ignored, lowercase is accepted and missing ``=`` padding is
    restored.

    Raises:
        ConstructionError: If the secret is not valid Base32.
    """
    try:
        text = secret_to_bytes(secret).decode("ascii")
    except UnicodeDecodeError as exc:
        raise ConstructionError("Secret must be a Base32 string") from exc

    cleaned = re.sub(r"\s+", "", text).upper()
    missing_padding = len(cleaned) % 8
    if missing_padding:
        cleaned += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(cleaned, casefold=True)
    except (binascii.Error, ValueError) as exc:
        raise ConstructionError("Secret must be a valid Base32 string") from exc


__all__ = ["DEFAULT_BITS", "SecretGenerator", "SecretLike", "decode_secret", "secret_to_bytes"]
