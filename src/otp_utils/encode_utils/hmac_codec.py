"""
HMAC digest and dynamic truncation (RFC 4226, section 5.3).
"""

from __future__ import annotations

import hashlib
import hmac
import struct
from enum import Enum

from ..exceptions import HashingError, InputValidationError

MAX_COUNTER = 2**64 - 1


class HMACAlgorithm(Enum):
    """Hash primitives usable for one-time passwords."""

    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @property
    def hash_name(self) -> str:
        return self.value

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.value).digest_size

    @classmethod
    def from_name(cls, name: str) -> "HMACAlgorithm":
        """
        Look up an algorithm by name, ignoring case (``"sha256"``, ``"SHA256"``).

        Raises:
            ValueError: If the name is not a supported algorithm.
        """
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError) as exc:
            raise ValueError(f"Unsupported HMAC algorithm: {name!r}") from exc


DEFAULT_ALGORITHM = HMACAlgorithm.SHA1


def counter_to_bytes(counter: int) -> bytes:
    """
    Encode a counter as the 8-byte big-endian message fed to the HMAC.

    Raises:
        InputValidationError: If the counter does not fit an unsigned 64-bit integer.
    """
    if counter < 0 or counter > MAX_COUNTER:
        raise InputValidationError("Counter must be between 0 and 2^64 - 1")
    return struct.pack(">Q", counter)


def hmac_digest(secret_bytes: bytes, message: bytes, algorithm: HMACAlgorithm) -> bytes:
    # A new HMAC object per call; nothing is shared between threads.
    try:
        return hmac.new(secret_bytes, message, algorithm.hash_name).digest()
    except (ValueError, TypeError) as exc:
        raise HashingError(f"HMAC-{algorithm.name} could not be computed") from exc


def truncate(digest: bytes, password_length: int) -> str:
    """
    Extract a decimal code of ``password_length`` digits from an HMAC digest.

    Args:
        digest: Raw HMAC output (at least 20 bytes).
        password_length: Number of digits of the resulting code.

    Returns:
        The code, left-padded with zeros.
    """
    offset = digest[-1] & 0x0F
    binary = (
        (digest[offset] & 0x7F) << 24
        | digest[offset + 1] << 16
        | digest[offset + 2] << 8
        | digest[offset + 3]
    )
    code = binary % (10**password_length)
    return str(code).zfill(password_length)


def truncated_code(
    secret_bytes: bytes,
    counter_bytes: bytes,
    algorithm: HMACAlgorithm,
    password_length: int,
) -> str:
    """
    Compute the one-time password for an already encoded counter.

    Args:
        secret_bytes: Raw key (Base32-decoded secret).
        counter_bytes: Counter as produced by :func:`counter_to_bytes`.
        algorithm: HMAC hash primitive.
        password_length: Number of digits of the resulting code.

    Returns:
        A string of exactly ``password_length`` decimal digits.

    Raises:
        HashingError: If the HMAC primitive fails.
    """
    digest = hmac_digest(secret_bytes, counter_bytes, algorithm)
    return truncate(digest, password_length)


__all__ = [
    "HMACAlgorithm",
    "DEFAULT_ALGORITHM",
    "MAX_COUNTER",
    "counter_to_bytes",
    "hmac_digest",
    "truncate",
    "truncated_code",
]
