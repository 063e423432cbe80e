"""
Counter-based one-time passwords (HOTP, RFC 4226).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from pyotp.utils import strings_equal

from ..encode_utils.hmac_codec import (
    DEFAULT_ALGORITHM,
    MAX_COUNTER,
    HMACAlgorithm,
    counter_to_bytes,
    truncated_code,
)
from ..encode_utils.otpauth_uri import (
    ALGORITHM,
    COUNTER,
    DIGITS,
    ISSUER,
    SECRET,
    OTPType,
    build_uri,
)
from ..encode_utils.secret_helper import SecretLike, decode_secret, secret_to_bytes
from ..exceptions import ConstructionError, InputValidationError

DEFAULT_PASSWORD_LENGTH = 6
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 8


def password_length_is_valid(password_length: Any) -> bool:
    return (
        isinstance(password_length, int)
        and not isinstance(password_length, bool)
        and MIN_PASSWORD_LENGTH <= password_length <= MAX_PASSWORD_LENGTH
    )


def code_is_well_formed(code: Any, password_length: int) -> bool:
    """True if ``code`` is exactly ``password_length`` ASCII decimal digits."""
    return (
        isinstance(code, str)
        and len(code) == password_length
        and code.isascii()
        and code.isdigit()
    )


@dataclass(frozen=True)
class HOTPGenerator:
    """
    Immutable HOTP configuration: secret, password length and algorithm.

    The secret is the Base32 text (as bytes); it is decoded into the HMAC key
    once, when the generator is created. Invalid configurations raise
    :class:`ConstructionError` here and are never re-checked per call.
    """

    secret: bytes = field(repr=False)
    password_length: int = DEFAULT_PASSWORD_LENGTH
    algorithm: HMACAlgorithm = DEFAULT_ALGORITHM
    _key: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        secret = secret_to_bytes(self.secret)
        if not secret:
            raise ConstructionError("Secret must not be empty")
        if not password_length_is_valid(self.password_length):
            raise ConstructionError(
                f"Password length must be between {MIN_PASSWORD_LENGTH} and "
                f"{MAX_PASSWORD_LENGTH} digits"
            )
        if not isinstance(self.algorithm, HMACAlgorithm):
            raise ConstructionError(f"Unsupported HMAC algorithm: {self.algorithm!r}")

        key = decode_secret(secret)
        if not key:
            raise ConstructionError("Secret must decode to at least one byte")

        object.__setattr__(self, "secret", secret)
        object.__setattr__(self, "_key", key)

    @classmethod
    def with_default_values(cls, secret: SecretLike) -> "HOTPGenerator":
        return cls(secret=secret_to_bytes(secret))

    @classmethod
    def from_uri(cls, uri: str) -> "HOTPGenerator":
        """Build a generator from an ``otpauth://hotp/...`` URI."""
        from .builders import HOTPBuilder

        return HOTPBuilder.from_uri(uri).build()

    def generate(self, counter: int) -> str:
        """
        Generate the code for a counter.

        Raises:
            InputValidationError: If the counter is negative or wider than 64 bits.
        """
        if counter < 0:
            raise InputValidationError("Counter must be greater than or equal to 0")
        return truncated_code(
            self._key, counter_to_bytes(counter), self.algorithm, self.password_length
        )

    def verify(self, code: str, counter: int, delay_window: int = 0) -> bool:
        """
        Check a code against ``counter`` and the ``delay_window`` counters on
        either side of it.

        Anything other than ``password_length`` ASCII digits is rejected before
        comparison. Counters that fall outside ``[0, 2^64 - 1]`` are skipped.
        """
        if delay_window < 0:
            raise InputValidationError("Delay window must be greater than or equal to 0")
        if not code_is_well_formed(code, self.password_length):
            return False

        for offset in range(-delay_window, delay_window + 1):
            candidate = counter + offset
            if candidate < 0 or candidate > MAX_COUNTER:
                continue
            if strings_equal(code, self.generate(candidate)):
                return True
        return False

    def uri_query(self) -> Dict[str, str]:
        return {
            DIGITS: str(self.password_length),
            SECRET: self.secret.decode("ascii"),
            ALGORITHM: self.algorithm.name,
        }

    def get_uri(self, counter: int, issuer: str, account: str = "") -> str:
        """
        Create an otpauth URI for provisioning an authenticator app.

        Args:
            counter: Initial counter value.
            issuer: Issuer name.
            account: Account name, optional.
        """
        if counter < 0:
            raise InputValidationError("Counter must be greater than or equal to 0")
        query = self.uri_query()
        query[COUNTER] = str(counter)
        query[ISSUER] = issuer
        return build_uri(OTPType.HOTP, issuer, account, query)


__all__ = [
    "DEFAULT_PASSWORD_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "MAX_PASSWORD_LENGTH",
    "HOTPGenerator",
    "code_is_well_formed",
    "password_length_is_valid",
]
