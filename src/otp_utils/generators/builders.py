"""
Fluent builders for HOTP and TOTP generators.

Setters only record values; validation happens once, in :meth:`build`, so a
builder can be filled from a parsed otpauth URI and still report out-of-range
values as :class:`~otp_utils.exceptions.ConstructionError`.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable, Optional, Union

from ..encode_utils.hmac_codec import DEFAULT_ALGORITHM, HMACAlgorithm
from ..encode_utils.otpauth_uri import OtpauthURI, OTPType, parse_uri
from ..encode_utils.secret_helper import SecretLike, secret_to_bytes
from ..exceptions import ConstructionError
from .clock import DEFAULT_CLOCK, Clock
from .hotp import DEFAULT_PASSWORD_LENGTH, HOTPGenerator
from .totp import DEFAULT_PERIOD, TOTPGenerator

logger = logging.getLogger(__name__)

PeriodLike = Union[timedelta, int, float]


def _to_algorithm(algorithm: Union[HMACAlgorithm, str]) -> HMACAlgorithm:
    if isinstance(algorithm, HMACAlgorithm):
        return algorithm
    try:
        return HMACAlgorithm.from_name(algorithm)
    except ValueError as exc:
        raise ConstructionError(str(exc)) from exc


def _to_period(period: PeriodLike) -> timedelta:
    if isinstance(period, timedelta):
        return period
    if isinstance(period, bool) or not isinstance(period, (int, float)):
        raise ConstructionError(f"Unsupported period type: {type(period).__name__}")
    try:
        return timedelta(seconds=period)
    except OverflowError as exc:
        raise ConstructionError(f"Period out of range: {period!r}") from exc


class HOTPBuilder:
    """Builds :class:`HOTPGenerator` instances."""

    def __init__(self, secret: SecretLike):
        self.secret = secret_to_bytes(secret)
        self.password_length = DEFAULT_PASSWORD_LENGTH
        self.algorithm = DEFAULT_ALGORITHM

    @classmethod
    def from_uri(cls, uri: str) -> "HOTPBuilder":
        """
        Fill a builder from an ``otpauth://hotp/...`` URI.

        Raises:
            MissingSecretError: If the URI has no secret.
            URIParseError: If a field cannot be parsed.
        """
        return cls.from_parsed(parse_uri(uri, expected_type=OTPType.HOTP))

    @classmethod
    def from_parsed(cls, parsed: OtpauthURI) -> "HOTPBuilder":
        builder = cls(parsed.secret)
        if parsed.digits is not None:
            builder.with_password_length(parsed.digits)
        if parsed.algorithm is not None:
            builder.with_algorithm(parsed.algorithm)
        return builder

    def with_password_length(self, password_length: int) -> "HOTPBuilder":
        self.password_length = password_length
        return self

    def with_algorithm(self, algorithm: Union[HMACAlgorithm, str]) -> "HOTPBuilder":
        self.algorithm = _to_algorithm(algorithm)
        return self

    def build(self) -> HOTPGenerator:
        generator = HOTPGenerator(
            secret=self.secret,
            password_length=self.password_length,
            algorithm=self.algorithm,
        )
        logger.debug(
            "Built HOTP generator (digits=%d, algorithm=%s)",
            generator.password_length,
            generator.algorithm.name,
        )
        return generator


class TOTPBuilder:
    """Builds :class:`TOTPGenerator` instances around an :class:`HOTPBuilder`."""

    def __init__(self, secret: SecretLike):
        self.hotp_builder = HOTPBuilder(secret)
        self.period: timedelta = DEFAULT_PERIOD
        self.clock: Clock = DEFAULT_CLOCK

    @classmethod
    def from_uri(cls, uri: str) -> "TOTPBuilder":
        """
        Fill a builder from an ``otpauth://totp/...`` URI.

        Raises:
            MissingSecretError: If the URI has no secret.
            URIParseError: If a field cannot be parsed.
        """
        parsed = parse_uri(uri, expected_type=OTPType.TOTP)
        builder = cls(parsed.secret)
        builder.hotp_builder = HOTPBuilder.from_parsed(parsed)
        if parsed.period is not None:
            builder.with_period(parsed.period)
        return builder

    def with_hotp(self, configure: Callable[[HOTPBuilder], object]) -> "TOTPBuilder":
        """Configure the wrapped HOTP builder through a callback."""
        configure(self.hotp_builder)
        return self

    def with_password_length(self, password_length: int) -> "TOTPBuilder":
        self.hotp_builder.with_password_length(password_length)
        return self

    def with_algorithm(self, algorithm: Union[HMACAlgorithm, str]) -> "TOTPBuilder":
        self.hotp_builder.with_algorithm(algorithm)
        return self

    def with_period(self, period: PeriodLike) -> "TOTPBuilder":
        """Set the time step; plain numbers are seconds."""
        self.period = _to_period(period)
        return self

    def with_clock(self, clock: Optional[Clock]) -> "TOTPBuilder":
        self.clock = clock or DEFAULT_CLOCK
        return self

    def build(self) -> TOTPGenerator:
        generator = TOTPGenerator(
            hotp=self.hotp_builder.build(),
            period=self.period,
            clock=self.clock,
        )
        logger.debug("Built TOTP generator (period=%ss)", self.period.total_seconds())
        return generator


__all__ = ["HOTPBuilder", "TOTPBuilder", "PeriodLike"]
