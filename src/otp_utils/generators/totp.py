"""
Time-based one-time passwords (TOTP, RFC 6238).

A :class:`TOTPGenerator` wraps an :class:`HOTPGenerator` and derives the
counter from a point in time: ``floor(unix_millis / period_millis)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..encode_utils.hmac_codec import HMACAlgorithm
from ..encode_utils.otpauth_uri import ISSUER, PERIOD, OTPType, build_uri
from ..encode_utils.secret_helper import SecretLike
from ..exceptions import ConstructionError, InputValidationError
from .clock import DEFAULT_CLOCK, Clock
from .hotp import HOTPGenerator

DEFAULT_PERIOD = timedelta(seconds=30)
MIN_PERIOD = timedelta(seconds=1)

_ONE_MILLISECOND = timedelta(milliseconds=1)
_ONE_SECOND = timedelta(seconds=1)

Instant = Union[int, float, datetime, date]


def period_millis(period: timedelta) -> int:
    return period // _ONE_MILLISECOND


def counter_for(seconds_past_1970: float, period: timedelta) -> int:
    """
    Number of whole periods elapsed since the Unix epoch.

    Raises:
        InputValidationError: If the time is not above zero.
    """
    if seconds_past_1970 <= 0:
        raise InputValidationError("Time must be above zero")
    return int(seconds_past_1970 * 1000) // period_millis(period)


def counter_from_clock(clock: Clock, period: timedelta) -> int:
    return clock.millis() // period_millis(period)


@dataclass(frozen=True)
class TOTPGenerator:
    """
    Immutable TOTP configuration.

    ``clock`` is only the default time source for :meth:`now`,
    :meth:`verify` and :meth:`duration_until_next_time_window`; each of them
    also accepts an explicit clock. It does not take part in equality.
    """

    hotp: HOTPGenerator
    period: timedelta = DEFAULT_PERIOD
    clock: Clock = field(default=DEFAULT_CLOCK, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.hotp, HOTPGenerator):
            raise ConstructionError("TOTPGenerator requires an HOTPGenerator")
        if not isinstance(self.period, timedelta):
            raise ConstructionError(f"Period must be a timedelta, got {type(self.period).__name__}")
        if self.period < MIN_PERIOD:
            raise ConstructionError("Period must be at least 1 second")
        if self.period % _ONE_SECOND:
            raise ConstructionError("Period must be a whole number of seconds")

    @classmethod
    def with_default_values(cls, secret: SecretLike) -> "TOTPGenerator":
        return cls(hotp=HOTPGenerator.with_default_values(secret))

    @classmethod
    def from_uri(cls, uri: str) -> "TOTPGenerator":
        """Build a generator from an ``otpauth://totp/...`` URI."""
        from .builders import TOTPBuilder

        return TOTPBuilder.from_uri(uri).build()

    @property
    def algorithm(self) -> HMACAlgorithm:
        return self.hotp.algorithm

    @property
    def password_length(self) -> int:
        return self.hotp.password_length

    @property
    def secret(self) -> bytes:
        return self.hotp.secret

    def now(self, clock: Optional[Clock] = None) -> str:
        """Code for the current time window."""
        return self.hotp.generate(counter_from_clock(clock or self.clock, self.period))

    def at(self, instant: Instant) -> str:
        """
        Code for a point in time.

        Args:
            instant: Seconds since 1970 (int or float), a ``datetime`` (naive
                values are local time) or a ``date`` (start of day in the
                clock's time zone).

        Raises:
            InputValidationError: If the instant is not after the epoch.
        """
        return self.hotp.generate(self.counter_at(instant))

    def counter_at(self, instant: Instant) -> int:
        return counter_for(self._seconds_past_1970(instant), self.period)

    def generate(self, counter: int) -> str:
        return self.hotp.generate(counter)

    def verify(self, code: str, delay_window: int = 0, clock: Optional[Clock] = None) -> bool:
        """
        Check a code against the current time window, tolerating
        ``delay_window`` windows of drift on either side.
        """
        counter = counter_from_clock(clock or self.clock, self.period)
        return self.hotp.verify(code, counter, delay_window)

    def verify_counter(self, code: str, counter: int, delay_window: int = 0) -> bool:
        return self.hotp.verify(code, counter, delay_window)

    def duration_until_next_time_window(self, clock: Optional[Clock] = None) -> timedelta:
        interval = period_millis(self.period)
        elapsed = (clock or self.clock).millis() % interval
        return timedelta(milliseconds=interval - elapsed)

    def get_uri(self, issuer: str, account: str = "") -> str:
        """Create an otpauth URI for provisioning an authenticator app."""
        query = self.hotp.uri_query()
        query[PERIOD] = str(self.period // _ONE_SECOND)
        query[ISSUER] = issuer
        return build_uri(OTPType.TOTP, issuer, account, query)

    def _seconds_past_1970(self, instant: Instant) -> float:
        if isinstance(instant, datetime):
            return instant.timestamp()
        if isinstance(instant, date):
            start_of_day = datetime.combine(instant, time.min, tzinfo=self.clock.tzinfo)
            return start_of_day.timestamp()
        return instant


__all__ = [
    "DEFAULT_PERIOD",
    "MIN_PERIOD",
    "Instant",
    "TOTPGenerator",
    "counter_for",
    "counter_from_clock",
    "period_millis",
]
