"""Exception hierarchy for one-time password generation and verification."""

from __future__ import annotations

import re
from typing import Optional

_SECRET_VALUE = re.compile(r"([?&]secret=)[^&#]*", re.IGNORECASE)

__all__ = [
    "OTPError",
    "ConstructionError",
    "InputValidationError",
    "URIParseError",
    "MissingSecretError",
    "HashingError",
    "redact_uri",
]


def redact_uri(uri: str) -> str:
    """Replace the ``secret`` query value of a URI with ``***``."""
    return _SECRET_VALUE.sub(r"\1***", uri)


class OTPError(Exception):
    """Base class for every error raised by otp_utils."""


class ConstructionError(OTPError, ValueError):
    """Raised when a generator is built from an invalid configuration."""


class InputValidationError(OTPError, ValueError):
    """Raised when a per-call argument (counter, time, window) is invalid."""


class URIParseError(OTPError, ValueError):
    """
    Raised when an otpauth URI cannot be parsed.

    ``uri`` keeps the raw input; the message shows it with the secret
    redacted.
    """

    def __init__(self, uri: str, reason: str, field: Optional[str] = None):
        super().__init__(f"{reason}: {redact_uri(uri)}")
        self.uri = uri
        self.reason = reason
        self.field = field


class MissingSecretError(URIParseError):
    """Raised when an otpauth URI carries no secret query parameter."""

    def __init__(self, uri: str):
        super().__init__(uri, "Secret query parameter must be set", field="secret")


class HashingError(OTPError, RuntimeError):
    """Raised when the HMAC primitive rejects the key or algorithm."""
