"""
otp-utils: HOTP/TOTP one-time passwords

This package generates and verifies counter-based (RFC 4226) and time-based
(RFC 6238) one-time passwords and reads and writes otpauth:// URIs.
"""

__version__ = "0.1.0"

from . import exceptions
from . import encode_utils
from . import generators
from . import db_utils
from .encode_utils import HMACAlgorithm, OTPHelper, OTPOptions, OTPType, SecretGenerator
from .exceptions import (
    ConstructionError,
    HashingError,
    InputValidationError,
    MissingSecretError,
    OTPError,
    URIParseError,
)
from .generators import (
    FixedClock,
    HOTPBuilder,
    HOTPGenerator,
    ReplayGuard,
    SystemClock,
    TOTPBuilder,
    TOTPGenerator,
)

__all__ = [
    "exceptions",
    "encode_utils",
    "generators",
    "db_utils",
    "HMACAlgorithm",
    "OTPType",
    "SecretGenerator",
    "OTPHelper",
    "OTPOptions",
    "HOTPGenerator",
    "TOTPGenerator",
    "HOTPBuilder",
    "TOTPBuilder",
    "ReplayGuard",
    "SystemClock",
    "FixedClock",
    "OTPError",
    "ConstructionError",
    "InputValidationError",
    "URIParseError",
    "MissingSecretError",
    "HashingError",
]
