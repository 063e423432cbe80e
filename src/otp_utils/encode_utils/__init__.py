"""Encoding helpers: HMAC truncation, Base32 secrets and otpauth URIs."""

from .hmac_codec import HMACAlgorithm, counter_to_bytes, truncated_code
from .otpauth_uri import OtpauthURI, OTPType, build_uri, parse_uri, query_items
from .secret_helper import SecretGenerator, decode_secret
from .otp_helper import OTPHelper, OTPOptions, OTPSecretResult, VerifyResult

__all__ = [
    "HMACAlgorithm",
    "counter_to_bytes",
    "truncated_code",
    "OtpauthURI",
    "OTPType",
    "build_uri",
    "parse_uri",
    "query_items",
    "SecretGenerator",
    "decode_secret",
    "OTPHelper",
    "OTPOptions",
    "OTPSecretResult",
    "VerifyResult",
]
