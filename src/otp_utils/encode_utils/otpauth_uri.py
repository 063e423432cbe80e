"""
Encoding and decoding of ``otpauth://`` provisioning URIs.

Wire format::

    otpauth://{totp|hotp}/{issuer}[:{account}]?digits=N&period=P&secret=S&issuer=I&algorithm=A

``counter=C`` takes the place of ``period`` for HOTP. Issuer and account are
percent-encoded separately (RFC 3986, no safe characters) and joined with a
literal colon.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional
from urllib.parse import quote, unquote, unquote_plus, urlsplit

from ..exceptions import MissingSecretError, URIParseError
from .hmac_codec import HMACAlgorithm

logger = logging.getLogger(__name__)

URL_SCHEME = "otpauth"

DIGITS = "digits"
SECRET = "secret"
ALGORITHM = "algorithm"
PERIOD = "period"
COUNTER = "counter"
ISSUER = "issuer"

# Emission order of the query string.
QUERY_ORDER = (DIGITS, COUNTER, PERIOD, SECRET, ISSUER, ALGORITHM)


class OTPType(str, Enum):
    HOTP = "hotp"
    TOTP = "totp"


@dataclass(frozen=True)
class OtpauthURI:
    """Fields carried by an otpauth URI. Absent optional fields are ``None``."""

    otp_type: OTPType
    issuer: str
    account: str
    secret: str = field(repr=False)
    digits: Optional[int] = None
    algorithm: Optional[HMACAlgorithm] = None
    period: Optional[int] = None
    counter: Optional[int] = None


def encode_component(value: str) -> str:
    """Percent-encode every character outside the RFC 3986 unreserved set."""
    return quote(value, safe="")


def build_label(issuer: str, account: str = "") -> str:
    if not account:
        return encode_component(issuer)
    return f"{encode_component(issuer)}:{encode_component(account)}"


def build_uri(
    otp_type: OTPType | str,
    issuer: str,
    account: str,
    query: Mapping[str, str],
) -> str:
    """
    Assemble an otpauth URI.

    Args:
        otp_type: ``hotp`` or ``totp``.
        issuer: Issuer label, encoded before use.
        account: Account label, omitted from the path when empty.
        query: Query items; known keys are emitted in a fixed order, others
            follow in insertion order.

    Returns:
        The URI string.
    """
    host = OTPType(otp_type).value
    ordered = [key for key in QUERY_ORDER if key in query]
    ordered += [key for key in query if key not in QUERY_ORDER]
    query_string = "&".join(f"{key}={encode_component(str(query[key]))}" for key in ordered)
    return f"{URL_SCHEME}://{host}/{build_label(issuer, account)}?{query_string}"


def query_items(uri: str) -> Dict[str, str]:
    """
    Split the query string of a URI into decoded key/value pairs.

    Pairs are separated by ``&`` and split on the first ``=``. A later
    duplicate key overrides an earlier one.

    Raises:
        URIParseError: If a pair has no ``=``.
    """
    query = urlsplit(uri).query
    items: Dict[str, str] = {}
    if not query:
        return items

    for pair in query.split("&"):
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        if not sep:
            raise URIParseError(uri, f"Malformed query pair {pair!r}")
        items[unquote_plus(key)] = unquote_plus(value)
    return items


def _parse_int(uri: str, items: Mapping[str, str], key: str) -> Optional[int]:
    raw = items.get(key)
    if raw is None:
        return None
    if not (raw.isascii() and raw.isdigit()):
        raise URIParseError(uri, f"Invalid {key} value {raw!r}", field=key)
    return int(raw)


def _split_label(path: str) -> tuple[str, str]:
    label = path[1:] if path.startswith("/") else path
    issuer, _, account = label.partition(":")
    return unquote(issuer), unquote(account)


def parse_uri(uri: str, expected_type: OTPType | None = None) -> OtpauthURI:
    """
    Parse an otpauth URI.

    Only the syntax is checked here: values that parse but are out of range
    (``digits=5``, ``period=0``) are left for generator construction to reject.

    Args:
        uri: The URI string.
        expected_type: When given, the URI type must match it.

    Raises:
        MissingSecretError: If there is no ``secret`` query parameter.
        URIParseError: If the scheme, type or a query field is malformed.
    """
    if not uri:
        raise URIParseError(str(uri), "URI is empty")

    try:
        parts = urlsplit(uri)
    except ValueError as exc:
        raise URIParseError(uri, "URI could not be parsed") from exc

    if parts.scheme.lower() != URL_SCHEME:
        raise URIParseError(uri, f"Unsupported scheme {parts.scheme!r}", field="scheme")

    try:
        otp_type = OTPType(parts.netloc.lower())
    except ValueError as exc:
        raise URIParseError(uri, f"Unsupported OTP type {parts.netloc!r}", field="type") from exc
    if expected_type is not None and otp_type != OTPType(expected_type):
        raise URIParseError(
            uri, f"Expected a {OTPType(expected_type).value} URI, got {otp_type.value}", field="type"
        )

    items = query_items(uri)
    secret = items.get(SECRET)
    if not secret:
        raise MissingSecretError(uri)

    label_issuer, account = _split_label(parts.path)
    issuer = items.get(ISSUER) or label_issuer

    algorithm = None
    if ALGORITHM in items:
        try:
            algorithm = HMACAlgorithm.from_name(items[ALGORITHM])
        except ValueError as exc:
            raise URIParseError(
                uri, f"Invalid algorithm value {items[ALGORITHM]!r}", field=ALGORITHM
            ) from exc

    parsed = OtpauthURI(
        otp_type=otp_type,
        issuer=issuer,
        account=account,
        secret=secret,
        digits=_parse_int(uri, items, DIGITS),
        algorithm=algorithm,
        period=_parse_int(uri, items, PERIOD),
        counter=_parse_int(uri, items, COUNTER),
    )
    logger.debug("Parsed otpauth URI: %r", parsed)
    return parsed


__all__ = [
    "URL_SCHEME",
    "DIGITS",
    "SECRET",
    "ALGORITHM",
    "PERIOD",
    "COUNTER",
    "ISSUER",
    "OTPType",
    "OtpauthURI",
    "encode_component",
    "build_label",
    "build_uri",
    "query_items",
    "parse_uri",
]
