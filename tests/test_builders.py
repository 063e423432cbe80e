"""Tests for HOTPBuilder / TOTPBuilder, including URI parsing."""

from datetime import timedelta

import pytest

from otp_utils.encode_utils.hmac_codec import HMACAlgorithm
from otp_utils.exceptions import (
    ConstructionError,
    MissingSecretError,
    URIParseError,
)
from otp_utils.generators.builders import HOTPBuilder, TOTPBuilder
from otp_utils.generators.clock import FixedClock

SECRET = "vv3kox7uqj4kyakohmzpph3us4cjimh6f3zknb5c2oobq6v2kiyhm27q"
TOTP_PREFIX = "otpauth://totp/issuer:account?"
HOTP_PREFIX = "otpauth://hotp/issuer:account?"


def test_defaults():
    generator = TOTPBuilder(SECRET).build()
    assert generator.password_length == 6
    assert generator.algorithm is HMACAlgorithm.SHA1
    assert generator.period == timedelta(seconds=30)


def test_setters_are_fluent_and_accept_names():
    generator = (
        TOTPBuilder(SECRET)
        .with_password_length(7)
        .with_algorithm("sha384")
        .with_period(timedelta(minutes=1))
        .with_clock(FixedClock(0))
        .build()
    )
    assert generator.password_length == 7
    assert generator.algorithm is HMACAlgorithm.SHA384
    assert generator.period == timedelta(seconds=60)
    assert generator.clock == FixedClock(0)


def test_with_hotp_configures_wrapped_builder():
    generator = (
        TOTPBuilder(SECRET)
        .with_hotp(lambda hotp: hotp.with_password_length(8).with_algorithm(HMACAlgorithm.SHA512))
        .build()
    )
    assert generator.password_length == 8
    assert generator.algorithm is HMACAlgorithm.SHA512


def test_build_is_idempotent():
    builder = HOTPBuilder(SECRET).with_password_length(8)
    assert builder.build() == builder.build()
    totp_builder = TOTPBuilder(SECRET).with_period(10)
    assert totp_builder.build() == totp_builder.build()


def test_unknown_algorithm_name_is_construction_error():
    with pytest.raises(ConstructionError):
        HOTPBuilder(SECRET).with_algorithm("md5")


def test_out_of_range_values_fail_at_build_time():
    builder = HOTPBuilder(SECRET).with_password_length(9)
    with pytest.raises(ConstructionError):
        builder.build()
    builder.with_password_length(8)
    assert builder.build().password_length == 8


def test_totp_from_uri_with_period():
    generator = TOTPBuilder.from_uri(TOTP_PREFIX + "period=60&secret=" + SECRET).build()
    assert generator.period == timedelta(seconds=60)


def test_totp_from_uri_algorithm_any_case():
    for name in ("SHA1", "sha1", "Sha1"):
        generator = TOTPBuilder.from_uri(TOTP_PREFIX + f"algorithm={name}&secret=" + SECRET).build()
        assert generator.algorithm is HMACAlgorithm.SHA1


def test_totp_from_uri_defaults():
    generator = TOTPBuilder.from_uri(TOTP_PREFIX + "secret=" + SECRET).build()
    assert generator.password_length == 6
    assert generator.algorithm is HMACAlgorithm.SHA1
    assert generator.period == timedelta(seconds=30)
    assert generator.at(1) == "455216"


def test_from_uri_valid_password_lengths():
    for digits in (6, 7, 8):
        generator = TOTPBuilder.from_uri(TOTP_PREFIX + f"digits={digits}&secret=" + SECRET).build()
        assert generator.password_length == digits


def test_from_uri_out_of_range_digits_is_construction_error():
    for digits in (5, 9):
        builder = TOTPBuilder.from_uri(TOTP_PREFIX + f"digits={digits}&secret=" + SECRET)
        with pytest.raises(ConstructionError) as excinfo:
            builder.build()
        assert not isinstance(excinfo.value, URIParseError)


def test_from_uri_unparsable_digits_is_parse_error():
    with pytest.raises(URIParseError) as excinfo:
        TOTPBuilder.from_uri(TOTP_PREFIX + "digits=six&secret=" + SECRET)
    assert excinfo.value.field == "digits"
    assert not isinstance(excinfo.value, ConstructionError)


def test_from_uri_invalid_algorithm_is_parse_error():
    with pytest.raises(URIParseError) as excinfo:
        TOTPBuilder.from_uri(TOTP_PREFIX + "algorithm=invalid&secret=" + SECRET)
    assert excinfo.value.field == "algorithm"


def test_from_uri_invalid_period_is_parse_error():
    with pytest.raises(URIParseError):
        TOTPBuilder.from_uri(TOTP_PREFIX + "period=invalid&secret=" + SECRET)


def test_from_uri_zero_period_is_construction_error():
    builder = TOTPBuilder.from_uri(TOTP_PREFIX + "period=0&secret=" + SECRET)
    with pytest.raises(ConstructionError):
        builder.build()


def test_from_uri_missing_secret():
    with pytest.raises(MissingSecretError):
        TOTPBuilder.from_uri(TOTP_PREFIX + "digits=6&algorithm=SHA1")
    with pytest.raises(MissingSecretError):
        HOTPBuilder.from_uri(HOTP_PREFIX + "secret=")


def test_from_uri_rejects_wrong_type():
    with pytest.raises(URIParseError):
        HOTPBuilder.from_uri(TOTP_PREFIX + "secret=" + SECRET)
    with pytest.raises(URIParseError):
        TOTPBuilder.from_uri(HOTP_PREFIX + "secret=" + SECRET)


def test_hotp_from_uri():
    generator = HOTPBuilder.from_uri(
        HOTP_PREFIX + "digits=8&counter=4&algorithm=SHA256&secret=" + SECRET
    ).build()
    assert generator.password_length == 8
    assert generator.algorithm is HMACAlgorithm.SHA256
    assert generator.secret == SECRET.encode()


def test_hotp_from_uri_invalid_counter_is_parse_error():
    with pytest.raises(URIParseError) as excinfo:
        HOTPBuilder.from_uri(HOTP_PREFIX + "counter=x&secret=" + SECRET)
    assert excinfo.value.field == "counter"


def run():
    test_defaults()
    test_setters_are_fluent_and_accept_names()
    test_with_hotp_configures_wrapped_builder()
    test_build_is_idempotent()
    test_unknown_algorithm_name_is_construction_error()
    test_out_of_range_values_fail_at_build_time()
    test_totp_from_uri_with_period()
    test_totp_from_uri_algorithm_any_case()
    test_totp_from_uri_defaults()
    test_from_uri_valid_password_lengths()
    test_from_uri_out_of_range_digits_is_construction_error()
    test_from_uri_unparsable_digits_is_parse_error()
    test_from_uri_invalid_algorithm_is_parse_error()
    test_from_uri_invalid_period_is_parse_error()
    test_from_uri_zero_period_is_construction_error()
    test_from_uri_missing_secret()
    test_from_uri_rejects_wrong_type()
    test_hotp_from_uri()
    test_hotp_from_uri_invalid_counter_is_parse_error()
    print("test_builders: all checks passed.")


if __name__ == "__main__":
    run()
