"""
High-level TOTP helper: secret provisioning, current token and verification.
"""

from __future__ import annotations

import base64
import io
from dataclasses import dataclass
from typing import Optional

import qrcode

from ..exceptions import ConstructionError
from ..generators.builders import TOTPBuilder
from ..generators.clock import DEFAULT_CLOCK, Clock
from ..generators.hotp import password_length_is_valid
from ..generators.totp import TOTPGenerator
from .hmac_codec import HMACAlgorithm
from .secret_helper import SecretGenerator, SecretLike


@dataclass
class OTPOptions:
    window: int = 1
    step: int = 30
    algorithm: str = "sha1"
    digits: int = 6


@dataclass
class OTPSecretResult:
    secret: str
    otpauth: str
    image_url: str


@dataclass
class VerifyResult:
    is_valid: bool
    delta: Optional[int] = None


def qr_code_data_url(data: str) -> str:
    """Render ``data`` as a QR code PNG and return it as a data URL."""
    qr_image = qrcode.make(data)
    buffer = io.BytesIO()
    qr_image.save(buffer, format="PNG")
    encoded_image = base64.b64encode(buffer.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{encoded_image}"


class OTPHelper:
    """Helper for provisioning, generating and verifying TOTP codes."""

    def __init__(self, options: Optional[OTPOptions] = None, clock: Optional[Clock] = None):
        self.options = options or OTPOptions()
        self.clock = clock or DEFAULT_CLOCK
        if self.options.step <= 0:
            raise ConstructionError("step must be a positive integer")
        if not password_length_is_valid(self.options.digits):
            raise ConstructionError("digits must be between 6 and 8")
        if self.options.window is not None and self.options.window < 0:
            raise ConstructionError("window must be zero or a positive integer")
        try:
            self._algorithm = HMACAlgorithm.from_name(self.options.algorithm)
        except ValueError as exc:
            raise ConstructionError(str(exc)) from exc

    def _totp(self, secret: SecretLike) -> TOTPGenerator:
        return (
            TOTPBuilder(secret)
            .with_password_length(self.options.digits)
            .with_algorithm(self._algorithm)
            .with_period(self.options.step)
            .with_clock(self.clock)
            .build()
        )

    def new_secret(self, user: str, service: str) -> OTPSecretResult:
        """
        Generate a new secret, otpauth URI, and corresponding QR code data URL.
        """
        secret = SecretGenerator.generate_str()
        otpauth = self._totp(secret).get_uri(issuer=service, account=user)
        return OTPSecretResult(secret=secret, otpauth=otpauth, image_url=qr_code_data_url(otpauth))

    def timer(self) -> int:
        """
        Remaining seconds in the current OTP window.
        """
        elapsed = (self.clock.millis() // 1000) % self.options.step
        return self.options.step - elapsed

    def get_token(self, secret: SecretLike) -> str:
        """
        Generate the current OTP token for the given secret.
        """
        return self._totp(secret).now()

    def verify_token(self, token: str, secret: SecretLike, window: Optional[int] = None) -> bool:
        """
        Verify an OTP token.
        """
        return self._totp(secret).verify(
            token, delay_window=window if window is not None else self.options.window
        )

    def verify_token_with_detail(
        self, token: str, secret: SecretLike, window: Optional[int] = None
    ) -> VerifyResult:
        """
        Verify an OTP token and return the validation result with timing metadata.
        """
        is_valid = self.verify_token(token, secret, window)
        delta = (self.clock.millis() // 1000) % self.options.step if is_valid else None
        return VerifyResult(is_valid=is_valid, delta=delta)


__all__ = ["OTPHelper", "OTPOptions", "OTPSecretResult", "VerifyResult", "qr_code_data_url"]
