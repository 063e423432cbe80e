"""HOTP/TOTP generators, their builders and the replay guard."""

from .clock import Clock, FixedClock, SystemClock
from .hotp import HOTPGenerator
from .totp import TOTPGenerator, counter_for
from .builders import HOTPBuilder, TOTPBuilder
from .replay_guard import ReplayGuard

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "HOTPGenerator",
    "TOTPGenerator",
    "counter_for",
    "HOTPBuilder",
    "TOTPBuilder",
    "ReplayGuard",
]
