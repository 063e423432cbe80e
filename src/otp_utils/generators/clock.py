from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from datetime import tzinfo as TzInfo
from typing import Optional, Protocol


class Clock(Protocol):
    """Source of the current time for time-based passwords."""

    def millis(self) -> int: ...

    @property
    def tzinfo(self) -> Optional[TzInfo]: ...


class SystemClock:
    """Wall-clock time in the local time zone."""

    def millis(self) -> int:
        return time.time_ns() // 1_000_000

    @property
    def tzinfo(self) -> Optional[TzInfo]:
        return datetime.now().astimezone().tzinfo

    def __repr__(self) -> str:
        return "SystemClock()"


@dataclass(frozen=True)
class FixedClock:
    """A clock that always reports the same instant."""

    fixed_millis: int
    zone: TzInfo = timezone.utc

    @classmethod
    def at_seconds(cls, seconds: float, zone: TzInfo = timezone.utc) -> "FixedClock":
        return cls(int(seconds * 1000), zone)

    @classmethod
    def at_datetime(cls, moment: datetime) -> "FixedClock":
        zone = moment.tzinfo or moment.astimezone().tzinfo
        return cls(int(moment.timestamp() * 1000), zone)

    def millis(self) -> int:
        return self.fixed_millis

    @property
    def tzinfo(self) -> Optional[TzInfo]:
        return self.zone


DEFAULT_CLOCK = SystemClock()

__all__ = ["Clock", "SystemClock", "FixedClock", "DEFAULT_CLOCK"]
