"""In-game clock derived from real time."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

MULTIPLIER = 12.0

_EPOCH = datetime(1997, 9, 24, tzinfo=timezone.utc)
_SECONDS_PER_DAY = 86400.0


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_rem(a: int, b: int) -> int:
    """Remainder taking the sign of the dividend."""
    return a - b * _trunc_div(a, b)


@dataclass(frozen=True)
class WorldTime:
    """A point in game time, in game seconds since the world epoch."""

    seconds: float

    @classmethod
    def now(cls) -> WorldTime:
        return cls.from_datetime(datetime.now(timezone.utc))

    @classmethod
    def from_datetime(cls, real_time: datetime) -> WorldTime:
        """Convert a real moment; naive datetimes are taken as UTC."""
        if real_time.tzinfo is None:
            real_time = real_time.replace(tzinfo=timezone.utc)
        micros = (real_time - _EPOCH) // timedelta(microseconds=1)
        millis = _trunc_div(micros, 1000)
        return cls(seconds=millis * 0.001 * MULTIPLIER)

    def day_fraction(self) -> float:
        return math.fmod(self.seconds / _SECONDS_PER_DAY, 1.0)

    def light_level(self) -> int:
        level = (1.0 + math.cos(self.day_fraction() * 2.0 * math.pi)) * 6.0
        if math.isnan(level):
            return 0
        return int(max(0.0, min(255.0, level)))

    def hms(self) -> tuple[int, int, int]:
        """Hours, minutes and seconds of the current game day."""
        total_seconds = int(self.seconds)
        seconds = _trunc_rem(total_seconds, 60)
        total_minutes = _trunc_div(total_seconds, 60)
        minutes = _trunc_rem(total_minutes, 60)
        total_hours = _trunc_div(total_minutes, 60)
        hours = _trunc_rem(total_hours, 24)
        return hours & 0xFF, minutes & 0xFF, seconds & 0xFF