"""Timers and the activity a character is currently busy with."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import timedelta
from typing import Union

from shardgame.world import World

DurationLike = Union[timedelta, float, int]


def _to_nanos(value: DurationLike) -> int:
    if isinstance(value, timedelta):
        nanos = (value // timedelta(microseconds=1)) * 1000
    else:
        nanos = round(float(value) * 1_000_000_000)
    if nanos < 0:
        raise ValueError("duration must not be negative")
    return nanos


def _from_nanos(nanos: int) -> timedelta:
    return timedelta(microseconds=nanos // 1000)


class TimerMode(enum.Enum):
    ONCE = "once"
    REPEATING = "repeating"


class Timer:
    """Counts elapsed time up to a duration; durations are timedeltas or seconds."""

    def __init__(self, duration: DurationLike, mode: TimerMode = TimerMode.ONCE) -> None:
        self._duration = _to_nanos(duration)
        self.mode = mode
        self._elapsed = 0
        self._finished = False
        self._times_finished = 0

    @property
    def duration(self) -> timedelta:
        return _from_nanos(self._duration)

    @property
    def elapsed(self) -> timedelta:
        return _from_nanos(self._elapsed)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def just_finished(self) -> bool:
        return self._times_finished > 0

    @property
    def times_finished_this_tick(self) -> int:
        return self._times_finished

    def tick(self, delta: DurationLike) -> Timer:
        """Advance the timer and return it."""
        step = _to_nanos(delta)
        if self.mode is TimerMode.ONCE and self._finished:
            self._times_finished = 0
            return self
        self._elapsed += step
        self._finished = self._elapsed >= self._duration
        if not self._finished:
            self._times_finished = 0
        elif self.mode is TimerMode.REPEATING:
            if self._duration == 0:
                self._times_finished, self._elapsed = 1, 0
            else:
                self._times_finished, self._elapsed = divmod(self._elapsed, self._duration)
        else:
            self._times_finished = 1
            self._elapsed = self._duration
        return self

    def reset(self) -> None:
        self._elapsed = 0
        self._finished = False
        self._times_finished = 0

    def __repr__(self) -> str:
        return (f"Timer(duration={self.duration!r}, mode={self.mode.name}, "
                f"elapsed={self.elapsed!r})")


@dataclass
class CurrentActivity:
    """Idle when there is no timer, otherwise swinging a melee weapon."""

    timer: Timer | None = None

    @classmethod
    def idle(cls) -> CurrentActivity:
        return cls(None)

    @classmethod
    def melee(cls, timer: Timer) -> CurrentActivity:
        return cls(timer)

    def is_idle(self) -> bool:
        return self.timer is None


def progress_current_activity(world: World, delta: DurationLike) -> None:
    """Advance every running activity and return finished ones to idle."""
    for entity, activity in world.query(CurrentActivity):
        if activity.is_idle():
            continue
        if activity.timer.tick(delta).finished:
            world.insert(entity, CurrentActivity.idle())