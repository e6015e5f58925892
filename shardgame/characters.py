"""Character components: life state, animations and melee weapons."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Union

_MISSING = object()

_U8 = (0, 0xFF)
_U16 = (0, 0xFFFF)
_I32 = (-(2**31), 2**31 - 1)

_SECOND = 1_000_000_000
_UNITS = {
    **dict.fromkeys(("nsec", "nsecs", "ns"), 1),
    **dict.fromkeys(("usec", "usecs", "us"), 1000),
    **dict.fromkeys(("msec", "msecs", "ms"), 1_000_000),
    **dict.fromkeys(("seconds", "second", "secs", "sec", "s"), _SECOND),
    **dict.fromkeys(("minutes", "minute", "mins", "min", "m"), 60 * _SECOND),
    **dict.fromkeys(("hours", "hour", "hrs", "hr", "h"), 3600 * _SECOND),
    **dict.fromkeys(("days", "day", "d"), 86400 * _SECOND),
    **dict.fromkeys(("weeks", "week", "w"), 604800 * _SECOND),
    **dict.fromkeys(("months", "month", "M"), 2_630_016 * _SECOND),
    **dict.fromkeys(("years", "year", "y"), 31_557_600 * _SECOND),
}
_DURATION_PART = re.compile(r"\s*(\d+)\s*([A-Za-z]+)\s*")


def parse_duration(text: Any) -> timedelta:
    """Parse a human-readable duration such as "1s", "500ms" or "1m 30s"."""
    if not isinstance(text, str):
        raise ValueError(f"expected a duration string, got {text!r}")
    if not text.strip():
        raise ValueError("value was empty")
    total = 0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        unit = _UNITS.get(match.group(2))
        if unit is None:
            raise ValueError(f"unknown time unit {match.group(2)!r}")
        total += int(match.group(1)) * unit
        pos = match.end()
    try:
        return timedelta(microseconds=total // 1000)
    except OverflowError as exc:
        raise ValueError(f"duration {text!r} is too large") from exc


def _mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a mapping")
    return data


def _integer(data: Mapping, key: str, bounds: tuple[int, int], default: Any = _MISSING) -> int:
    if key not in data:
        if default is _MISSING:
            raise ValueError(f"missing field `{key}`")
        return default
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field `{key}` must be an integer")
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"field `{key}` is out of range {low}..{high}")
    return value


def _required(data: Mapping, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


@dataclass(frozen=True)
class Alive:
    """Marks a character that has not died."""


@dataclass(frozen=True)
class Corpse:
    """Marks the corpse item left by a dead character."""


@dataclass(frozen=True)
class AnimationDefinition:
    animation_id: int
    frame_count: int
    repeat_count: int = 0
    reverse: bool = False
    speed: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> AnimationDefinition:
        data = _mapping(data, "animation")
        reverse = data.get("reverse", False)
        if not isinstance(reverse, bool):
            raise ValueError("field `reverse` must be a boolean")
        return cls(
            animation_id=_integer(data, "animation_id", _U16),
            frame_count=_integer(data, "frame_count", _U16),
            repeat_count=_integer(data, "repeat_count", _U16, 0),
            reverse=reverse,
            speed=_integer(data, "speed", _U8, 0),
        )


@dataclass(frozen=True)
class PredefinedAnimation:
    kind: int
    action: int
    variant: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> PredefinedAnimation:
        data = _mapping(data, "animation")
        return cls(
            kind=_integer(data, "kind", _U16),
            action=_integer(data, "action", _U16),
            variant=_integer(data, "variant", _U8, 0),
        )


Animation = Union[AnimationDefinition, PredefinedAnimation]


def parse_animation(data: Any) -> Animation:
    """Read an inline animation, or failing that a predefined one."""
    for variant in (AnimationDefinition, PredefinedAnimation):
        try:
            return variant.from_dict(data)
        except ValueError:
            continue
    raise ValueError("data did not match any variant of untagged enum Animation")


@dataclass(frozen=True)
class HitAnimation:
    hit_animation: Animation


@dataclass(frozen=True)
class MeleeWeapon:
    damage: int
    delay: timedelta
    range: int
    swing_animation: Animation

    @classmethod
    def from_dict(cls, data: Any) -> MeleeWeapon:
        data = _mapping(data, "melee weapon")
        return cls(
            damage=_integer(data, "damage", _U16),
            delay=parse_duration(_required(data, "delay")),
            range=_integer(data, "range", _I32),
            swing_animation=parse_animation(_required(data, "swing_animation")),
        )


@dataclass(frozen=True)
class Unarmed:
    """The weapon a character fights with when nothing is in its main hand."""

    weapon: MeleeWeapon