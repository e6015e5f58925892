from datetime import timedelta

import pytest

from shardgame.characters import (
    AnimationDefinition,
    MeleeWeapon,
    PredefinedAnimation,
    parse_animation,
    parse_duration,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1s", timedelta(seconds=1)),
        ("500ms", timedelta(milliseconds=500)),
        ("1m 30s", timedelta(minutes=1, seconds=30)),
        ("2h", timedelta(hours=2)),
        ("1min5sec", timedelta(minutes=1, seconds=5)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "5", "3 parsecs", "s1"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_parse_duration_rejects_non_string():
    with pytest.raises(ValueError):
        parse_duration(5)


def test_inline_animation_defaults():
    animation = parse_animation({"animation_id": 9, "frame_count": 7})
    assert animation == AnimationDefinition(animation_id=9, frame_count=7)
    assert animation.repeat_count == 0 and animation.reverse is False and animation.speed == 0


def test_predefined_animation():
    animation = parse_animation({"kind": 0, "action": 4, "variant": 1})
    assert animation == PredefinedAnimation(kind=0, action=4, variant=1)


def test_animation_matching_neither_variant():
    with pytest.raises(ValueError, match="untagged"):
        parse_animation({"animation_id": 70000, "frame_count": 1})


def test_animation_reverse_must_be_bool():
    with pytest.raises(ValueError):
        AnimationDefinition.from_dict({"animation_id": 1, "frame_count": 1, "reverse": "yes"})


def test_melee_weapon_from_dict():
    weapon = MeleeWeapon.from_dict({
        "damage": 5,
        "delay": "2s",
        "range": 1,
        "swing_animation": {"kind": 0, "action": 0},
    })
    assert weapon.damage == 5
    assert weapon.delay == timedelta(seconds=2)
    assert weapon.range == 1
    assert weapon.swing_animation == PredefinedAnimation(kind=0, action=0)


def test_melee_weapon_missing_field():
    with pytest.raises(ValueError, match="damage"):
        MeleeWeapon.from_dict({"delay": "1s", "range": 1, "swing_animation": {"kind": 0, "action": 0}})