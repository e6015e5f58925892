"""Wandering: NPCs that step in a random direction at a fixed interval."""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from shardgame.activities import DurationLike, Timer, TimerMode
from shardgame.characters import parse_duration
from shardgame.prefab import PrefabBundle, PrefabError
from shardgame.world import World

DIRECTION_COUNT = 8

TryMove = Callable[[int, int], Any]


@dataclass(frozen=True)
class Wander:
    """Marks an entity that wanders."""


@dataclass
class MoveTimer:
    next_move: Timer


def wander(
    world: World,
    delta: DurationLike,
    try_move: TryMove,
    rng: random.Random | None = None,
) -> None:
    """Step every wanderer whose move timer fired.

    try_move(entity, direction) returns the entity's new location component,
    or None when the move is blocked; direction is in range(8).
    """
    rng = rng or random.Random()
    for entity, _, move_timer in world.query(Wander, MoveTimer):
        if not move_timer.next_move.tick(delta).just_finished:
            continue
        direction = rng.randrange(DIRECTION_COUNT)
        new_location = try_move(entity, direction)
        if new_location is not None:
            world.insert(entity, new_location)


@dataclass(frozen=True)
class WanderPrefab(PrefabBundle):
    interval: timedelta

    @classmethod
    def from_template(cls, template: Any) -> WanderPrefab:
        if not isinstance(template, Mapping):
            raise PrefabError("wander expects a mapping")
        if "interval" not in template:
            raise PrefabError("missing field `interval`")
        return cls(interval=parse_duration(template["interval"]))

    def write(self, world: World, entity: int) -> None:
        world.insert(
            entity,
            Wander(),
            MoveTimer(next_move=Timer(self.interval, TimerMode.REPEATING)),
        )