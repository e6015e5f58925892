"""Prefab bundles that give entities melee weapons."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shardgame.characters import MeleeWeapon, Unarmed
from shardgame.prefab import PrefabBundle
from shardgame.world import World


@dataclass(frozen=True)
class MeleeWeaponPrefab(PrefabBundle):
    """Makes an item a melee weapon."""

    weapon: MeleeWeapon

    @classmethod
    def from_template(cls, template: Any) -> MeleeWeaponPrefab:
        return cls(MeleeWeapon.from_dict(template))

    def write(self, world: World, entity: int) -> None:
        world.insert(entity, self.weapon)


@dataclass(frozen=True)
class UnarmedPrefab(PrefabBundle):
    """Gives a character the weapon it uses with empty hands."""

    weapon: MeleeWeapon

    @classmethod
    def from_template(cls, template: Any) -> UnarmedPrefab:
        return cls(MeleeWeapon.from_dict(template))

    def write(self, world: World, entity: int) -> None:
        world.insert(entity, Unarmed(weapon=self.weapon))