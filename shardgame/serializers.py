"""Bundle serializers for prefab instances and unique ids."""

from __future__ import annotations

import uuid
from typing import Any

from shardgame.persistence import (
    BundleSerializer,
    DeserializeContext,
    PersistenceError,
    SerializeContext,
)
from shardgame.prefab import PrefabCollection, insert_prefab
from shardgame.world import Persistent, PrefabInstance, UniqueId, World


class PrefabSerializer(BundleSerializer):
    """Saves which prefab an entity was built from; restored before anything else."""

    id = "Prefab"
    priority = -1000

    def extract(self, world: World) -> list[tuple[int, PrefabInstance]]:
        return [
            (entity, instance)
            for entity, instance, _ in world.query(PrefabInstance, Persistent)
        ]

    def serialize(self, ctx: SerializeContext, bundle: PrefabInstance) -> str:
        return bundle.prefab_name

    def deserialize(self, ctx: DeserializeContext, data: Any, entity: int) -> None:
        if not isinstance(data, str):
            raise PersistenceError(f"expected a prefab name, got {data!r}")
        prefab = ctx.world.resource(PrefabCollection).get(data)
        if prefab is None:
            raise PersistenceError(f"Unable to deserialize prefab {data}")
        insert_prefab(ctx.world, entity, prefab)
        ctx.world.insert(entity, PrefabInstance(prefab_name=data), Persistent())


class UniqueIdSerializer(BundleSerializer):
    """Saves an entity's unique id as its hyphenated string form."""

    id = "UniqueId"

    def extract(self, world: World) -> list[tuple[int, UniqueId]]:
        return [
            (entity, unique_id)
            for entity, unique_id, _ in world.query(UniqueId, Persistent)
        ]

    def serialize(self, ctx: SerializeContext, bundle: UniqueId) -> str:
        return str(bundle.id)

    def deserialize(self, ctx: DeserializeContext, data: Any, entity: int) -> None:
        if not isinstance(data, str):
            raise PersistenceError(f"expected a UUID string, got {data!r}")
        try:
            value = uuid.UUID(data)
        except ValueError as exc:
            raise PersistenceError(f"invalid UUID {data!r}") from exc
        ctx.world.insert(entity, UniqueId(id=value))