import uuid
from dataclasses import dataclass

import pytest

from shardgame.persistence import (
    BundleSerializers,
    DeserializeContext,
    PersistenceError,
    SerializeContext,
)
from shardgame.prefab import Prefab, PrefabBundle, PrefabCollection
from shardgame.serializers import PrefabSerializer, UniqueIdSerializer
from shardgame.world import Persistent, PrefabInstance, UniqueId, World


@dataclass(frozen=True)
class Seat:
    pass


@dataclass
class SeatBundle(PrefabBundle):
    def write(self, world, entity):
        world.insert(entity, Seat())


def make_world():
    world = World()
    collection = PrefabCollection()
    collection.insert("chair", Prefab((SeatBundle(),)))
    world.insert_resource(collection)
    return world


def make_serializers():
    serializers = BundleSerializers()
    serializers.insert(UniqueIdSerializer())
    serializers.insert(PrefabSerializer())
    return serializers


def test_prefab_extract_only_persistent():
    world = make_world()
    saved = world.insert(world.spawn(), PrefabInstance("chair"), Persistent())
    world.insert(world.spawn(), PrefabInstance("chair"))
    assert PrefabSerializer().extract(world) == [(saved, PrefabInstance("chair"))]


def test_prefab_serialize_is_name():
    assert PrefabSerializer().serialize(SerializeContext(), PrefabInstance("chair")) == "chair"


def test_prefab_deserialize_writes_prefab():
    world = make_world()
    ctx = DeserializeContext(world)
    entity = world.spawn()
    PrefabSerializer().deserialize(ctx, "chair", entity)
    assert world.get(entity, Seat) == Seat()
    assert world.get(entity, PrefabInstance) == PrefabInstance("chair")
    assert world.has(entity, Persistent)


def test_prefab_deserialize_unknown_name():
    world = make_world()
    ctx = DeserializeContext(world)
    with pytest.raises(PersistenceError, match="table"):
        PrefabSerializer().deserialize(ctx, "table", world.spawn())


def test_prefab_deserialize_rejects_non_string():
    world = make_world()
    with pytest.raises(PersistenceError):
        PrefabSerializer().deserialize(DeserializeContext(world), 5, world.spawn())


def test_prefab_priority_comes_first():
    world = make_world()
    entity = world.spawn()
    world.insert(entity, PrefabInstance("chair"), Persistent(), UniqueId())
    data = make_serializers().serialize_world(world).serialize()
    assert [entry[0] for entry in data["bundles"]] == ["Prefab", "UniqueId"]
    assert PrefabSerializer.priority == -1000


def test_unique_id_serialize_string():
    value = uuid.UUID("12345678-1234-5678-1234-567812345678")
    text = UniqueIdSerializer().serialize(SerializeContext(), UniqueId(value))
    assert text == "12345678-1234-5678-1234-567812345678"


def test_unique_id_deserialize_invalid():
    world = World()
    with pytest.raises(PersistenceError):
        UniqueIdSerializer().deserialize(DeserializeContext(world), "nope", world.spawn())


def test_world_round_trip():
    world = make_world()
    entity = world.spawn()
    unique = UniqueId()
    world.insert(entity, PrefabInstance("chair"), Persistent(), unique)
    data = make_serializers().serialize_world(world).serialize()

    restored = make_world()
    make_serializers().deserialize_into_world(restored, data)
    rows = list(restored.query(PrefabInstance, UniqueId, Seat, Persistent))
    assert len(rows) == 1
    _, instance, restored_id, _, _ = rows[0]
    assert instance == PrefabInstance("chair")
    assert restored_id == unique