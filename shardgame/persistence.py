"""Saving and loading world entities as plain, JSON-compatible data.

A saved world has the form::

    {"bundles": [[bundle_id, [[entity_reference, value], ...]], ...]}

Entity references are small integers handed out in order of first use, so a
saved world never depends on the entity numbers of the world it came from.
"""

from __future__ import annotations

import bisect
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

from shardgame.world import World

_MAX_REFERENCE = 0xFFFFFFFF


class PersistenceError(Exception):
    """Raised when saved world data cannot be read or written."""


def _check_reference(reference: Any) -> int:
    if isinstance(reference, bool) or not isinstance(reference, int):
        raise PersistenceError(f"invalid entity reference {reference!r}")
    if not 0 <= reference <= _MAX_REFERENCE:
        raise PersistenceError(f"entity reference {reference} is out of range")
    return reference


class SerializeContext:
    """Assigns stable references to entities while a world is being saved."""

    def __init__(self) -> None:
        self._next_entity_id = 0
        self._entity_map: dict[int, int] = {}

    def map_entity(self, entity: int) -> int:
        reference = self._entity_map.get(entity)
        if reference is None:
            self._next_entity_id += 1
            reference = self._entity_map[entity] = self._next_entity_id
        return reference


class DeserializeContext:
    """Maps saved references back to entities, spawning them on first use."""

    def __init__(self, world: World) -> None:
        self.world = world
        self._entity_map: dict[int, int] = {}

    def map_entity(self, reference: Any) -> int:
        reference = _check_reference(reference)
        entity = self._entity_map.get(reference)
        if entity is None:
            entity = self._entity_map[reference] = self.world.spawn()
        return entity


class BundleSerializer(ABC):
    """Saves and restores one group of components.

    Subclasses set ``id`` and may lower ``priority`` to be written earlier.
    """

    id: ClassVar[str]
    priority: ClassVar[int] = 0

    @abstractmethod
    def extract(self, world: World) -> list[tuple[int, Any]]:
        """Collect (entity, bundle) pairs to be saved."""

    @abstractmethod
    def serialize(self, ctx: SerializeContext, bundle: Any) -> Any:
        """Turn one bundle into plain data."""

    @abstractmethod
    def deserialize(self, ctx: DeserializeContext, data: Any, entity: int) -> None:
        """Restore one bundle from plain data onto an entity."""


@dataclass
class _Buffer:
    serializer: BundleSerializer
    items: list[tuple[int, Any]]

    @property
    def priority(self) -> int:
        return self.serializer.priority


@dataclass
class SerializedBuffers:
    """Extracted bundles, kept in ascending priority order."""

    _buffers: list[_Buffer] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self._buffers)

    def push(self, serializer: BundleSerializer, items: Iterable[tuple[int, Any]]) -> None:
        """Add a serializer's bundles; nothing is added when there are none.

        A buffer goes before earlier buffers of the same priority.
        """
        items = list(items)
        if not items:
            return
        priorities = [buffer.priority for buffer in self._buffers]
        index = bisect.bisect_left(priorities, serializer.priority)
        self._buffers.insert(index, _Buffer(serializer, items))

    def serialize(self) -> dict[str, Any]:
        ctx = SerializeContext()
        bundles = []
        for buffer in self._buffers:
            values = []
            for entity, bundle in buffer.items:
                reference = ctx.map_entity(entity)
                values.append([reference, buffer.serializer.serialize(ctx, bundle)])
            bundles.append([buffer.serializer.id, values])
        return {"bundles": bundles}


def _as_sequence(data: Any, what: str) -> Sequence[Any]:
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise PersistenceError(f"expected {what}")
    return data


class BundleSerializers:
    """The registered bundle serializers, by id."""

    def __init__(self) -> None:
        self._serializers: dict[str, BundleSerializer] = {}

    def __contains__(self, bundle_id: object) -> bool:
        return bundle_id in self._serializers

    def insert(self, serializer: BundleSerializer) -> None:
        self._serializers[serializer.id] = serializer

    def serialize_world(self, world: World) -> SerializedBuffers:
        """Extract the bundles of every registered serializer from a world."""
        buffers = SerializedBuffers()
        for serializer in self._serializers.values():
            buffers.push(serializer, serializer.extract(world))
        return buffers

    def deserialize_bundle_values(
        self, ctx: DeserializeContext, bundle_id: str, data: Any
    ) -> None:
        serializer = self._serializers.get(bundle_id)
        if serializer is None:
            raise PersistenceError(f"unknown bundle ID {bundle_id}")
        for pair in _as_sequence(data, "list of bundle values"):
            pair = _as_sequence(pair, "a bundle tuple")
            if not pair:
                raise PersistenceError("missing entity ID")
            if len(pair) > 2:
                raise PersistenceError(f"invalid length {len(pair)}, expected a bundle tuple")
            entity = ctx.map_entity(pair[0])
            if len(pair) == 2:
                try:
                    serializer.deserialize(ctx, pair[1], entity)
                except PersistenceError:
                    raise
                except (ValueError, TypeError, KeyError) as exc:
                    raise PersistenceError(f"{bundle_id}: {exc}") from exc

    def deserialize_into_world(self, world: World, data: Any) -> None:
        """Spawn and fill entities in a world from saved data."""
        if not isinstance(data, Mapping):
            raise PersistenceError("expected a world mapping")
        ctx = DeserializeContext(world)
        for key, value in data.items():
            if key != "bundles":
                raise PersistenceError(f"unknown field `{key}`, expected `bundles`")
            for entry in _as_sequence(value, "bundle list"):
                entry = _as_sequence(entry, "bundle list")
                if not entry:
                    raise PersistenceError("invalid length 0, expected two-element tuple")
                if len(entry) > 2:
                    raise PersistenceError(
                        f"invalid length {len(entry)}, expected two-element tuple"
                    )
                bundle_id = entry[0]
                if not isinstance(bundle_id, str):
                    raise PersistenceError(f"invalid bundle ID {bundle_id!r}")
                if len(entry) == 2:
                    self.deserialize_bundle_values(ctx, bundle_id, entry[1])


def serialize_entity_list(ctx: SerializeContext, entities: Iterable[int]) -> list[int]:
    return [ctx.map_entity(entity) for entity in entities]


def deserialize_entity_list(ctx: DeserializeContext, data: Any) -> list[int]:
    return [ctx.map_entity(reference) for reference in _as_sequence(data, "entity list")]