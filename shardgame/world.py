"""A small entity-component store and the core entity components."""

from __future__ import annotations

import itertools
import os
import uuid
from dataclasses import dataclass, field
from typing import Any, Iterator, TypeVar

T = TypeVar("T")


class World:
    """Entities identified by integers, each holding at most one component per type."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._entities: dict[int, dict[type, Any]] = {}
        self._resources: dict[type, Any] = {}

    def spawn(self) -> int:
        entity = next(self._ids)
        self._entities[entity] = {}
        return entity

    def _store(self, entity: int) -> dict[type, Any]:
        try:
            return self._entities[entity]
        except KeyError:
            raise KeyError(f"no such entity {entity}") from None

    def insert(self, entity: int, *args: Any) -> int:
        """Insert components, replacing any of the same type."""
        store = self._store(entity)
        for component in args:
            store[type(component)] = component
        return entity

    def get(self, entity: int, component_type: type[T]) -> T | None:
        store = self._entities.get(entity)
        return None if store is None else store.get(component_type)

    def has(self, entity: int, component_type: type) -> bool:
        store = self._entities.get(entity)
        return store is not None and component_type in store

    def remove(self, entity: int, component_type: type[T]) -> T | None:
        store = self._entities.get(entity)
        return None if store is None else store.pop(component_type, None)

    def despawn(self, entity: int) -> bool:
        return self._entities.pop(entity, None) is not None

    def contains(self, entity: int) -> bool:
        return entity in self._entities

    def query(self, *args: type) -> Iterator[tuple]:
        """Yield (entity, component...) for entities holding every given type."""
        for entity, store in list(self._entities.items()):
            if all(t in store for t in args):
                yield (entity, *(store[t] for t in args))

    def components(self, entity: int) -> list[Any]:
        return list(self._store(entity).values())

    def insert_resource(self, resource: Any) -> None:
        self._resources[type(resource)] = resource

    def resource(self, resource_type: type[T]) -> T:
        try:
            return self._resources[resource_type]
        except KeyError:
            raise KeyError(f"resource {resource_type.__name__} is not present") from None

    def init_resource(self, resource_type: type[T]) -> T:
        """Return the resource, creating a default one if it is absent."""
        if resource_type not in self._resources:
            self._resources[resource_type] = resource_type()
        return self._resources[resource_type]


def new_uuid() -> uuid.UUID:
    """A UUID made of 16 random bytes."""
    return uuid.UUID(bytes=os.urandom(16))


@dataclass(frozen=True)
class Persistent:
    """Marks an entity as saved with the world."""


@dataclass(frozen=True)
class PrefabInstance:
    prefab_name: str


@dataclass(frozen=True)
class UniqueId:
    id: uuid.UUID = field(default_factory=new_uuid)