"""Prefabs: named lists of bundles that are written onto entities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from shardgame.world import World

BundleFactory = Callable[[Any], "PrefabBundle"]


class PrefabError(Exception):
    """Raised when a prefab cannot be built from its description."""


class PrefabBundle(ABC):
    """One part of a prefab that knows how to write itself onto an entity."""

    @classmethod
    def from_template(cls, template: Any) -> PrefabBundle:
        """Build the bundle from its parsed description."""
        if not isinstance(template, Mapping):
            raise PrefabError(f"{cls.__name__} expects a mapping")
        return cls(**template)

    @abstractmethod
    def write(self, world: World, entity: int) -> None:
        """Insert this bundle's components into the entity."""


@dataclass(frozen=True)
class Prefab:
    """An ordered collection of bundles."""

    bundles: tuple[PrefabBundle, ...] = ()

    def write(self, world: World, entity: int) -> None:
        for bundle in self.bundles:
            bundle.write(world, entity)

    def __repr__(self) -> str:
        return f"Prefab {{ {len(self.bundles)} bundles }}"


class PrefabFactory:
    """Maps bundle names to the callables that build them."""

    def __init__(self) -> None:
        self._bundles: dict[str, BundleFactory] = {}

    def register(self, name: str, factory: BundleFactory) -> None:
        self._bundles[name] = factory

    def register_template(self, name: str, bundle_type: type[PrefabBundle]) -> None:
        self.register(name, bundle_type.from_template)

    def deserialize(self, data: Any) -> Prefab:
        """Build a prefab from a mapping of bundle name to bundle description."""
        if not isinstance(data, Mapping):
            raise PrefabError("prefab must be a mapping of bundle names")
        bundles = []
        for key, value in data.items():
            factory = self._bundles.get(key)
            if factory is None:
                raise PrefabError(f"no such bundle: {key}")
            try:
                bundles.append(factory(value))
            except PrefabError:
                raise
            except (TypeError, ValueError, KeyError) as exc:
                raise PrefabError(f"{key}: {exc}") from exc
        return Prefab(tuple(bundles))


@dataclass
class PrefabCollection:
    """All loaded prefabs, by name."""

    _prefabs: dict[str, Prefab] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._prefabs)

    def __contains__(self, name: object) -> bool:
        return name in self._prefabs

    def __iter__(self) -> Iterator[str]:
        return iter(self._prefabs)

    def get(self, name: str) -> Prefab | None:
        return self._prefabs.get(name)

    def get_key_value(self, name: str) -> tuple[str, Prefab] | None:
        prefab = self._prefabs.get(name)
        return None if prefab is None else (name, prefab)

    def insert(self, name: str, prefab: Prefab) -> None:
        self._prefabs[name] = prefab

    def load_from_directory(self, factory: PrefabFactory, path) -> None:
        """Load every *.yaml file below path, named after the file without its suffix."""
        to_visit = deque([Path(path)])
        while to_visit:
            directory = to_visit.popleft()
            for entry in sorted(directory.iterdir()):
                if entry.is_dir():
                    to_visit.append(entry)
                elif entry.name.endswith(".yaml"):
                    prefab_name = entry.name[: -len(".yaml")]
                    try:
                        with entry.open("r", encoding="utf-8") as handle:
                            data = yaml.safe_load(handle)
                        prefab = factory.deserialize(data)
                    except (PrefabError, yaml.YAMLError) as exc:
                        raise PrefabError(f"deserializing {str(entry)!r}: {exc}") from exc
                    self._prefabs[prefab_name] = prefab


@dataclass
class InheritancePrefab(PrefabBundle):
    """Writes other named prefabs onto the entity, in order."""

    prefabs: list[str] = field(default_factory=list)

    @classmethod
    def from_template(cls, template: Any) -> InheritancePrefab:
        if isinstance(template, str):
            return cls(prefabs=[template])
        if isinstance(template, list) and all(isinstance(n, str) for n in template):
            return cls(prefabs=list(template))
        raise PrefabError("expected an inheritance list")

    def write(self, world: World, entity: int) -> None:
        collection = world.resource(PrefabCollection)
        parents = [p for p in map(collection.get, self.prefabs) if p is not None]
        for prefab in parents:
            prefab.write(world, entity)


def insert_prefab(world: World, entity: int, prefab: Prefab) -> int:
    """Write a prefab onto an entity and return the entity."""
    prefab.write(world, entity)
    return entity