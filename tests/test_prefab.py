from dataclasses import dataclass

import pytest

from shardgame.prefab import (
    InheritancePrefab,
    Prefab,
    PrefabBundle,
    PrefabCollection,
    PrefabError,
    PrefabFactory,
    insert_prefab,
)
from shardgame.world import World


@dataclass(frozen=True)
class Graphic:
    id: int
    hue: int = 0


@dataclass(frozen=True)
class Label:
    text: str


@dataclass
class GraphicBundle(PrefabBundle):
    graphic: int
    hue: int = 0

    def write(self, world, entity):
        world.insert(entity, Graphic(self.graphic, self.hue))


@dataclass
class LabelBundle(PrefabBundle):
    text: str

    @classmethod
    def from_template(cls, template):
        return cls(text=str(template))

    def write(self, world, entity):
        world.insert(entity, Label(self.text))


@pytest.fixture
def factory():
    f = PrefabFactory()
    f.register_template("item", GraphicBundle)
    f.register_template("label", LabelBundle)
    f.register_template("inherit", InheritancePrefab)
    return f


def test_deserialize_and_write(factory):
    prefab = factory.deserialize({"item": {"graphic": 5, "hue": 2}, "label": "axe"})
    assert len(prefab.bundles) == 2
    world = World()
    entity = world.spawn()
    assert insert_prefab(world, entity, prefab) == entity
    assert world.get(entity, Graphic) == Graphic(5, 2)
    assert world.get(entity, Label) == Label("axe")


def test_unknown_bundle(factory):
    with pytest.raises(PrefabError, match="no such bundle: weird"):
        factory.deserialize({"weird": 1})


def test_not_a_mapping(factory):
    with pytest.raises(PrefabError):
        factory.deserialize(["item"])


def test_bad_bundle_fields_wrapped(factory):
    with pytest.raises(PrefabError):
        factory.deserialize({"item": {"graphic": 1, "bogus": 3}})


def test_later_bundles_override(factory):
    world = World()
    entity = world.spawn()
    first = factory.deserialize({"item": {"graphic": 1}})
    second = factory.deserialize({"item": {"graphic": 2}})
    Prefab(first.bundles + second.bundles).write(world, entity)
    assert world.get(entity, Graphic) == Graphic(2)


def test_inheritance_from_string_and_list():
    assert InheritancePrefab.from_template("base").prefabs == ["base"]
    assert InheritancePrefab.from_template(["a", "b"]).prefabs == ["a", "b"]
    with pytest.raises(PrefabError):
        InheritancePrefab.from_template(7)


def test_inheritance_writes_known_parents(factory):
    collection = PrefabCollection()
    collection.insert("base", factory.deserialize({"item": {"graphic": 9}}))
    world = World()
    world.insert_resource(collection)
    child = factory.deserialize({"inherit": ["missing", "base"], "label": "x"})
    entity = world.spawn()
    child.write(world, entity)
    assert world.get(entity, Graphic) == Graphic(9)
    assert world.get(entity, Label) == Label("x")


def test_collection_lookup(factory):
    collection = PrefabCollection()
    prefab = factory.deserialize({"label": "a"})
    collection.insert("thing", prefab)
    assert collection.get("thing") is prefab
    assert collection.get_key_value("thing") == ("thing", prefab)
    assert collection.get("nothing") is None
    assert collection.get_key_value("nothing") is None
    assert len(collection) == 1
    assert "thing" in collection


def test_load_from_directory(tmp_path, factory):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sword.yaml").write_text("item:\n  graphic: 3\n", encoding="utf-8")
    (tmp_path / "sub" / "shield.yaml").write_text("label: round\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    collection = PrefabCollection()
    collection.load_from_directory(factory, tmp_path)
    assert sorted(collection) == ["shield", "sword"]
    world = World()
    entity = world.spawn()
    collection.get("shield").write(world, entity)
    assert world.get(entity, Label) == Label("round")


def test_load_from_directory_error_names_file(tmp_path, factory):
    (tmp_path / "broken.yaml").write_text("nope: 1\n", encoding="utf-8")
    with pytest.raises(PrefabError, match="broken.yaml"):
        PrefabCollection().load_from_directory(factory, tmp_path)