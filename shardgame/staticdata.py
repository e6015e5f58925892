"""Static world data: starting cities, maps and skills."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


def _require_mapping(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a mapping")
    return data


def _require_key(data: dict, key: str, what: str) -> Any:
    if key not in data:
        raise ValueError(f"{what}: missing field '{key}'")
    return data[key]


def _vector(value: Any, length: int, what: str) -> tuple[int, ...]:
    if not isinstance(value, (list, tuple)) or len(value) != length:
        raise ValueError(f"{what} must be a list of {length} integers")
    return tuple(int(v) for v in value)


def _u8_key(key: Any) -> int:
    number = int(key)
    if not 0 <= number <= 0xFF:
        raise ValueError(f"key {key!r} is out of range 0..255")
    return number


@dataclass
class City:
    name: str = ""
    building: str = ""
    map_id: int = 0
    description_id: int = 0
    position: tuple[int, int, int] = (0, 0, 0)

    @classmethod
    def _from_dict(cls, data: Any) -> City:
        data = _require_mapping(data, "city")
        return cls(
            name=str(data.get("name", "")),
            building=str(data.get("building", "")),
            map_id=int(data.get("map_id", 0)),
            description_id=int(data.get("description_id", 0)),
            position=_vector(data.get("position", (0, 0, 0)), 3, "position"),
        )


@dataclass(frozen=True)
class StartingCity:
    index: int
    city: str
    building: str
    position: tuple[int, int, int]
    map_id: int
    description_id: int


@dataclass
class Cities:
    cities: list[City] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Cities:
        data = _require_mapping(data, "cities")
        entries = _require_key(data, "cities", "cities")
        if not isinstance(entries, list):
            raise ValueError("cities must be a list")
        return cls(cities=[City._from_dict(entry) for entry in entries])

    def to_starting_cities(self) -> list[StartingCity]:
        return [
            StartingCity(
                index=index & 0xFF,
                city=city.name,
                building=city.building,
                position=city.position,
                map_id=city.map_id,
                description_id=city.description_id,
            )
            for index, city in enumerate(self.cities)
        ]


@dataclass
class Map:
    name: str = ""
    size: tuple[int, int] = (0, 0)
    season: int = 0
    no_assets: bool = False

    @classmethod
    def _from_dict(cls, data: Any) -> Map:
        data = _require_mapping(data, "map")
        size = _vector(data.get("size", (0, 0)), 2, "size")
        if any(v < 0 for v in size):
            raise ValueError("size must not be negative")
        return cls(
            name=str(data.get("name", "")),
            size=size,
            season=int(data.get("season", 0)),
            no_assets=bool(data.get("no_assets", False)),
        )


@dataclass(frozen=True)
class MapInfo:
    size: tuple[int, int]
    season: int
    is_virtual: bool


@dataclass
class Maps:
    maps: dict[int, Map] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Maps:
        data = _require_mapping(data, "maps")
        entries = _require_mapping(_require_key(data, "maps", "maps"), "maps")
        return cls(maps={_u8_key(k): Map._from_dict(v) for k, v in entries.items()})

    def map_infos(self) -> dict[int, MapInfo]:
        return {
            key: MapInfo(size=m.size, season=m.season, is_virtual=m.no_assets)
            for key, m in self.maps.items()
        }


@dataclass
class Skill:
    name: str = ""
    noun: str = ""
    str_scale: float = 0.0
    dex_scale: float = 0.0
    int_scale: float = 0.0
    str_gain: float = 0.0
    dex_gain: float = 0.0
    int_gain: float = 0.0
    gain_scale: float = 1.0

    @classmethod
    def _from_dict(cls, data: Any) -> Skill:
        data = _require_mapping(data, "skill")
        defaults = cls()
        values = {}
        for name in ("str_scale", "dex_scale", "int_scale", "str_gain",
                     "dex_gain", "int_gain", "gain_scale"):
            values[name] = float(data.get(name, getattr(defaults, name)))
        return cls(
            name=str(data.get("name", "")),
            noun=str(data.get("noun", "")),
            **values,
        )


@dataclass
class Skills:
    skills: dict[int, Skill] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Skills:
        data = _require_mapping(data, "skills")
        entries = _require_mapping(_require_key(data, "skills", "skills"), "skills")
        return cls(skills={_u8_key(k): Skill._from_dict(v) for k, v in entries.items()})


@dataclass
class StaticData:
    cities: Cities
    maps: Maps
    skills: Skills


def _read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def load_from_directory(data_path) -> StaticData:
    """Load cities.yaml, maps.yaml and skills.yaml from a directory."""
    base = Path(data_path)
    return StaticData(
        cities=Cities.from_dict(_read_yaml(base / "cities.yaml")),
        maps=Maps.from_dict(_read_yaml(base / "maps.yaml")),
        skills=Skills.from_dict(_read_yaml(base / "skills.yaml")),
    )