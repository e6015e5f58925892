# shardgame

Game logic for a role-playing game shard server: a small entity-component
world, data-driven prefabs loaded from YAML, chat text commands, world time
and lighting, melee weapon and animation data, wandering NPCs and world
snapshots as plain data.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Modules

- `shardgame.world` – `World`, an entity/component store keyed by component
  type, with resources (`insert_resource`, `resource`, `init_resource`) and
  `query(*types)`; also the `Persistent`, `PrefabInstance` and `UniqueId`
  components and `new_uuid()`.
- `shardgame.hues` – the `MAGENTA`, `RED` and `GREY` hue values.
- `shardgame.worldtime` – `WorldTime`, the in-game clock: twelve times real
  time, counted from 24 September 1997 (UTC). `hms()` gives the hour, minute
  and second of the game day, `day_fraction()` the part of the day passed and
  `light_level()` a value from 0 to 12 that follows the day's cycle.
- `shardgame.staticdata` – `Cities`, `Maps` and `Skills`, read by
  `load_from_directory(path)` from `cities.yaml`, `maps.yaml` and
  `skills.yaml`. `Cities.to_starting_cities()` numbers the cities in order;
  `Maps.map_infos()` gives a `MapInfo` per map id.
- `shardgame.prefab` – `PrefabFactory` maps bundle names to `PrefabBundle`
  types (`register_template`) or to any callable (`register`);
  `PrefabCollection.load_from_directory(factory, path)` reads every `*.yaml`
  file below a directory into a `Prefab` named after the file;
  `insert_prefab(world, entity, prefab)` writes one onto an entity. The
  `InheritancePrefab` bundle writes other prefabs, by name, from the world's
  `PrefabCollection` resource. Bad descriptions raise `PrefabError`.
- `shardgame.commands` – `TextCommands` recognises chat lines that start with
  the command character (`[` by default), splits them shell-style, parses them
  with the command's `argparse` parser and queues them until `drain` is called
  for that command type. Parse errors and `-h` output are passed to the
  `reply` callable.
- `shardgame.persistence` – `BundleSerializers` extracts the bundles of every
  registered `BundleSerializer` from a world (`serialize_world`) and loads a
  snapshot back (`deserialize_into_world`). Snapshots have the form
  `{"bundles": [[bundle_id, [[reference, value], ...]], ...]}`, ordered by
  serializer priority, with entity references renumbered from 1. Errors raise
  `PersistenceError`.
- `shardgame.serializers` – `PrefabSerializer` (saves the prefab name, runs
  first on load) and `UniqueIdSerializer`, both for entities marked
  `Persistent`.
- `shardgame.activities` – `Timer` with `TimerMode.ONCE` and
  `TimerMode.REPEATING`, `CurrentActivity` (idle or melee) and
  `progress_current_activity(world, delta)`.
- `shardgame.characters` – `Alive`, `Corpse`, `HitAnimation`, `MeleeWeapon`,
  `Unarmed`, the two animation kinds, `parse_animation` and
  `parse_duration` (human-readable durations such as `500ms` or `1m 30s`).
- `shardgame.combat_prefabs` – `MeleeWeaponPrefab` and `UnarmedPrefab`.
- `shardgame.wander` – `WanderPrefab` and `wander(world, delta, try_move, rng)`,
  which picks a random direction 0–7 for each wanderer whose timer fired and
  asks `try_move(entity, direction)` for the new location.

## Example: prefabs

```python
from shardgame.world import World
from shardgame.prefab import PrefabFactory, PrefabCollection, InheritancePrefab, insert_prefab
from shardgame.combat_prefabs import MeleeWeaponPrefab

factory = PrefabFactory()
factory.register_template("inherit", InheritancePrefab)
factory.register_template("melee_weapon", MeleeWeaponPrefab)

prefabs = PrefabCollection()
prefabs.load_from_directory(factory, "data/prefabs")

world = World()
world.insert_resource(prefabs)
sword = world.spawn()
insert_prefab(world, sword, prefabs.get("sword"))
```

with `data/prefabs/sword.yaml`:

```yaml
melee_weapon:
  damage: 10
  delay: 2s
  range: 1
  swing_animation:
    animation_id: 9
    frame_count: 7
```

## Example: a text command

```python
from dataclasses import dataclass
from shardgame.commands import TextCommand, TextCommands

@dataclass
class Echo(TextCommand):
    aliases = ("echo",)
    what: list

    @classmethod
    def build_parser(cls):
        parser = super().build_parser()
        parser.add_argument("what", nargs="*")
        return parser

commands = TextCommands()
commands.register(Echo)
commands.try_split_exec(sender=1, line="[echo hello world", reply=print)
for sender, echo in commands.drain(Echo):
    print(sender, " ".join(echo.what))
```

## Example: snapshots

```python
from shardgame.persistence import BundleSerializers
from shardgame.serializers import PrefabSerializer, UniqueIdSerializer

serializers = BundleSerializers()
serializers.insert(PrefabSerializer())
serializers.insert(UniqueIdSerializer())

snapshot = serializers.serialize_world(world).serialize()
restored = World()
restored.insert_resource(prefabs)
serializers.deserialize_into_world(restored, snapshot)
```

## What this package does not do

- It has no network server and sends nothing to game clients; chat replies,
  time and light levels, animations and damage notices are left to the
  caller.
- It defines no ready-made chat commands; only the registration, parsing and
  queueing of commands you write.
- It does not store snapshots anywhere: `SerializedBuffers.serialize()`
  returns a plain dictionary for the caller to write out.
- It has no map, terrain or collision data; `wander` relies on the
  `try_move` callable it is given.
- Beyond timers, `CurrentActivity` and weapon data, combat rules (attacks,
  damage, death and corpses) are not included, and there are no serializers
  for character or item components.