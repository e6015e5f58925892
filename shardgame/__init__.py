"""World store, prefabs, text commands, world time and snapshots for a role-playing game shard."""

__version__ = "0.1.0"