[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shardgame"
version = "0.1.0"
description = "Game rules, prefabs, text commands and world persistence for a role-playing game shard server"
requires-python = ">=3.10"
keywords = ["game", "server", "rpg", "prefab", "ecs", "persistence"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Role-Playing",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["shardgame"]

[tool.pytest.ini_options]
addopts = "-ra"
