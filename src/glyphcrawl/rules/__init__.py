"""
Game rules as data: the Ruleset model and YAML world definitions.
"""
from .loader import (
    EntitySpec,
    MapSpec,
    WorldConfigError,
    WorldSpec,
    available_worlds,
    build_world,
    load_world_spec,
)
from .ruleset import DoorExit, Ruleset

__all__ = [
    "DoorExit",
    "EntitySpec",
    "MapSpec",
    "Ruleset",
    "WorldConfigError",
    "WorldSpec",
    "available_worlds",
    "build_world",
    "load_world_spec",
]
