"""
Simulation data model: tiles, entities, maps and the multi-map world.

Nothing in this package renders or reads input.
"""
from .entities import Entity, EntityKind, Position
from .map import PLAYER_INDEX, GameMap
from .tiles import (
    EMPTY,
    NO_EFFECT,
    WALL,
    Door,
    DoorEncounter,
    Empty,
    Key,
    KeyPickup,
    NoEffect,
    Stairs,
    Tile,
    TransitionMap,
    Wall,
    is_passable,
    on_enter,
)
from .world import World

__all__ = [
    "Entity",
    "EntityKind",
    "Position",
    "GameMap",
    "PLAYER_INDEX",
    "World",
    "Tile",
    "Empty",
    "Wall",
    "Stairs",
    "Door",
    "Key",
    "EMPTY",
    "WALL",
    "NoEffect",
    "TransitionMap",
    "DoorEncounter",
    "KeyPickup",
    "NO_EFFECT",
    "is_passable",
    "on_enter",
]
