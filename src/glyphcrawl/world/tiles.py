from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .entities import Position


@dataclass(frozen=True)
class Empty:
    """Passable, inert floor."""


@dataclass(frozen=True)
class Wall:
    """The only impassable tile."""


@dataclass(frozen=True)
class Stairs:
    """Portal to ``target`` on map ``target_map``."""

    target_map: int
    target: Position


@dataclass(frozen=True)
class Door:
    """Passable; entering it checks the player's keys for ``door_id``."""

    door_id: int


@dataclass(frozen=True)
class Key:
    """Passable; picked up on entry and replaced by ``EMPTY``."""

    door_id: int


Tile = Union[Empty, Wall, Stairs, Door, Key]

EMPTY = Empty()
WALL = Wall()

TILE_TYPES = (Empty, Wall, Stairs, Door, Key)


@dataclass(frozen=True)
class NoEffect:
    pass


@dataclass(frozen=True)
class TransitionMap:
    target_map: int
    target: Position


@dataclass(frozen=True)
class DoorEncounter:
    door_id: int


@dataclass(frozen=True)
class KeyPickup:
    door_id: int


Effect = Union[NoEffect, TransitionMap, DoorEncounter, KeyPickup]

NO_EFFECT = NoEffect()


def is_tile(value: object) -> bool:
    return isinstance(value, TILE_TYPES)


def is_passable(tile: Tile) -> bool:
    """Return True unless ``tile`` is a Wall."""
    if isinstance(tile, Wall):
        return False
    if isinstance(tile, (Empty, Stairs, Door, Key)):
        return True
    raise TypeError(f"Unknown tile variant: {tile!r}")


def on_enter(tile: Tile, actor_is_player: bool) -> Effect:
    """Return the effect of an actor standing on ``tile``.

    Only the player triggers effects. Stairs and Door are checked before Key;
    a tile is exactly one variant so at most one effect is produced.
    """
    if not actor_is_player:
        return NO_EFFECT
    if isinstance(tile, Stairs):
        return TransitionMap(tile.target_map, tile.target)
    if isinstance(tile, Door):
        return DoorEncounter(tile.door_id)
    if isinstance(tile, Key):
        return KeyPickup(tile.door_id)
    if isinstance(tile, (Empty, Wall)):
        return NO_EFFECT
    raise TypeError(f"Unknown tile variant: {tile!r}")


__all__ = [
    "Empty",
    "Wall",
    "Stairs",
    "Door",
    "Key",
    "Tile",
    "EMPTY",
    "WALL",
    "NoEffect",
    "TransitionMap",
    "DoorEncounter",
    "KeyPickup",
    "Effect",
    "NO_EFFECT",
    "is_tile",
    "is_passable",
    "on_enter",
]
