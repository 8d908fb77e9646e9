from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[int, int]:
        return self.x, self.y


class EntityKind(Enum):
    """Closed set of actor kinds.

    PLAYER/ENEMY belong to the dungeon ruleset, PRISONER/GUARD to the prison
    ruleset. Which kind is the player only matters for validation; the glyph
    and colors are looked up in ``render.style``.
    """

    PLAYER = "player"
    ENEMY = "enemy"
    PRISONER = "prisoner"
    GUARD = "guard"

    @property
    def is_player(self) -> bool:
        return self in (EntityKind.PLAYER, EntityKind.PRISONER)


@dataclass
class Entity:
    position: Position
    kind: EntityKind

    @property
    def is_player(self) -> bool:
        return self.kind.is_player


__all__ = ["Position", "EntityKind", "Entity"]
