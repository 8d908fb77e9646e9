from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .entities import Entity, Position
from .tiles import EMPTY, Tile, Wall, is_passable, is_tile

logger = logging.getLogger(__name__)

PLAYER_INDEX = 0


class GameMap:
    """A fixed-size tile grid plus the entities standing on it.

    The player is held in its own slot rather than by list position; the
    ``entities`` view still presents it at index 0 so callers can address
    "the player" and "adversary i" with one index space. Maps that the player
    is not on have ``player is None``.
    """

    def __init__(
        self,
        tiles: Sequence[Sequence[Tile]],
        player: Optional[Entity] = None,
        adversaries: Iterable[Entity] = (),
    ) -> None:
        if not tiles or not tiles[0]:
            raise ValueError("GameMap needs at least one row and one column")
        width = len(tiles[0])
        for y, row in enumerate(tiles):
            if len(row) != width:
                raise ValueError(f"All rows must have equal width; row 0 has {width}, row {y} has {len(row)}")
        self._w = width
        self._h = len(tiles)
        # tiles[y][x]
        self._tiles: List[List[Tile]] = [list(row) for row in tiles]
        if player is not None and not player.is_player:
            raise ValueError(f"{player.kind} cannot occupy the player slot")
        self.player: Optional[Entity] = player
        self.adversaries: List[Entity] = list(adversaries)
        for ent in self.adversaries:
            if ent.is_player:
                raise ValueError(f"{ent.kind} cannot be an adversary")

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def entities(self) -> List[Entity]:
        """Player first (when present), then adversaries in move order."""
        head = [self.player] if self.player is not None else []
        return head + self.adversaries

    def entity(self, index: int) -> Entity:
        if index == PLAYER_INDEX:
            if self.player is None:
                raise IndexError("No player on this map")
            return self.player
        if not 1 <= index <= len(self.adversaries):
            raise IndexError(f"No entity {index}; map has {len(self.adversaries)} adversaries")
        return self.adversaries[index - 1]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._w and 0 <= y < self._h

    def tile_at(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates out of bounds: ({x}, {y}) for map {self._w}x{self._h}")
        return self._tiles[y][x]

    def set_tile(self, x: int, y: int, tile: Tile) -> None:
        if not is_tile(tile):
            raise TypeError("tile must be a Tile variant")
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates out of bounds: ({x}, {y}) for map {self._w}x{self._h}")
        self._tiles[y][x] = tile

    def clear_tile(self, position: Position) -> None:
        self.set_tile(position.x, position.y, EMPTY)

    def is_passable(self, x: int, y: int) -> bool:
        """In-bounds and not a wall. Never raises."""
        if not self.in_bounds(x, y):
            return False
        return is_passable(self._tiles[y][x])

    def move_entity(self, index: int, dx: int, dy: int) -> bool:
        """Shift entity ``index`` by (dx, dy) if the target is in bounds and not a wall.

        Diagonal steps are only checked at the destination cell; walls on the
        two orthogonal neighbours do not block them.
        """
        ent = self.entity(index)
        target = ent.position.offset(dx, dy)
        if not self.in_bounds(target.x, target.y):
            logger.debug("Blocked move of entity %d: %s out of bounds", index, target)
            return False
        if isinstance(self._tiles[target.y][target.x], Wall):
            logger.debug("Blocked move of entity %d: wall at %s", index, target)
            return False
        ent.position = target
        return True

    def adversaries_at(self, position: Position) -> List[Entity]:
        return [ent for ent in self.adversaries if ent.position == position]

    def remove_player(self) -> Entity:
        if self.player is None:
            raise IndexError("No player on this map")
        player, self.player = self.player, None
        return player

    def place_player(self, player: Entity, position: Position) -> None:
        if self.player is not None:
            raise ValueError("Map already has a player")
        if not self.in_bounds(position.x, position.y):
            raise IndexError(f"Coordinates out of bounds: {position} for map {self._w}x{self._h}")
        player.position = position
        self.player = player

    def rows(self) -> List[List[Tile]]:
        """Copy of the grid, row-major."""
        return [list(row) for row in self._tiles]

    def __repr__(self) -> str:
        return f"GameMap(width={self._w}, height={self._h}, adversaries={len(self.adversaries)})"


__all__ = ["GameMap", "PLAYER_INDEX"]
