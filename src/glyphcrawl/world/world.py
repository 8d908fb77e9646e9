from __future__ import annotations

import logging
from typing import List, Sequence

from .entities import Entity, Position
from .map import GameMap

logger = logging.getLogger(__name__)


class World:
    """All maps of a run plus the index of the active one.

    Maps persist for the whole run, including the ones the player has left,
    so keys already taken stay taken.
    """

    def __init__(self, maps: Sequence[GameMap], current_map: int = 0) -> None:
        if not maps:
            raise ValueError("World needs at least one map")
        if not 0 <= current_map < len(maps):
            raise IndexError(f"current_map {current_map} not in [0, {len(maps)})")
        self._maps: List[GameMap] = list(maps)
        self._current = current_map
        holders = [i for i, m in enumerate(self._maps) if m.player is not None]
        if holders != [current_map]:
            raise ValueError(f"The player must be on exactly the current map {current_map}; found on {holders}")

    @property
    def maps(self) -> List[GameMap]:
        return list(self._maps)

    @property
    def current_map(self) -> int:
        return self._current

    @property
    def current(self) -> GameMap:
        return self._maps[self._current]

    @property
    def player(self) -> Entity:
        player = self.current.player
        if player is None:  # pragma: no cover - guarded by constructor and transition
            raise RuntimeError("Current map lost its player")
        return player

    def transition(self, target_map: int, target: Position) -> None:
        """Move the player to ``target`` on ``target_map`` and make that map current.

        Ownership moves: the entity leaves the source map before it is placed.
        """
        if not 0 <= target_map < len(self._maps):
            raise IndexError(f"Map index {target_map} not in [0, {len(self._maps)})")
        destination = self._maps[target_map]
        if not destination.in_bounds(target.x, target.y):
            raise IndexError(f"Target {target} outside map {target_map}")
        source_index = self._current
        player = self.current.remove_player()
        destination.place_player(player, target)
        self._current = target_map
        logger.info("Player moved from map %d to map %d at %s", source_index, target_map, target)


__all__ = ["World"]
