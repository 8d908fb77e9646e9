from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Protocol, Set, Tuple

from ..input.actions import InputAction
from ..render.frame import Frame, StatusMessage
from ..render.style import DANGER, NOTICE, SUCCESS, ColorPair
from ..rules.ruleset import Ruleset
from ..world.map import PLAYER_INDEX
from ..world.tiles import DoorEncounter, KeyPickup, NoEffect, TransitionMap, on_enter
from ..world.world import World
from .events import GameEvent

logger = logging.getLogger(__name__)

DELTAS: Dict[InputAction, Tuple[int, int]] = {
    InputAction.MOVE_UP: (0, -1),
    InputAction.MOVE_DOWN: (0, 1),
    InputAction.MOVE_LEFT: (-1, 0),
    InputAction.MOVE_RIGHT: (1, 0),
}


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class Phase(Enum):
    ACTIVE = auto()
    GAME_OVER = auto()


@dataclass
class PlayerState:
    """Health and collected keys; survives map transitions."""

    health: int = 100
    keys: Set[int] = field(default_factory=set)

    def take_hit(self, damage: int) -> int:
        self.health = max(0, self.health - damage)
        return self.health


@dataclass(frozen=True)
class TurnResult:
    status: Optional[StatusMessage]
    game_over: bool
    moved: bool = False


class TurnEngine:
    """Advances the world by exactly one turn per command.

    Turn order: player move, adversary moves in index order, collision check
    on the post-move positions, then the effect of the tile under the player.
    Once the game is over every further command is ignored.
    """

    def __init__(
        self,
        world: World,
        ruleset: Optional[Ruleset] = None,
        rng: Optional[RandomSource] = None,
        player_state: Optional[PlayerState] = None,
    ) -> None:
        self.world = world
        self.ruleset = ruleset or Ruleset.dungeon()
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.player_state = player_state or PlayerState(health=self.ruleset.max_health)
        self.phase = Phase.ACTIVE
        self.status: Optional[StatusMessage] = None
        self.turn = 0
        self._listeners: List[Callable[[GameEvent, "TurnEngine"], None]] = []

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def add_listener(self, listener: Callable[[GameEvent, "TurnEngine"], None]) -> None:
        """Subscribe to game events (movement, hits, map changes, ...)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for l in list(self._listeners):
            try:
                l(event, self)
            except Exception as ex:
                logger.exception("Listener errored on %s: %s", event, ex)

    def _end(self, text: str, colors: ColorPair) -> None:
        self.phase = Phase.GAME_OVER
        self.status = StatusMessage(text, colors)
        logger.info("Game over on turn %d: %s", self.turn, text)

    def _post(self, text: str, colors: ColorPair) -> None:
        # A hit earlier in the same turn stays visible ahead of the tile message
        if self.status is None:
            self.status = StatusMessage(text, colors)
            return
        prior = self.status.text
        if not prior.endswith((".", "!", "?")):
            prior += "."
        self.status = StatusMessage(f"{prior} {text}", self.status.colors)

    def step(self, action: InputAction) -> TurnResult:
        """Run one turn for ``action``; non-movement actions wait in place."""
        if self.game_over:
            return TurnResult(self.status, True)

        self.turn += 1
        self.status = None
        game_map = self.world.current

        moved = action.is_move and game_map.move_entity(PLAYER_INDEX, *DELTAS[action])
        if moved:
            self._emit(GameEvent.PLAYER_MOVED)

        spread = self.ruleset.adversary_range
        for index in range(1, len(game_map.adversaries) + 1):
            adx = self.rng.randint(-spread, spread)
            ady = self.rng.randint(-spread, spread)
            game_map.move_entity(index, adx, ady)

        self._check_collisions()
        if not self.game_over:
            self._resolve_tile()
        return TurnResult(self.status, self.game_over, moved)

    def _check_collisions(self) -> None:
        game_map = self.world.current
        player = self.world.player
        for _ in game_map.adversaries_at(player.position):
            health = self.player_state.take_hit(self.ruleset.damage_per_hit)
            if health == 0:
                self._end(self.ruleset.death_message, DANGER)
                self._emit(GameEvent.PLAYER_DIED)
                return
            self.status = StatusMessage(self.ruleset.hit_message, DANGER)
            logger.info("Player hit at %s; health now %d", player.position, health)
            self._emit(GameEvent.PLAYER_HIT)

    def _resolve_tile(self) -> None:
        game_map = self.world.current
        here = self.world.player.position
        effect = on_enter(game_map.tile_at(here.x, here.y), actor_is_player=True)

        if isinstance(effect, NoEffect):
            return
        if isinstance(effect, TransitionMap):
            self.world.transition(effect.target_map, effect.target)
            self._emit(GameEvent.MAP_CHANGED)
            return
        if isinstance(effect, DoorEncounter):
            self._enter_door(effect.door_id)
            return
        if isinstance(effect, KeyPickup):
            self.player_state.keys.add(effect.door_id)
            game_map.clear_tile(here)
            self._post(self.ruleset.key_message.format(door_id=effect.door_id), SUCCESS)
            logger.info("Picked up key %d at %s", effect.door_id, here)
            self._emit(GameEvent.KEY_PICKED_UP)
            return
        raise TypeError(f"Unhandled tile effect: {effect!r}")

    def _enter_door(self, door_id: int) -> None:
        if door_id == self.ruleset.exit_door:
            self._end(self.ruleset.win_message, SUCCESS)
            self._emit(GameEvent.ESCAPED)
            return
        if door_id in self.player_state.keys:
            exit_ = self.ruleset.door_exits.get(door_id)
            if exit_ is None:
                # build_world rejects this for bundled worlds; hand-built ones may omit it
                logger.warning("Door %d has no configured exit; treating as locked", door_id)
            else:
                self.world.transition(exit_.map, exit_.target)
                self._emit(GameEvent.MAP_CHANGED)
                return
        self._post(self.ruleset.locked_message.format(door_id=door_id), NOTICE)
        self._emit(GameEvent.DOOR_LOCKED)

    def snapshot(self) -> Frame:
        """Read-only view of the active map for a renderer."""
        game_map = self.world.current
        vitals: List[str] = []
        if self.ruleset.show_vitals:
            keys = ", ".join(str(k) for k in sorted(self.player_state.keys)) or "none"
            vitals.append(f"Health: {self.player_state.health}  Keys: {keys}")
        return Frame(
            tiles=tuple(tuple(row) for row in game_map.rows()),
            entities=tuple((ent.position, ent.kind) for ent in game_map.entities),
            status=self.status,
            info=tuple(vitals + list(self.ruleset.instructions)),
            map_index=self.world.current_map,
            game_over=self.game_over,
        )


__all__ = [
    "DELTAS",
    "Phase",
    "PlayerState",
    "StatusMessage",
    "TurnResult",
    "TurnEngine",
]
