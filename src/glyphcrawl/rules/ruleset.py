from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from ..world.decoder import DUNGEON_DIGITS, PRISON_DIGITS, DigitPartition
from ..world.entities import Position


class DoorExit(BaseModel):
    """Where an unlocked door sends the player."""

    map: int = Field(..., ge=0, description="Destination map index")
    position: Tuple[int, int] = Field(..., description="Entry coordinate (x, y) on the destination map")

    @property
    def target(self) -> Position:
        return Position(*self.position)


class Ruleset(BaseModel):
    """Everything that differs between the dungeon and the prison game.

    The turn engine reads only this model, so a new variant is a new YAML
    document rather than a new code path.
    """

    name: str = Field("dungeon", description="Human readable ruleset name")
    adversary_range: int = Field(1, ge=0, description="Adversaries step dx, dy in [-range, range]")
    max_health: int = Field(100, gt=0, description="Starting and maximum player health")
    damage_per_hit: int = Field(100, gt=0, description="Health lost per adversary collision")
    exit_door: Optional[int] = Field(None, description="Door id that wins the game when entered")
    door_exits: Dict[int, DoorExit] = Field(default_factory=dict, description="Unlocked door id -> destination")
    digits: DigitPartition = Field(default_factory=DigitPartition, description="Digit decoding for map text")
    hit_message: str = Field("You were hit", description="Status after a non-lethal collision")
    death_message: str = Field("You died!", description="Status when health reaches zero")
    win_message: str = Field("You escaped!", description="Status after entering the exit door")
    locked_message: str = Field("The door is locked. You need key {door_id}.")
    key_message: str = Field("You picked up key {door_id}.")
    show_vitals: bool = Field(False, description="Render a health/keys line under the map")
    instructions: List[str] = Field(default_factory=list, description="Extra lines for the status area")

    @field_validator("locked_message", "key_message")
    @classmethod
    def formats_door_id(cls, v: str) -> str:
        # Surface bad placeholders at load time rather than mid-game
        try:
            v.format(door_id=0)
        except (KeyError, IndexError, AttributeError, ValueError) as exc:
            raise ValueError(f"message may only use the {{door_id}} placeholder: {v!r}") from exc
        return v

    @classmethod
    def dungeon(cls) -> "Ruleset":
        return cls(name="dungeon", digits=DUNGEON_DIGITS)

    @classmethod
    def prison(cls, door_exits: Optional[Dict[int, DoorExit]] = None) -> "Ruleset":
        return cls(
            name="prison",
            adversary_range=2,
            max_health=100,
            damage_per_hit=50,
            exit_door=3,
            door_exits=dict(door_exits or {}),
            digits=PRISON_DIGITS,
            hit_message="A guard hit you",
            death_message="You died! Game Over",
            win_message="You escaped the prison! You win!",
            show_vitals=True,
        )


__all__ = ["DoorExit", "Ruleset"]
