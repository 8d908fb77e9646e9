from __future__ import annotations

import logging
from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator

from .entities import Position
from .tiles import EMPTY, WALL, Door, Key, Stairs, Tile

logger = logging.getLogger(__name__)


class DigitPartition(BaseModel):
    """Assignment of digit characters to portal and key tiles.

    A digit may belong to at most one of ``stairs``, ``doors`` or ``keys``.
    Digits in none of them decode to Empty.
    """

    stairs: str = Field("0123456789", description="Digits decoding to Stairs(d, here)")
    doors: str = Field("", description="Digits decoding to Door(d)")
    keys: str = Field("", description="Digits decoding to Key(d - key_offset)")
    key_offset: int = Field(0, ge=0, description="Subtracted from a key digit to get its door id")

    @field_validator("stairs", "doors", "keys")
    @classmethod
    def only_digits(cls, v: str) -> str:
        if any(ch not in "0123456789" for ch in v):
            raise ValueError(f"partition entries must be digits, got {v!r}")
        return v

    @model_validator(mode="after")
    def disjoint(self) -> "DigitPartition":
        seen: set[str] = set()
        for group in (self.stairs, self.doors, self.keys):
            overlap = seen & set(group)
            if overlap:
                raise ValueError(f"digits assigned twice: {''.join(sorted(overlap))}")
            seen |= set(group)
        return self


DUNGEON_DIGITS = DigitPartition()
PRISON_DIGITS = DigitPartition(stairs="", doors="123", keys="456", key_offset=3)


def decode_char(ch: str, x: int, y: int, partition: DigitPartition = DUNGEON_DIGITS) -> Tile:
    """Decode one map character at (x, y).

    Unrecognized characters fall back to Empty.
    """
    if ch == "#":
        return WALL
    if ch == ".":
        return EMPTY
    if ch in partition.stairs:
        return Stairs(int(ch), Position(x, y))
    if ch in partition.doors:
        return Door(int(ch))
    if ch in partition.keys:
        return Key(int(ch) - partition.key_offset)
    if ch != " ":
        logger.debug("Unrecognized map character %r at (%d,%d); using Empty", ch, x, y)
    return EMPTY


def _split_rows(text: str, width: int) -> List[str]:
    rows = text.splitlines()
    if len(rows) == 1 and len(rows[0]) > width:
        # One unbroken block: chunk it every `width` characters
        block = rows[0]
        rows = [block[i:i + width] for i in range(0, len(block), width)]
    return rows


def parse_tilemap(
    text: str,
    width: int,
    height: int,
    partition: DigitPartition = DUNGEON_DIGITS,
) -> List[List[Tile]]:
    """Decode a fixed-size character block into a ``tiles[y][x]`` grid.

    Missing cells are Empty. Rows or columns beyond the grid are dropped with a
    warning since they usually mean the map text was authored for another size.
    """
    if width <= 0 or height <= 0:
        raise ValueError("tilemap dimensions must be positive")
    rows = _split_rows(text, width)
    if len(rows) > height:
        logger.warning("Map text has %d rows; keeping the first %d", len(rows), height)
    grid: List[List[Tile]] = [[EMPTY for _ in range(width)] for _ in range(height)]
    for y, row in enumerate(rows[:height]):
        if len(row) > width:
            logger.warning("Map row %d is %d wide; truncating to %d", y, len(row), width)
        for x, ch in enumerate(row[:width]):
            grid[y][x] = decode_char(ch, x, y, partition)
    return grid


__all__ = [
    "DigitPartition",
    "DUNGEON_DIGITS",
    "PRISON_DIGITS",
    "decode_char",
    "parse_tilemap",
]
