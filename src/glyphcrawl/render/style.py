from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from ..world.entities import EntityKind
from ..world.tiles import Door, Empty, Key, Stairs, Tile, Wall


class Color(Enum):
    """Terminal-style palette with RGB values for the Arcade renderer."""

    BLACK = (0, 0, 0)
    WHITE = (230, 230, 230)
    GREY = (110, 110, 120)
    RED = (220, 50, 47)
    GREEN = (80, 200, 90)
    YELLOW = (235, 200, 60)
    CYAN = (70, 190, 210)
    MAGENTA = (200, 90, 200)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.value


@dataclass(frozen=True)
class ColorPair:
    foreground: Color
    background: Color = Color.BLACK


@dataclass(frozen=True)
class Style:
    glyph: str
    colors: ColorPair


DANGER = ColorPair(Color.RED)
NOTICE = ColorPair(Color.YELLOW)
SUCCESS = ColorPair(Color.GREEN)

_ENTITY_STYLES = {
    EntityKind.PLAYER: Style("@", ColorPair(Color.WHITE)),
    EntityKind.ENEMY: Style("E", ColorPair(Color.RED)),
    EntityKind.PRISONER: Style("@", ColorPair(Color.CYAN)),
    EntityKind.GUARD: Style("G", ColorPair(Color.RED)),
}


def style(kind: Union[Tile, EntityKind]) -> Style:
    """Glyph and colors for a tile or an entity kind."""
    if isinstance(kind, EntityKind):
        return _ENTITY_STYLES[kind]
    if isinstance(kind, Empty):
        # Floor is drawn black on black, as blank space
        return Style(".", ColorPair(Color.BLACK))
    if isinstance(kind, Wall):
        return Style("#", ColorPair(Color.WHITE))
    if isinstance(kind, Stairs):
        return Style(">", ColorPair(Color.WHITE))
    if isinstance(kind, Door):
        return Style("+", ColorPair(Color.YELLOW))
    if isinstance(kind, Key):
        return Style("k", ColorPair(Color.MAGENTA))
    raise TypeError(f"No style for {kind!r}")


__all__ = [
    "Color",
    "ColorPair",
    "Style",
    "DANGER",
    "NOTICE",
    "SUCCESS",
    "style",
]
