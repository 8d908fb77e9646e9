from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..world.entities import EntityKind, Position
from ..world.tiles import Tile
from .style import ColorPair, style


@dataclass(frozen=True)
class StatusMessage:
    text: str
    # None leaves the renderer's default colors
    colors: Optional[ColorPair] = None


@dataclass(frozen=True)
class Frame:
    """Immutable snapshot of what a renderer needs after a turn."""

    tiles: Tuple[Tuple[Tile, ...], ...]
    entities: Tuple[Tuple[Position, EntityKind], ...]
    status: Optional[StatusMessage] = None
    info: Tuple[str, ...] = ()
    map_index: int = 0
    game_over: bool = False

    @property
    def width(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    @property
    def height(self) -> int:
        return len(self.tiles)

    def glyph_rows(self) -> List[List[str]]:
        rows = [[style(tile).glyph for tile in row] for row in self.tiles]
        # Later entities overwrite earlier ones; the player (index 0) stays under adversaries
        for pos, kind in self.entities:
            rows[pos.y][pos.x] = style(kind).glyph
        return rows


def styled_runs(frame: Frame) -> List[Tuple[int, int, str, ColorPair]]:
    """Split each map row into (row, column, text, colors) runs of equal colors.

    Runs drawn black on black (bare floor) are left out; the background
    already shows them.
    """
    styles = [[style(tile) for tile in row] for row in frame.tiles]
    for pos, kind in frame.entities:
        styles[pos.y][pos.x] = style(kind)
    runs: List[Tuple[int, int, str, ColorPair]] = []
    for y, row in enumerate(styles):
        start = 0
        for x in range(1, len(row) + 1):
            if x < len(row) and row[x].colors == row[start].colors:
                continue
            colors = row[start].colors
            if colors.foreground != colors.background:
                runs.append((y, start, "".join(s.glyph for s in row[start:x]), colors))
            start = x
    return runs


def render_text(frame: Frame) -> List[str]:
    """Plain-text rendering: map rows, then the status line, then info lines."""
    lines = ["".join(row) for row in frame.glyph_rows()]
    lines.append(frame.status.text if frame.status else "")
    lines.extend(frame.info)
    return lines


__all__ = ["Frame", "StatusMessage", "render_text", "styled_runs"]
