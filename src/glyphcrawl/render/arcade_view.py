from __future__ import annotations

import logging
from typing import List, Optional, Tuple

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover - optional for test envs
    arcade = None

from ..engine.loop import GameLoop
from ..input.mapping import InputMapper
from .frame import Frame, styled_runs
from .style import Color

logger = logging.getLogger(__name__)

FONT_NAME = ("Courier New", "DejaVu Sans Mono", "Menlo", "monospace")
# Names bound by InputMapper.default(); their arcade key codes are aliased to them
KEY_NAMES = ("UP", "DOWN", "LEFT", "RIGHT", "W", "A", "S", "D", "Q", "ESCAPE")


def bind_arcade_keys(mapper: InputMapper) -> InputMapper:
    """Alias arcade's integer key codes to the mapper's key names."""
    if arcade is None:
        raise RuntimeError("Arcade package is not installed; cannot bind keys")
    for name in KEY_NAMES:
        mapper.set_alias(getattr(arcade.key, name), name)
    return mapper


def placements(frame: Frame) -> List[Tuple[str, int, int, Color]]:
    """Text runs for a frame as (text, column, row, color) cells.

    Map runs come first, then the status line directly under the map and
    the info lines below it.
    """
    cells = [(text, col, row, colors.foreground) for row, col, text, colors in styled_runs(frame)]
    line = frame.height
    if frame.status is not None:
        fg = frame.status.colors.foreground if frame.status.colors else Color.WHITE
        cells.append((frame.status.text, 0, line, fg))
    for offset, info in enumerate(frame.info, start=1):
        cells.append((info, 0, line + offset, Color.GREY))
    return cells


class GlyphWindow:
    """Arcade window drawing a Frame as a grid of monospaced glyphs.

    Key presses go through the InputMapper into the GameLoop; every processed
    turn hands back a new Frame which replaces the drawn text objects. Only
    presses are forwarded, releases never reach the loop.
    """

    def __init__(
        self,
        loop: GameLoop,
        *,
        title: str,
        columns: int,
        rows: int,
        mapper: Optional[InputMapper] = None,
        font_size: int = 14,
    ) -> None:
        if arcade is None:
            raise RuntimeError("Arcade package is not installed; cannot create window")
        self.font_size = font_size
        self.cell_w = max(1, round(font_size * 0.65))
        self.cell_h = max(1, round(font_size * 1.4))
        self.mapper = bind_arcade_keys(mapper or InputMapper.default())
        self.loop = loop
        self._texts: List["arcade.Text"] = []
        self._window = arcade.Window(columns * self.cell_w, rows * self.cell_h, title=title)
        self._window.background_color = Color.BLACK.rgb
        self._window.on_draw = self.on_draw
        self._window.on_key_press = self.on_key_press
        loop.on_frame = self.show
        loop.start()
        logger.info("Arcade window initialized (%dx%d cells)", columns, rows)

    def _text(self, text: str, column: int, row: int, color: Color) -> "arcade.Text":
        x = column * self.cell_w
        y = self._window.height - (row + 1) * self.cell_h + self.cell_h // 4
        return arcade.Text(text, x, y, color.rgb, self.font_size, font_name=FONT_NAME)

    def show(self, frame: Frame) -> None:
        self._texts = [self._text(text, col, row, color) for text, col, row, color in placements(frame)]

    def run(self) -> None:  # pragma: no cover - needs a display
        arcade.run()

    def close(self) -> None:
        self._window.close()

    def on_draw(self) -> None:  # pragma: no cover - drawing needs a GL context
        self._window.clear()
        for text in self._texts:
            text.draw()

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        event = self.mapper.on_key_event(symbol, pressed=True)
        if not self.loop.handle(event):
            self.close()


__all__ = ["GlyphWindow", "bind_arcade_keys", "placements"]
