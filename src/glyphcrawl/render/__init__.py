"""
Render adapters. ``style`` and ``frame`` are pure; ``arcade_view`` needs Arcade
and is imported lazily by the app runner.
"""
from .frame import Frame, StatusMessage, render_text, styled_runs
from .style import Color, ColorPair, Style, style

__all__ = [
    "Color",
    "ColorPair",
    "Frame",
    "StatusMessage",
    "Style",
    "render_text",
    "style",
    "styled_runs",
]
