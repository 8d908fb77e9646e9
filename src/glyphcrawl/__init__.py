"""
Glyphcrawl package root.

A turn-based glyph dungeon: the simulation core (``world``, ``engine``,
``rules``) stays free of rendering and terminal concerns so it can be driven
headless by tests or by the Arcade front-end in ``render.arcade_view``.
"""

__version__ = "0.1.0"

__all__ = [
    "engine",
    "input",
    "render",
    "rules",
    "world",
]
