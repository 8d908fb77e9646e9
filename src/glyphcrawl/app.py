from __future__ import annotations

import logging
import random
from typing import Iterable, Optional, Sequence

from .engine.loop import GameLoop
from .engine.turn import TurnEngine
from .input.mapping import InputMapper
from .render.frame import Frame, render_text
from .rules.loader import WorldConfigError, WorldSpec, build_world, load_world_spec

logger = logging.getLogger(__name__)


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def create_engine(spec: WorldSpec, seed: Optional[int] = None) -> TurnEngine:
    """Fresh world and engine for ``spec``; a seed makes adversary moves replayable."""
    world = build_world(spec)
    return TurnEngine(world, spec.ruleset, rng=random.Random(seed))


def run_gui(world: str = "dungeon", seed: Optional[int] = None, font_size: int = 14) -> int:
    """Play ``world`` in an Arcade window.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        logger.error("Arcade not available; use --headless or install arcade")
        return 1
    from .render.arcade_view import GlyphWindow

    try:
        spec = load_world_spec(world)
        engine = create_engine(spec, seed)
    except WorldConfigError as exc:
        logger.error("Cannot load world %r: %s", world, exc)
        return 2

    window = GlyphWindow(
        GameLoop(engine),
        title=spec.title,
        columns=spec.width,
        rows=spec.height + spec.status_rows,
        font_size=font_size,
    )
    try:
        logger.info("Launching Arcade window")
        window.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1


def run_headless(
    world: str = "dungeon",
    seed: Optional[int] = None,
    keys: Sequence[str] = (),
    out=print,
) -> int:
    """Play a scripted key sequence and print the final frame.

    Args:
        world: Bundled world name or path to a world YAML.
        seed: Optional RNG seed for adversary movement.
        keys: Key names as understood by ``InputMapper.default()``.
        out: Line sink, ``print`` by default.
    """
    try:
        spec = load_world_spec(world)
        engine = create_engine(spec, seed)
    except WorldConfigError as exc:
        logger.error("Cannot load world %r: %s", world, exc)
        return 2

    frames: list[Frame] = []
    loop = GameLoop(engine, on_frame=frames.append)
    events: Iterable = InputMapper.default().script(keys)
    try:
        turns = loop.run(events)
    except KeyboardInterrupt:
        loop.stop()
        out("Interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1

    for line in render_text(frames[-1]):
        out(line)
    out(f"Turns: {turns}  Map: {engine.world.current_map}  Game over: {engine.game_over}")
    return 0


__all__ = ["create_engine", "run_gui", "run_headless"]
