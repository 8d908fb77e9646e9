from __future__ import annotations

import argparse
import dataclasses
import logging
import re
import sys

from . import __version__
from .app import run_gui, run_headless
from .config import Settings


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def _split_keys(raw: str) -> list[str]:
    return [k for k in re.split(r"[,\s]+", raw) if k]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="glyphcrawl",
        description="Turn-based glyph dungeon and prison escape",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--world", default=None, help="Bundled world name (dungeon, prison) or path to a world YAML")
    parser.add_argument("--seed", type=int, default=None, help="Seed for adversary movement")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Play --keys without a window and print the result")
    parser.add_argument("--keys", default="", help="Headless key script, e.g. 'RIGHT,RIGHT,DOWN' or 'd d s'")
    parser.add_argument("--font-size", type=int, default=None, help="Glyph size in the GUI")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    settings = Settings.from_sources()
    overrides = {
        "world": args.world,
        "seed": args.seed,
        "font_size": args.font_size,
    }
    settings = dataclasses.replace(settings, **{k: v for k, v in overrides.items() if v is not None})
    if args.gui:
        settings.headless = False
    elif args.headless:
        settings.headless = True
    settings.validate()

    if settings.headless:
        return run_headless(settings.world, settings.seed, _split_keys(args.keys))
    return run_gui(settings.world, settings.seed, settings.font_size)


if __name__ == "__main__":
    sys.exit(main())
