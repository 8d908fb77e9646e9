import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from glyphcrawl.world import Entity, EntityKind, GameMap, Position  # noqa: E402
from glyphcrawl.world.decoder import DUNGEON_DIGITS, DigitPartition, parse_tilemap  # noqa: E402


class StillRandom:
    """RNG stand-in that keeps every adversary in place."""

    def __init__(self) -> None:
        self.calls: List[Tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return 0


class ScriptedRandom:
    """Returns queued values in order, then zeros."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values = list(values)
        self.calls: List[Tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.values.pop(0) if self.values else 0


def make_map(
    lines: Sequence[str],
    player: Optional[Tuple[int, int]] = None,
    adversaries: Sequence[Tuple[int, int]] = (),
    partition: DigitPartition = DUNGEON_DIGITS,
    player_kind: EntityKind = EntityKind.PLAYER,
    adversary_kind: EntityKind = EntityKind.ENEMY,
) -> GameMap:
    tiles = parse_tilemap("\n".join(lines), len(lines[0]), len(lines), partition)
    return GameMap(
        tiles,
        player=Entity(Position(*player), player_kind) if player is not None else None,
        adversaries=[Entity(Position(*pos), adversary_kind) for pos in adversaries],
    )


@pytest.fixture
def still_rng() -> StillRandom:
    return StillRandom()
