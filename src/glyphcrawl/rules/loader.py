from __future__ import annotations

import logging
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..world.decoder import parse_tilemap
from ..world.entities import Entity, EntityKind, Position
from ..world.map import GameMap
from ..world.tiles import Door, Stairs, Tile, Wall, is_passable
from ..world.world import World
from .ruleset import Ruleset

logger = logging.getLogger(__name__)

DATA_PACKAGE = "glyphcrawl.data"


class WorldConfigError(ValueError):
    """A world definition or its map text cannot be turned into a World."""


class EntitySpec(BaseModel):
    kind: EntityKind = Field(..., description="player, enemy, prisoner or guard")
    position: Tuple[int, int] = Field(..., description="Starting (x, y)")


class MapSpec(BaseModel):
    """One map: a text resource (or inline text) plus its entity roster."""

    tiles: str = Field("", description="Map text file, relative to the world definition")
    text: Optional[str] = Field(None, description="Inline map text; filled from `tiles` on load")
    entities: List[EntitySpec] = Field(default_factory=list)


class WorldSpec(BaseModel):
    title: str = Field("glyphcrawl", description="Window caption")
    width: int = Field(80, gt=0, description="Tiles per row, shared by all maps")
    height: int = Field(23, gt=0, description="Rows per map")
    status_rows: int = Field(1, ge=1, description="Rows reserved under the map for status/info")
    ruleset: Ruleset = Field(default_factory=Ruleset)
    maps: List[MapSpec] = Field(..., min_length=1)


def available_worlds() -> List[str]:
    """Names of the bundled world definitions."""
    root = resource_files(DATA_PACKAGE).joinpath("worlds")
    return sorted(p.name[: -len(".yaml")] for p in root.iterdir() if p.name.endswith(".yaml"))


def _parse_spec(raw_text: str, origin: str) -> WorldSpec:
    try:
        raw = yaml.safe_load(raw_text) or {}
    except yaml.YAMLError as exc:
        raise WorldConfigError(f"{origin}: invalid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise WorldConfigError(f"{origin}: top level must be a mapping")
    try:
        return WorldSpec.model_validate(raw)
    except ValidationError as exc:
        raise WorldConfigError(f"{origin}: {exc}") from exc


def _attach_text(spec: WorldSpec, read: Callable[[str], str], origin: str) -> WorldSpec:
    maps: List[MapSpec] = []
    for index, m in enumerate(spec.maps):
        if m.text is None:
            if not m.tiles:
                raise WorldConfigError(f"{origin}: map {index} has neither `tiles` nor `text`")
            try:
                m = m.model_copy(update={"text": read(m.tiles)})
            except (FileNotFoundError, OSError) as exc:
                raise WorldConfigError(f"{origin}: map {index} text {m.tiles!r} not readable: {exc}") from exc
        maps.append(m)
    return spec.model_copy(update={"maps": maps})


def load_world_spec(source: Union[str, Path]) -> WorldSpec:
    """Load a world definition by bundled name (``"prison"``) or YAML path.

    Map text files are resolved next to the definition: under
    ``glyphcrawl/data/maps`` for bundled worlds, relative to the YAML file
    otherwise.
    """
    path = Path(source)
    if path.suffix in (".yaml", ".yml") or path.is_file():
        if not path.is_file():
            raise WorldConfigError(f"World definition not found: {path}")
        origin = str(path)
        spec = _parse_spec(path.read_text(encoding="utf-8"), origin)
        base = path.parent
        logger.debug("Loaded world definition from path: %s", path)
        return _attach_text(spec, lambda name: (base / name).read_text(encoding="utf-8"), origin)

    name = str(source)
    if name not in available_worlds():
        raise WorldConfigError(f"Unknown world {name!r}; bundled worlds: {', '.join(available_worlds())}")
    data = resource_files(DATA_PACKAGE)
    spec = _parse_spec(data.joinpath("worlds", f"{name}.yaml").read_text(encoding="utf-8"), name)
    logger.debug("Loaded embedded world definition %r", name)
    return _attach_text(spec, lambda fname: data.joinpath("maps", fname).read_text(encoding="utf-8"), name)


def _check_entity(spec: WorldSpec, index: int, tiles: List[List[Tile]], ent: EntitySpec) -> Position:
    x, y = ent.position
    if not (0 <= x < spec.width and 0 <= y < spec.height):
        raise WorldConfigError(f"map {index}: {ent.kind.value} at {ent.position} is out of bounds")
    if isinstance(tiles[y][x], Wall):
        raise WorldConfigError(f"map {index}: {ent.kind.value} at {ent.position} starts inside a wall")
    return Position(x, y)


def build_world(spec: WorldSpec) -> World:
    """Decode every map, place the rosters and validate portals."""
    ruleset = spec.ruleset
    grids: List[List[List[Tile]]] = []
    maps: List[GameMap] = []
    player_maps: List[int] = []

    for index, m in enumerate(spec.maps):
        if m.text is None:
            raise WorldConfigError(f"map {index}: map text missing (load the definition with load_world_spec)")
        tiles = parse_tilemap(m.text, spec.width, spec.height, ruleset.digits)
        player: Optional[Entity] = None
        adversaries: List[Entity] = []
        for ent in m.entities:
            pos = _check_entity(spec, index, tiles, ent)
            if ent.kind.is_player:
                player_maps.append(index)
                player = Entity(pos, ent.kind)
            else:
                adversaries.append(Entity(pos, ent.kind))
        grids.append(tiles)
        maps.append(GameMap(tiles, player=player, adversaries=adversaries))

    if len(player_maps) != 1:
        raise WorldConfigError(f"expected exactly one player entity, found {len(player_maps)}")

    _check_portals(spec, grids)
    world = World(maps, current_map=player_maps[0])
    logger.info("Built world %r: %d maps, ruleset %s", spec.title, len(maps), ruleset.name)
    return world


def _check_portals(spec: WorldSpec, grids: List[List[List[Tile]]]) -> None:
    ruleset = spec.ruleset
    door_ids: Set[int] = set()
    for index, tiles in enumerate(grids):
        for row in tiles:
            for tile in row:
                if isinstance(tile, Stairs):
                    if not 0 <= tile.target_map < len(grids):
                        raise WorldConfigError(
                            f"map {index}: stairs at {tile.target.as_tuple()} lead to missing map {tile.target_map}"
                        )
                    landing = grids[tile.target_map][tile.target.y][tile.target.x]
                    if not is_passable(landing):
                        logger.warning(
                            "map %d: stairs at %s land inside a wall on map %d",
                            index, tile.target.as_tuple(), tile.target_map,
                        )
                elif isinstance(tile, Door):
                    door_ids.add(tile.door_id)

    for door_id in sorted(door_ids - {ruleset.exit_door}):
        if door_id not in ruleset.door_exits:
            raise WorldConfigError(f"door {door_id} has no entry in ruleset.door_exits")
    for door_id, exit_ in ruleset.door_exits.items():
        if not 0 <= exit_.map < len(grids):
            raise WorldConfigError(f"door {door_id} exits to missing map {exit_.map}")
        x, y = exit_.position
        if not (0 <= x < spec.width and 0 <= y < spec.height) or not is_passable(grids[exit_.map][y][x]):
            raise WorldConfigError(f"door {door_id} exit {exit_.position} on map {exit_.map} is not passable")


__all__ = [
    "EntitySpec",
    "MapSpec",
    "WorldSpec",
    "WorldConfigError",
    "available_worlds",
    "load_world_spec",
    "build_world",
]
