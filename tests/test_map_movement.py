import random

import pytest

from glyphcrawl.world import EMPTY, WALL, Entity, EntityKind, GameMap, Key, Position, Wall
from glyphcrawl.world.decoder import PRISON_DIGITS

from conftest import make_map

ROOM = [
    "#####",
    "#...#",
    "#.#.#",
    "#...#",
    "#####",
]


def test_move_onto_floor_commits_position():
    m = make_map(ROOM, player=(1, 1))
    assert m.move_entity(0, 1, 0) is True
    assert m.player.position == Position(2, 1)


def test_move_into_wall_is_rejected_without_mutation():
    m = make_map(ROOM, player=(1, 1))
    assert m.move_entity(0, -1, 0) is False
    assert m.move_entity(0, 0, -1) is False
    assert m.player.position == Position(1, 1)


def test_out_of_bounds_is_rejected():
    m = make_map(["..", ".."], player=(0, 0))
    assert m.move_entity(0, -1, 0) is False
    assert m.move_entity(0, 0, -1) is False
    assert m.move_entity(0, -1, -1) is False
    assert m.player.position == Position(0, 0)


def test_diagonal_is_not_blocked_by_orthogonal_walls():
    m = make_map(
        [
            "...",
            ".#.",
            "#..",
        ],
        player=(0, 1),
    )
    # Both (1, 1) and (0, 2) are walls; the diagonal target (1, 2) is floor
    assert m.move_entity(0, 1, 1) is True
    assert m.player.position == Position(1, 2)


def test_adversary_indices_follow_player():
    m = make_map(ROOM, player=(1, 1), adversaries=[(3, 1), (3, 3)])
    assert [e.kind for e in m.entities] == [EntityKind.PLAYER, EntityKind.ENEMY, EntityKind.ENEMY]
    assert m.move_entity(2, -1, 0) is True
    assert m.adversaries[1].position == Position(2, 3)
    assert m.adversaries[0].position == Position(3, 1)


def test_bad_entity_index_raises():
    m = make_map(ROOM, player=(1, 1))
    with pytest.raises(IndexError):
        m.move_entity(1, 0, 0)
    empty = make_map(ROOM, adversaries=[(1, 1)])
    with pytest.raises(IndexError):
        empty.move_entity(0, 1, 0)


def test_random_moves_never_leave_grid_or_enter_walls():
    rng = random.Random(1234)
    lines = ["".join(rng.choice("#...") for _ in range(9)) for _ in range(7)]
    floor = [(x, y) for y, row in enumerate(lines) for x, ch in enumerate(row) if ch == "."]
    m = make_map(lines, player=floor[0], adversaries=floor[1:6])
    for _ in range(500):
        index = rng.randrange(len(m.entities))
        m.move_entity(index, rng.randint(-2, 2), rng.randint(-2, 2))
        for ent in m.entities:
            assert m.in_bounds(ent.position.x, ent.position.y)
            assert not isinstance(m.tile_at(ent.position.x, ent.position.y), Wall)


def test_constructor_keeps_player_slot_separate():
    tiles = [[EMPTY, EMPTY]]
    with pytest.raises(ValueError):
        GameMap(tiles, player=Entity(Position(0, 0), EntityKind.GUARD))
    with pytest.raises(ValueError):
        GameMap(tiles, adversaries=[Entity(Position(0, 0), EntityKind.PRISONER)])
    with pytest.raises(ValueError):
        GameMap([[EMPTY, EMPTY], [EMPTY]])


def test_tile_access_and_key_removal():
    m = make_map(["#4."], player=(2, 0), partition=PRISON_DIGITS)
    assert m.tile_at(1, 0) == Key(1)
    m.clear_tile(Position(1, 0))
    assert m.tile_at(1, 0) == EMPTY
    assert m.is_passable(-1, 0) is False
    with pytest.raises(IndexError):
        m.tile_at(3, 0)
    with pytest.raises(TypeError):
        m.set_tile(0, 0, "#")
    m.set_tile(2, 0, WALL)
    assert m.is_passable(2, 0) is False
