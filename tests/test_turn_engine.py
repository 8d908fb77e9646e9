import random

import pytest

from glyphcrawl.engine import GameEvent, Phase, PlayerState, TurnEngine
from glyphcrawl.input import InputAction
from glyphcrawl.render.style import DANGER
from glyphcrawl.rules import DoorExit, Ruleset
from glyphcrawl.world import EMPTY, EntityKind, Position, World
from glyphcrawl.world.decoder import PRISON_DIGITS

from conftest import ScriptedRandom, StillRandom, make_map

ROOM = [
    "#######",
    "#.....#",
    "#.....#",
    "#.....#",
    "#######",
]

CELLS = [
    "#########",
    "#..4.1.3#",
    "#.......#",
    "#########",
]


def dungeon_engine(adversaries=(), rng=None, player=(2, 2), lines=ROOM):
    world = World([make_map(lines, player=player, adversaries=adversaries)])
    return TurnEngine(world, Ruleset.dungeon(), rng=rng or StillRandom())


def prison_engine(lines=CELLS, player=(1, 1), guards=(), rng=None, extra_maps=(), state=None):
    first = make_map(
        lines,
        player=player,
        adversaries=guards,
        partition=PRISON_DIGITS,
        player_kind=EntityKind.PRISONER,
        adversary_kind=EntityKind.GUARD,
    )
    world = World([first, *extra_maps])
    ruleset = Ruleset.prison(door_exits={1: DoorExit(map=1, position=(2, 1))})
    return TurnEngine(world, ruleset, rng=rng or StillRandom(), player_state=state)


def test_scenario_a_move_right_onto_empty():
    engine = dungeon_engine()
    result = engine.step(InputAction.MOVE_RIGHT)

    assert engine.world.player.position == Position(3, 2)
    assert result.status is None
    assert result.game_over is False
    assert result.moved is True
    assert engine.phase is Phase.ACTIVE


def test_scenario_b_player_walks_into_enemy():
    engine = dungeon_engine(adversaries=[(3, 2)])
    result = engine.step(InputAction.MOVE_RIGHT)

    assert result.game_over is True
    assert result.status.text == "You died!"
    assert result.status.colors == DANGER


def test_enemy_walking_into_player_is_detected():
    engine = dungeon_engine(adversaries=[(3, 2)], rng=ScriptedRandom([-1, 0]))
    result = engine.step(InputAction.OTHER)
    assert result.game_over is True
    assert result.status.text == "You died!"


def test_collision_uses_post_move_positions():
    # The enemy steps away from the cell the player steps into
    engine = dungeon_engine(adversaries=[(3, 2)], rng=ScriptedRandom([1, 0]))
    result = engine.step(InputAction.MOVE_RIGHT)
    assert result.game_over is False
    assert engine.world.player.position == Position(3, 2)
    assert engine.world.current.adversaries[0].position == Position(4, 2)


def test_player_blocked_by_wall_still_takes_turn():
    engine = dungeon_engine(player=(1, 1))
    result = engine.step(InputAction.MOVE_UP)
    assert result.moved is False
    assert engine.world.player.position == Position(1, 1)
    assert engine.turn == 1


def test_scenario_c_guard_hits_twice():
    engine = prison_engine(lines=ROOM, player=(2, 2), guards=[(3, 2)])
    assert engine.player_state.health == 100

    first = engine.step(InputAction.MOVE_RIGHT)
    assert engine.player_state.health == 50
    assert first.game_over is False
    assert first.status.text == "A guard hit you"

    second = engine.step(InputAction.OTHER)
    assert engine.player_state.health == 0
    assert second.game_over is True
    assert second.status.text == "You died! Game Over"


def test_two_guards_on_player_hit_in_one_turn():
    engine = prison_engine(lines=ROOM, player=(2, 2), guards=[(3, 2), (3, 2)])
    result = engine.step(InputAction.MOVE_RIGHT)
    assert engine.player_state.health == 0
    assert result.game_over is True
    assert result.status.text == "You died! Game Over"


def test_scenario_d_locked_door():
    engine = prison_engine(player=(4, 1))
    result = engine.step(InputAction.MOVE_RIGHT)

    assert engine.world.current_map == 0
    assert engine.world.player.position == Position(5, 1)
    assert "key" in result.status.text.lower()
    assert result.game_over is False


def test_scenario_e_exit_door_wins_without_keys():
    engine = prison_engine(player=(6, 1))
    assert engine.player_state.keys == set()
    result = engine.step(InputAction.MOVE_RIGHT)

    assert result.game_over is True
    assert result.status.text == "You escaped the prison! You win!"


def test_key_pickup_is_exactly_once():
    engine = prison_engine(player=(2, 1))
    events = []
    engine.add_listener(lambda e, eng: events.append(e))

    result = engine.step(InputAction.MOVE_RIGHT)
    assert engine.player_state.keys == {1}
    assert engine.world.current.tile_at(3, 1) == EMPTY
    assert result.status.text == "You picked up key 1."
    assert events.count(GameEvent.KEY_PICKED_UP) == 1

    engine.step(InputAction.MOVE_LEFT)
    again = engine.step(InputAction.MOVE_RIGHT)
    assert again.status is None
    assert engine.player_state.keys == {1}
    assert events.count(GameEvent.KEY_PICKED_UP) == 1


def test_unlocked_door_transfers_to_configured_entry():
    other = make_map(["....", "...."], partition=PRISON_DIGITS, adversaries=[(0, 0)], adversary_kind=EntityKind.GUARD)
    engine = prison_engine(player=(2, 1), extra_maps=[other])

    engine.step(InputAction.MOVE_RIGHT)  # key 1
    engine.step(InputAction.MOVE_RIGHT)
    result = engine.step(InputAction.MOVE_RIGHT)  # door 1

    world = engine.world
    assert world.current_map == 1
    assert world.player.position == Position(2, 1)
    assert world.current.entities[0] is world.player
    assert world.maps[0].player is None
    assert result.status is None
    # The key is kept; doors do not consume it
    assert engine.player_state.keys == {1}


def test_stairs_switch_maps_and_land_on_same_coordinate():
    first = make_map(["#....", "#.1.."], player=(1, 1))
    second = make_map(["#....", "#...."], adversaries=[(4, 0)])
    engine = TurnEngine(World([first, second]), Ruleset.dungeon(), rng=StillRandom())
    events = []
    engine.add_listener(lambda e, eng: events.append(e))

    engine.step(InputAction.MOVE_RIGHT)

    assert engine.world.current_map == 1
    assert engine.world.player.position == Position(2, 1)
    assert engine.world.maps[0].player is None
    assert GameEvent.MAP_CHANGED in events
    assert engine.snapshot().map_index == 1


def test_game_over_absorbs_commands():
    rng = StillRandom()
    engine = dungeon_engine(adversaries=[(3, 2)], rng=rng)
    dead = engine.step(InputAction.MOVE_RIGHT)
    draws = len(rng.calls)
    before = engine.snapshot()

    after = engine.step(InputAction.MOVE_LEFT)

    assert after.game_over is True
    assert after.status == dead.status
    assert len(rng.calls) == draws
    assert engine.snapshot() == before


def test_waiting_without_adversaries_changes_nothing():
    rng = StillRandom()
    engine = dungeon_engine(rng=rng)
    before = engine.snapshot()
    result = engine.step(InputAction.OTHER)
    assert engine.snapshot() == before
    assert rng.calls == []
    assert result.moved is False


def test_adversaries_draw_in_index_order_with_configured_range():
    rng = ScriptedRandom([1, 0, 0, 1])
    engine = prison_engine(lines=ROOM, player=(1, 1), guards=[(3, 2), (4, 2)], rng=rng)
    engine.step(InputAction.OTHER)
    guards = engine.world.current.adversaries
    assert guards[0].position == Position(4, 2)
    assert guards[1].position == Position(4, 3)
    assert rng.calls == [(-2, 2)] * 4


def test_death_skips_tile_effect():
    engine = prison_engine(player=(2, 1), guards=[(3, 1)], state=PlayerState(health=50))
    result = engine.step(InputAction.MOVE_RIGHT)
    assert result.game_over is True
    assert engine.player_state.keys == set()
    assert engine.world.current.tile_at(3, 1) != EMPTY


def test_failing_listener_does_not_break_turn(caplog):
    engine = dungeon_engine()

    def boom(event, eng):
        raise RuntimeError("listener failure")

    engine.add_listener(boom)
    with caplog.at_level("ERROR"):
        result = engine.step(InputAction.MOVE_RIGHT)
    assert result.moved is True
    assert "Listener errored" in caplog.text


def test_seeded_runs_replay_identically():
    def play(seed):
        lines = ["#" * 12] + ["#" + "." * 10 + "#"] * 6 + ["#" * 12]
        engine = dungeon_engine(adversaries=[(8, 3), (9, 5), (5, 5)], rng=random.Random(seed), player=(1, 1), lines=lines)
        frames = []
        for action in [InputAction.MOVE_RIGHT, InputAction.MOVE_DOWN, InputAction.OTHER] * 5:
            engine.step(action)
            frames.append(engine.snapshot())
        return frames

    assert play(7) == play(7)


def test_snapshot_shows_vitals_for_prison():
    engine = prison_engine(player=(2, 1))
    engine.step(InputAction.MOVE_RIGHT)
    frame = engine.snapshot()
    assert frame.info[0] == "Health: 100  Keys: 1"
    assert frame.entities[0] == (Position(3, 1), EntityKind.PRISONER)


def test_hit_and_key_pickup_in_one_turn_keep_both_messages():
    engine = prison_engine(player=(2, 1), guards=[(3, 2)], rng=ScriptedRandom([0, -1]))
    result = engine.step(InputAction.MOVE_RIGHT)

    assert engine.player_state.health == 50
    assert engine.player_state.keys == {1}
    assert result.status.text == "A guard hit you. You picked up key 1."
    assert result.status.colors == DANGER
