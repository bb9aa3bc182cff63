import random
from dataclasses import replace

import pytest

from seawars.core.models import FLEET_LENGTHS, Coord, Outcome, ShotResult, Side
from seawars.core.rules import (
    CpuTurn,
    GameOver,
    PlayerTurn,
    advance_turn,
    create_battle,
    fire,
    outcome_of,
    turn_owner,
)
from tests.seawars.helpers import make_battle


@pytest.mark.parametrize(
    ("state", "shooter", "result", "destroyed", "expected"),
    [
        (PlayerTurn(), Side.PLAYER, ShotResult.MISS, False, CpuTurn()),
        (PlayerTurn(), Side.PLAYER, ShotResult.HIT, False, PlayerTurn()),
        (PlayerTurn(), Side.PLAYER, ShotResult.SUNK, False, PlayerTurn()),
        (PlayerTurn(), Side.PLAYER, ShotResult.SUNK, True, GameOver(Side.PLAYER)),
        (PlayerTurn(), Side.PLAYER, ShotResult.REPEAT, False, PlayerTurn()),
        (CpuTurn(), Side.CPU, ShotResult.MISS, False, PlayerTurn()),
        (CpuTurn(), Side.CPU, ShotResult.HIT, False, CpuTurn()),
        (CpuTurn(), Side.CPU, ShotResult.SUNK, True, GameOver(Side.CPU)),
        (CpuTurn(), Side.PLAYER, ShotResult.MISS, False, CpuTurn()),
        (GameOver(Side.CPU), Side.PLAYER, ShotResult.SUNK, True, GameOver(Side.CPU)),
    ],
)
def test_advance_turn_transitions(state, shooter, result, destroyed, expected) -> None:
    assert advance_turn(state, shooter, result, destroyed) == expected


def test_turn_owner_and_outcome() -> None:
    assert turn_owner(PlayerTurn()) is Side.PLAYER
    assert turn_owner(CpuTurn()) is Side.CPU
    assert turn_owner(GameOver(Side.PLAYER)) is None
    assert outcome_of(CpuTurn()) is Outcome.IN_PROGRESS
    assert outcome_of(GameOver(Side.PLAYER)) is Outcome.PLAYER_WON
    assert outcome_of(GameOver(Side.CPU)) is Outcome.CPU_WON


def test_create_battle_starts_on_player_turn(seeded_rng) -> None:
    battle = create_battle(seeded_rng)
    assert battle.turn == PlayerTurn()
    assert battle.outcome is Outcome.IN_PROGRESS
    assert battle.player_shots == 0 and battle.cpu_shots == 0
    assert len(battle.player_fleet) == 10 and len(battle.cpu_fleet) == 10
    assert battle.player_board != battle.cpu_board


def test_player_miss_passes_turn_and_keeps_fleet() -> None:
    battle = make_battle()
    updated, resolution = fire(battle, Side.PLAYER, Coord(5, 3))
    assert resolution.result is ShotResult.MISS
    assert updated.turn == CpuTurn()
    assert updated.cpu_fleet == battle.cpu_fleet
    assert updated.player_shots == 1


def test_player_hit_keeps_turn() -> None:
    battle = make_battle()
    updated, resolution = fire(battle, Side.PLAYER, Coord(5, 5))
    assert resolution.result is ShotResult.HIT
    assert updated.turn == PlayerTurn()
    updated, resolution = fire(updated, Side.PLAYER, Coord(0, 0))
    assert resolution.result is ShotResult.SUNK
    assert updated.turn == PlayerTurn()
    assert updated.cpu_fleet.remaining() == 1


def test_wrong_side_and_repeat_shots_are_no_ops() -> None:
    battle = make_battle()
    unchanged, resolution = fire(battle, Side.CPU, Coord(0, 0))
    assert resolution.result is ShotResult.REPEAT
    assert unchanged is battle

    after_miss, _ = fire(battle, Side.PLAYER, Coord(9, 9))
    assert after_miss.turn == CpuTurn()
    again, resolution = fire(after_miss, Side.PLAYER, Coord(9, 9))
    assert resolution.result is ShotResult.REPEAT
    assert again is after_miss


def test_cpu_shots_update_player_side() -> None:
    battle = replace(make_battle(), turn=CpuTurn())
    updated, resolution = fire(battle, Side.CPU, Coord(0, 1))
    assert resolution.result is ShotResult.HIT
    assert updated.turn == CpuTurn()
    assert updated.cpu_shots == 1
    assert updated.player_board.was_shot(Coord(0, 1))
    updated, resolution = fire(updated, Side.CPU, Coord(0, 0))
    assert resolution.result is ShotResult.SUNK
    assert updated.turn == GameOver(Side.CPU)
    assert updated.outcome is Outcome.CPU_WON


@pytest.mark.parametrize("seed", range(5))
def test_firing_every_ship_cell_in_any_order_ends_game(seed: int) -> None:
    rng = random.Random(seed)
    battle = create_battle(rng)
    targets = battle.cpu_board.occupied_cells()
    rng.shuffle(targets)
    for index, coord in enumerate(targets):
        battle, resolution = fire(battle, Side.PLAYER, coord)
        assert resolution.result in (ShotResult.HIT, ShotResult.SUNK)
        if index < len(targets) - 1:
            assert battle.turn == PlayerTurn()
    assert battle.turn == GameOver(Side.PLAYER)
    assert battle.cpu_fleet.all_sunk()
    assert battle.player_shots == sum(FLEET_LENGTHS)

    finished, resolution = fire(battle, Side.PLAYER, Coord(0, 0))
    assert resolution.result is ShotResult.REPEAT
    assert finished is battle
