"""Turn state machine and battle state transitions."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import TypeAlias

from seawars.core.board import Board
from seawars.core.fleet import Fleet, place_fleet
from seawars.core.models import Coord, Outcome, ShotResult, Side
from seawars.core.shot_resolution import ShotResolution, resolve_shot

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlayerTurn:
    """The human owns the turn."""


@dataclass(frozen=True, slots=True)
class CpuTurn:
    """The automated opponent owns the turn."""


@dataclass(frozen=True, slots=True)
class GameOver:
    """Terminal state."""

    winner: Side


TurnState: TypeAlias = PlayerTurn | CpuTurn | GameOver


def turn_for(side: Side) -> TurnState:
    return PlayerTurn() if side is Side.PLAYER else CpuTurn()


def turn_owner(state: TurnState) -> Side | None:
    """Return the side allowed to fire, or None once the game is over."""
    if isinstance(state, PlayerTurn):
        return Side.PLAYER
    if isinstance(state, CpuTurn):
        return Side.CPU
    return None


def outcome_of(state: TurnState) -> Outcome:
    if isinstance(state, GameOver):
        return Outcome.PLAYER_WON if state.winner is Side.PLAYER else Outcome.CPU_WON
    return Outcome.IN_PROGRESS


def advance_turn(
    state: TurnState, shooter: Side, result: ShotResult, defender_destroyed: bool
) -> TurnState:
    """Single transition function for the turn state machine."""
    if isinstance(state, GameOver):
        return state
    if turn_owner(state) is not shooter:
        return state
    if result is ShotResult.REPEAT:
        return state
    if defender_destroyed:
        return GameOver(winner=shooter)
    if result is ShotResult.MISS:
        return turn_for(shooter.opponent)
    return state


@dataclass(frozen=True, slots=True)
class Battle:
    """Snapshot of both sides plus the turn state."""

    player_board: Board
    player_fleet: Fleet
    cpu_board: Board
    cpu_fleet: Fleet
    turn: TurnState = PlayerTurn()
    player_shots: int = 0
    cpu_shots: int = 0

    @property
    def outcome(self) -> Outcome:
        return outcome_of(self.turn)

    @property
    def is_over(self) -> bool:
        return isinstance(self.turn, GameOver)

    def board_of(self, side: Side) -> Board:
        return self.player_board if side is Side.PLAYER else self.cpu_board

    def fleet_of(self, side: Side) -> Fleet:
        return self.player_fleet if side is Side.PLAYER else self.cpu_fleet


def create_battle(rng: random.Random) -> Battle:
    """Place both fleets independently and start on the player's turn."""
    player_board, player_fleet = place_fleet(rng)
    cpu_board, cpu_fleet = place_fleet(rng)
    return Battle(
        player_board=player_board,
        player_fleet=player_fleet,
        cpu_board=cpu_board,
        cpu_fleet=cpu_fleet,
    )


def fire(battle: Battle, shooter: Side, coord: Coord) -> tuple[Battle, ShotResolution]:
    """Resolve one shot by `shooter` against the opposing side."""
    defender = shooter.opponent
    target_board = battle.board_of(defender)
    target_fleet = battle.fleet_of(defender)
    if turn_owner(battle.turn) is not shooter:
        return battle, ShotResolution(
            board=target_board, fleet=target_fleet, result=ShotResult.REPEAT
        )

    resolution = resolve_shot(target_board, target_fleet, coord)
    if resolution.result is ShotResult.REPEAT:
        return battle, resolution

    next_turn = advance_turn(
        battle.turn, shooter, resolution.result, resolution.fleet.all_sunk()
    )
    if defender is Side.CPU:
        updated = replace(
            battle,
            cpu_board=resolution.board,
            cpu_fleet=resolution.fleet,
            turn=next_turn,
            player_shots=battle.player_shots + 1,
        )
    else:
        updated = replace(
            battle,
            player_board=resolution.board,
            player_fleet=resolution.fleet,
            turn=next_turn,
            cpu_shots=battle.cpu_shots + 1,
        )
    logger.debug(
        "shot shooter=%s coord=%s result=%s turn=%s",
        shooter.value,
        coord.label,
        resolution.result.value,
        type(next_turn).__name__,
    )
    return updated, resolution
