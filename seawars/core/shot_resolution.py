"""Shot outcome evaluation (miss/hit/sunk/repeat)."""

from __future__ import annotations

from dataclasses import dataclass

from seawars.core.board import Board
from seawars.core.fleet import Fleet
from seawars.core.models import Coord, Ship, ShotResult


@dataclass(frozen=True, slots=True)
class ShotResolution:
    """New board and fleet snapshots after one shot."""

    board: Board
    fleet: Fleet
    result: ShotResult
    sunk_ship: Ship | None = None


def resolve_shot(board: Board, fleet: Fleet, coord: Coord) -> ShotResolution:
    """Resolve a shot against a board and its fleet.

    Inputs are never modified. Out-of-bounds or already fired cells yield
    REPEAT with the original snapshots returned as-is.
    """
    if not board.in_bounds(coord) or board.was_shot(coord):
        return ShotResolution(board=board, fleet=fleet, result=ShotResult.REPEAT)

    next_board = board.with_shot(coord)
    ship_id = board.cell(coord).ship_id
    if ship_id is None:
        return ShotResolution(board=next_board, fleet=fleet, result=ShotResult.MISS)

    next_fleet = fleet.with_hit(ship_id)
    ship = next_fleet[ship_id]
    if ship.sunk:
        return ShotResolution(
            board=next_board, fleet=next_fleet, result=ShotResult.SUNK, sunk_ship=ship
        )
    return ShotResolution(board=next_board, fleet=next_fleet, result=ShotResult.HIT)
