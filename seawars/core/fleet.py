"""Fleet records, random placement and validation."""

from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from seawars.core.board import Board, create_empty_board
from seawars.core.errors import PlacementError
from seawars.core.models import (
    BOARD_SIZE,
    FLEET_LENGTHS,
    Coord,
    Orientation,
    Ship,
    cells_for_ship,
)

MAX_PLACEMENT_ATTEMPTS = 500
MAX_FLEET_RESTARTS = 100

logger = logging.getLogger(__name__)


class Fleet(Mapping[int, Ship]):
    """Immutable mapping from ship id to ship record."""

    __slots__ = ("_ships",)

    def __init__(self, ships: Mapping[int, Ship] | None = None) -> None:
        self._ships: Mapping[int, Ship] = MappingProxyType(dict(ships or {}))

    def __getitem__(self, ship_id: int) -> Ship:
        return self._ships[ship_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._ships)

    def __len__(self) -> int:
        return len(self._ships)

    def __repr__(self) -> str:
        return f"Fleet({dict(self._ships)!r})"

    def with_ship(self, ship: Ship) -> Fleet:
        """Return a copy with `ship` added or replaced."""
        updated = dict(self._ships)
        updated[ship.ship_id] = ship
        return Fleet(updated)

    def with_hit(self, ship_id: int) -> Fleet:
        """Return a copy where the given ship has taken one more hit."""
        return self.with_ship(self._ships[ship_id].with_hit())

    def all_sunk(self) -> bool:
        """Return whether every ship has been sunk."""
        return all(ship.sunk for ship in self._ships.values())

    def remaining(self) -> int:
        """Count ships that are still afloat."""
        return sum(1 for ship in self._ships.values() if not ship.sunk)

    def lengths(self) -> list[int]:
        return [ship.length for ship in self._ships.values()]


def place_fleet(
    rng: random.Random,
    lengths: tuple[int, ...] = FLEET_LENGTHS,
    size: int = BOARD_SIZE,
) -> tuple[Board, Fleet]:
    """Place a fleet at random with non-touching ships.

    Each ship gets up to MAX_PLACEMENT_ATTEMPTS samples. When one ship runs out,
    placement restarts from an empty board so a partial fleet is never returned.
    """
    for restart in range(MAX_FLEET_RESTARTS):
        placed = _try_place_fleet(rng, lengths, size)
        if placed is not None:
            if restart:
                logger.debug("fleet_placement_restarts=%d", restart)
            return placed
        logger.info("fleet_placement_exhausted restart=%d", restart + 1)
    raise PlacementError(
        f"Failed to place fleet {list(lengths)} on a {size}x{size} board "
        f"after {MAX_FLEET_RESTARTS} restarts."
    )


def _try_place_fleet(
    rng: random.Random, lengths: tuple[int, ...], size: int
) -> tuple[Board, Fleet] | None:
    board = create_empty_board(size)
    fleet = Fleet()
    for ship_id, length in enumerate(lengths, start=1):
        cells = _sample_ship_cells(rng, board, length)
        if cells is None:
            return None
        board = board.with_ship(ship_id, cells)
        fleet = fleet.with_ship(Ship(ship_id=ship_id, length=length))
    return board, fleet


def _sample_ship_cells(rng: random.Random, board: Board, length: int) -> list[Coord] | None:
    size = board.size
    if length > size:
        return None
    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        orientation = rng.choice((Orientation.HORIZONTAL, Orientation.VERTICAL))
        if orientation is Orientation.HORIZONTAL:
            bow = Coord(row=rng.randrange(size), col=rng.randrange(size - length + 1))
        else:
            bow = Coord(row=rng.randrange(size - length + 1), col=rng.randrange(size))
        cells = cells_for_ship(bow, length, orientation)
        if not touches_existing(board, cells):
            return cells
    return None


def touches_existing(board: Board, cells: list[Coord]) -> bool:
    """Return whether any cell or its 8-neighbourhood is already occupied."""
    size = board.size
    for cell in cells:
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                rr = cell.row + dr
                cc = cell.col + dc
                if not (0 <= rr < size and 0 <= cc < size):
                    continue
                if board.is_occupied(rr, cc):
                    return True
    return False


def validate_fleet(
    board: Board, fleet: Fleet, lengths: tuple[int, ...] = FLEET_LENGTHS
) -> tuple[bool, str]:
    """Validate a board/fleet pair against the fleet composition rules."""
    if Counter(fleet.lengths()) != Counter(lengths):
        return False, f"Fleet lengths {sorted(fleet.lengths())} do not match {sorted(lengths)}."
    if len(board.occupied_cells()) != sum(lengths):
        return False, "Occupied cell count does not match fleet size."

    for ship_id, ship in fleet.items():
        if ship.ship_id != ship_id:
            return False, f"Ship {ship_id} is stored under the wrong id."
        cells = board.ship_cells(ship_id)
        if len(cells) != ship.length:
            return False, f"Ship {ship_id} occupies {len(cells)} cells, expected {ship.length}."
        if not _is_straight_line(cells):
            return False, f"Ship {ship_id} is not a straight contiguous line."

    for cell in board.occupied_cells():
        owner = int(board.ships[cell.row, cell.col])
        if owner not in fleet:
            return False, f"Cell {cell.label} references unknown ship {owner}."
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                rr = cell.row + dr
                cc = cell.col + dc
                if not (0 <= rr < board.size and 0 <= cc < board.size):
                    continue
                neighbour = int(board.ships[rr, cc])
                if neighbour not in (0, owner):
                    return False, f"Ships {owner} and {neighbour} touch at {cell.label}."
    return True, ""


def _is_straight_line(cells: list[Coord]) -> bool:
    rows = {cell.row for cell in cells}
    cols = {cell.col for cell in cells}
    if len(rows) == 1:
        span = sorted(cell.col for cell in cells)
    elif len(cols) == 1:
        span = sorted(cell.row for cell in cells)
    else:
        return False
    return span == list(range(span[0], span[0] + len(span)))
