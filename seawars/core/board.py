"""Immutable board snapshots backed by numpy grids."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from seawars.core.models import BOARD_SIZE, Cell, Coord


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, slots=True, eq=False)
class Board:
    """Numpy-backed board snapshot.

    `ships` holds the ship id per cell (0 = empty water) and `shots` marks
    fired cells. Both grids are read-only; every change produces a new Board.
    """

    ships: np.ndarray
    shots: np.ndarray

    def __post_init__(self) -> None:
        if self.ships.shape != self.shots.shape or self.ships.ndim != 2:
            raise ValueError("Board grids must be square and of equal shape.")
        if self.ships.shape[0] != self.ships.shape[1]:
            raise ValueError("Board grids must be square and of equal shape.")
        if self.ships.flags.writeable:
            _frozen(self.ships)
        if self.shots.flags.writeable:
            _frozen(self.shots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(
            np.array_equal(self.ships, other.ships) and np.array_equal(self.shots, other.shots)
        )

    @property
    def size(self) -> int:
        return int(self.ships.shape[0])

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def cell(self, coord: Coord) -> Cell:
        """Return a read-only view of one cell."""
        ship_id = int(self.ships[coord.row, coord.col])
        return Cell(
            occupied=ship_id != 0,
            fired=bool(self.shots[coord.row, coord.col]),
            ship_id=ship_id or None,
        )

    def was_shot(self, coord: Coord) -> bool:
        """Return whether this cell was previously targeted."""
        return bool(self.shots[coord.row, coord.col])

    def is_occupied(self, row: int, col: int) -> bool:
        return bool(self.ships[row, col] != 0)

    def with_ship(self, ship_id: int, cells: Iterable[Coord]) -> Board:
        """Return a copy with `ship_id` written into `cells`."""
        if ship_id <= 0:
            raise ValueError("Ship ids must be positive.")
        ships = self.ships.copy()
        for cell in cells:
            if not self.in_bounds(cell):
                raise ValueError(f"Cell {cell} is outside the board.")
            if ships[cell.row, cell.col] != 0:
                raise ValueError(f"Cell {cell} is already occupied.")
            ships[cell.row, cell.col] = ship_id
        return Board(ships=_frozen(ships), shots=self.shots)

    def with_shot(self, coord: Coord) -> Board:
        """Return a copy with one cell marked fired."""
        shots = self.shots.copy()
        shots[coord.row, coord.col] = True
        return Board(ships=self.ships, shots=_frozen(shots))

    def unfired_cells(self) -> list[Coord]:
        """List cells that have not been fired at, row-major."""
        return [Coord(int(r), int(c)) for r, c in np.argwhere(~self.shots)]

    def occupied_cells(self) -> list[Coord]:
        """List cells that hold part of a ship, row-major."""
        return [Coord(int(r), int(c)) for r, c in np.argwhere(self.ships != 0)]

    def ship_cells(self, ship_id: int) -> list[Coord]:
        """List cells holding the given ship, row-major."""
        return [Coord(int(r), int(c)) for r, c in np.argwhere(self.ships == ship_id)]

    def fired_count(self) -> int:
        return int(np.count_nonzero(self.shots))


def create_empty_board(size: int = BOARD_SIZE) -> Board:
    """Create an N x N board with no ships and no shots."""
    return Board(
        ships=_frozen(np.zeros((size, size), dtype=np.int16)),
        shots=_frozen(np.zeros((size, size), dtype=bool)),
    )


def in_bounds(coord: Coord, size: int = BOARD_SIZE) -> bool:
    """Return whether a coordinate lies on an N x N board."""
    return 0 <= coord.row < size and 0 <= coord.col < size
