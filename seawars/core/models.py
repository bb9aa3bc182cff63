"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10
FLEET_LENGTHS: tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)
COLUMN_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class ShotResult(StrEnum):
    """Result of a single shot."""

    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"
    REPEAT = "REPEAT"


class Side(StrEnum):
    """One of the two fleets in a game."""

    PLAYER = "PLAYER"
    CPU = "CPU"

    @property
    def opponent(self) -> Side:
        return Side.CPU if self is Side.PLAYER else Side.PLAYER


class Outcome(StrEnum):
    """Overall game outcome."""

    IN_PROGRESS = "IN_PROGRESS"
    PLAYER_WON = "PLAYER_WON"
    CPU_WON = "CPU_WON"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate (`col` is the x axis, `row` the y axis)."""

    row: int
    col: int

    @property
    def label(self) -> str:
        """Human label such as `A1` (column letter, 1-based row)."""
        return f"{COLUMN_LETTERS[self.col]}{self.row + 1}"


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of a single board cell."""

    occupied: bool
    fired: bool
    ship_id: int | None = None


@dataclass(frozen=True, slots=True)
class Ship:
    """Ship record; replaced rather than mutated when hit."""

    ship_id: int
    length: int
    hit_count: int = 0

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("Ship length must be positive.")
        if not 0 <= self.hit_count <= self.length:
            raise ValueError("Ship hit_count must be within [0, length].")

    @property
    def sunk(self) -> bool:
        return self.hit_count == self.length

    def with_hit(self) -> Ship:
        """Return a copy with one more hit; a sunk ship cannot be hit again."""
        if self.sunk:
            raise ValueError(f"Ship {self.ship_id} is already sunk.")
        return Ship(self.ship_id, self.length, self.hit_count + 1)


def parse_coord(text: str, size: int = BOARD_SIZE) -> Coord:
    """Parse a label such as `B7` into a coordinate."""
    cleaned = text.strip().upper()
    if len(cleaned) < 2:
        raise ValueError(f"Malformed coordinate: {text!r}.")
    letter, digits = cleaned[0], cleaned[1:]
    col = COLUMN_LETTERS.find(letter)
    if col < 0 or not digits.isdigit():
        raise ValueError(f"Malformed coordinate: {text!r}.")
    row = int(digits) - 1
    if not (0 <= row < size and 0 <= col < size):
        raise ValueError(f"Coordinate out of range: {text!r}.")
    return Coord(row=row, col=col)


def cells_for_ship(bow: Coord, length: int, orientation: Orientation) -> list[Coord]:
    """Compute occupied cells for a ship anchored at `bow`."""
    result: list[Coord] = []
    for i in range(length):
        if orientation is Orientation.HORIZONTAL:
            result.append(Coord(bow.row, bow.col + i))
        else:
            result.append(Coord(bow.row + i, bow.col))
    return result
