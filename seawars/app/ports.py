"""Collaborator interfaces consumed by the game session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from seawars.core.board import Board
from seawars.core.models import Coord, Outcome, Side
from seawars.core.rules import TurnState


class NoticeKind(StrEnum):
    """Notification severity."""

    INFO = "INFO"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True, slots=True)
class Notice:
    """Short non-blocking message for the user."""

    kind: NoticeKind
    title: str
    message: str


@dataclass(frozen=True, slots=True)
class BoardView:
    """Board snapshot plus whether its ships may be drawn."""

    owner: Side
    board: Board
    reveal_ships: bool


@dataclass(frozen=True, slots=True)
class BattleView:
    """Everything a presentation needs to draw the current game."""

    player: BoardView
    cpu: BoardView
    turn: TurnState
    outcome: Outcome
    player_ships_remaining: int
    cpu_ships_remaining: int
    player_shots: int
    cpu_shots: int
    targetable: frozenset[Coord]


class ResultSink(Protocol):
    """Receives each finished game exactly once."""

    def record_result(
        self,
        *,
        winner: Side,
        player_shots: int,
        cpu_shots: int,
        duration_seconds: int,
        player_name: str,
    ) -> object: ...


class PresentationSurface(Protocol):
    """Draws battle snapshots and shows notices."""

    def render(self, view: BattleView) -> None: ...

    def notify(self, notice: Notice) -> None: ...


class NullPresentation:
    """Presentation that discards everything."""

    def render(self, view: BattleView) -> None:
        _ = view

    def notify(self, notice: Notice) -> None:
        _ = notice
