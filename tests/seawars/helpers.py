from __future__ import annotations

from seawars.ai.strategy import TargetingPolicy
from seawars.app.ports import BattleView, Notice
from seawars.core.board import Board, create_empty_board
from seawars.core.fleet import Fleet
from seawars.core.models import Coord, Ship, Side
from seawars.core.rules import Battle


def make_board(*ships: list[Coord], size: int = 10) -> tuple[Board, Fleet]:
    """Build a board/fleet pair with ship ids assigned 1, 2, 3 ... in order."""
    board = create_empty_board(size)
    fleet = Fleet()
    for ship_id, cells in enumerate(ships, start=1):
        board = board.with_ship(ship_id, cells)
        fleet = fleet.with_ship(Ship(ship_id=ship_id, length=len(cells)))
    return board, fleet


def make_battle() -> Battle:
    """Small fixed battle: one two-cell player ship, two CPU ships."""
    player_board, player_fleet = make_board([Coord(0, 0), Coord(0, 1)])
    cpu_board, cpu_fleet = make_board([Coord(0, 0)], [Coord(5, 5), Coord(5, 6)])
    return Battle(
        player_board=player_board,
        player_fleet=player_fleet,
        cpu_board=cpu_board,
        cpu_fleet=cpu_fleet,
    )


class RecordingSink:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[dict[str, object]] = []
        self._error = error

    def record_result(
        self,
        *,
        winner: Side,
        player_shots: int,
        cpu_shots: int,
        duration_seconds: int,
        player_name: str,
    ) -> None:
        self.calls.append(
            {
                "winner": winner,
                "player_shots": player_shots,
                "cpu_shots": cpu_shots,
                "duration_seconds": duration_seconds,
                "player_name": player_name,
            }
        )
        if self._error is not None:
            raise self._error


class RecordingPresentation:
    def __init__(self) -> None:
        self.views: list[BattleView] = []
        self.notices: list[Notice] = []

    def render(self, view: BattleView) -> None:
        self.views.append(view)

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def titles(self) -> list[str]:
        return [notice.title for notice in self.notices]


class ScriptedPolicy(TargetingPolicy):
    def __init__(self, shots: list[Coord]) -> None:
        self._shots = list(shots)
        self.boards: list[Board] = []

    def select_target(self, board: Board) -> Coord:
        self.boards.append(board)
        return self._shots.pop(0)


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

