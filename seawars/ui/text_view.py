"""Plain-text presentation surface."""

from __future__ import annotations

import sys
from typing import TextIO

from seawars.app.ports import BattleView, BoardView, Notice
from seawars.core.models import COLUMN_LETTERS, Coord, Outcome
from seawars.core.rules import PlayerTurn
from seawars.results.schema import GameResult
from seawars.results.service import ResultSummary, format_duration

SHIP_HIT = "X"
WATER_HIT = "o"
SHIP = "#"
UNKNOWN = "."

_OUTCOME_TEXT = {
    Outcome.IN_PROGRESS: "",
    Outcome.PLAYER_WON: "You won!",
    Outcome.CPU_WON: "The enemy won.",
}


def render_board(view: BoardView) -> list[str]:
    """Render one board as text lines with column letters and row numbers."""
    board = view.board
    header = "   " + " ".join(COLUMN_LETTERS[: board.size])
    lines = [header]
    for row in range(board.size):
        symbols: list[str] = []
        for col in range(board.size):
            cell = board.cell(Coord(row, col))
            if cell.fired and cell.occupied:
                symbols.append(SHIP_HIT)
            elif cell.fired:
                symbols.append(WATER_HIT)
            elif cell.occupied and view.reveal_ships:
                symbols.append(SHIP)
            else:
                symbols.append(UNKNOWN)
        lines.append(f"{row + 1:>2} " + " ".join(symbols))
    return lines


def render_battle(view: BattleView) -> str:
    """Render both boards side by side with a status line."""
    left = ["Your waters", *render_board(view.player)]
    right = ["Enemy waters", *render_board(view.cpu)]
    width = max(len(line) for line in left) + 4
    rows = [f"{a:<{width}}{b}" for a, b in zip(left, right)]
    if view.outcome is Outcome.IN_PROGRESS:
        status = "Your turn" if isinstance(view.turn, PlayerTurn) else "Enemy turn"
    else:
        status = _OUTCOME_TEXT[view.outcome]
    rows.append(
        f"{status} | afloat: yours {view.player_ships_remaining}, "
        f"enemy {view.cpu_ships_remaining} | shots: {view.player_shots}/{view.cpu_shots}"
    )
    return "\n".join(rows)


def render_leaderboard(summary: ResultSummary, results: list[GameResult]) -> str:
    """Render aggregate stats followed by recent games."""
    lines = [
        f"Games: {summary.total_games}  Player wins: {summary.player_wins}  "
        f"Computer wins: {summary.computer_wins}  Avg shots: {summary.average_player_shots}"
    ]
    for result in results:
        lines.append(
            f"{result.created_at:%Y-%m-%d %H:%M}  {result.player_name} vs {result.opponent_name}  "
            f"winner={result.winner}  shots={result.player_shots}/{result.computer_shots}  "
            f"time={format_duration(result.duration_seconds)}"
        )
    return "\n".join(lines)


class TextPresentation:
    """Writes battle snapshots and notices to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout

    def render(self, view: BattleView) -> None:
        self._stream.write(render_battle(view) + "\n")
        self._stream.flush()

    def notify(self, notice: Notice) -> None:
        self._stream.write(f"[{notice.kind.value.lower()}] {notice.title}: {notice.message}\n")
        self._stream.flush()
