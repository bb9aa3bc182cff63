"""Result recording and leaderboard statistics."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from seawars.core.models import Side
from seawars.results.repository import ResultRepository
from seawars.results.schema import (
    GameResult,
    payload_to_result,
    result_to_payload,
    winner_label,
)

RECENT_LIMIT = 20

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResultSummary:
    """Aggregate statistics over recent games."""

    total_games: int
    player_wins: int
    computer_wins: int
    average_player_shots: int


class ResultService:
    """Records finished games and reads them back for the leaderboard."""

    def __init__(
        self,
        repository: ResultRepository,
        *,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._now = now or (lambda: datetime.now(UTC))

    def record_result(
        self,
        *,
        winner: Side,
        player_shots: int,
        cpu_shots: int,
        duration_seconds: int,
        player_name: str,
    ) -> GameResult:
        """Validate and persist one finished game."""
        result = GameResult(
            player_name=player_name.strip(),
            winner=winner_label(winner),
            player_shots=player_shots,
            computer_shots=cpu_shots,
            duration_seconds=duration_seconds,
            created_at=self._now(),
        )
        payload = result_to_payload(result)
        # Records the schema would not load back are rejected here.
        payload_to_result(payload)
        self._repository.append(payload)
        logger.info(
            "result_recorded winner=%s player_shots=%d cpu_shots=%d duration=%d",
            result.winner,
            player_shots,
            cpu_shots,
            duration_seconds,
        )
        return result

    def recent(self, limit: int = RECENT_LIMIT) -> list[GameResult]:
        """Return up to `limit` results, newest first."""
        results: list[GameResult] = []
        for payload in self._repository.load_payloads():
            try:
                results.append(payload_to_result(payload))
            except ValueError as exc:
                logger.warning("result_payload_invalid reason=%s", exc)
        results.sort(key=lambda item: item.created_at, reverse=True)
        return results[:limit]

    def summary(self, limit: int = RECENT_LIMIT) -> ResultSummary:
        """Summarize the most recent games."""
        results = self.recent(limit)
        if not results:
            return ResultSummary(0, 0, 0, 0)
        player_wins = sum(1 for item in results if item.player_won)
        total_shots = sum(item.player_shots for item in results)
        return ResultSummary(
            total_games=len(results),
            player_wins=player_wins,
            computer_wins=len(results) - player_wins,
            average_player_shots=math.floor(total_shots / len(results) + 0.5),
        )


def format_duration(seconds: int | None) -> str:
    """Format seconds as `m:ss`; missing or zero durations read `N/A`."""
    if not seconds:
        return "N/A"
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes}:{remaining:02d}"
