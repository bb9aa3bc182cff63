"""Finished-game record schema and validation helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from seawars.core.models import Side

SCHEMA_VERSION = 1
DEFAULT_OPPONENT_NAME = "Computer"
WINNER_PLAYER = "player"
WINNER_COMPUTER = "computer"


@dataclass(frozen=True, slots=True)
class GameResult:
    """One finished game."""

    player_name: str
    winner: str
    player_shots: int
    computer_shots: int
    duration_seconds: int | None
    created_at: datetime
    opponent_name: str = DEFAULT_OPPONENT_NAME

    @property
    def player_won(self) -> bool:
        return self.winner == WINNER_PLAYER


def winner_label(side: Side) -> str:
    """Map a winning side to its stored label."""
    return WINNER_PLAYER if side is Side.PLAYER else WINNER_COMPUTER


def result_to_payload(result: GameResult) -> dict[str, object]:
    """Convert a result to a JSON-serializable payload."""
    return {
        "version": SCHEMA_VERSION,
        "player_name": result.player_name,
        "opponent_name": result.opponent_name,
        "winner": result.winner,
        "game_duration_seconds": result.duration_seconds,
        "player_shots": result.player_shots,
        "computer_shots": result.computer_shots,
        "created_at": result.created_at.isoformat(),
    }


def payload_to_result(payload: dict[str, object]) -> GameResult:
    """Convert a loaded payload into a result record."""
    raw_version = payload.get("version", -1)
    if not isinstance(raw_version, (int, str)):
        raise ValueError("Result version must be int-compatible.")
    if int(raw_version) != SCHEMA_VERSION:
        raise ValueError("Unsupported result version.")

    player_name = str(payload.get("player_name", "")).strip()
    if not player_name:
        raise ValueError("Result player_name is required.")
    opponent_name = str(payload.get("opponent_name", DEFAULT_OPPONENT_NAME)).strip()
    winner = payload.get("winner")
    if winner not in (WINNER_PLAYER, WINNER_COMPUTER):
        raise ValueError(f"Result winner must be '{WINNER_PLAYER}' or '{WINNER_COMPUTER}'.")

    player_shots = _non_negative_int(payload.get("player_shots", 0), "player_shots")
    computer_shots = _non_negative_int(payload.get("computer_shots", 0), "computer_shots")
    raw_duration = payload.get("game_duration_seconds")
    duration = None if raw_duration is None else _non_negative_int(raw_duration, "duration")

    raw_created = payload.get("created_at")
    if not isinstance(raw_created, str):
        raise ValueError("Result created_at must be an ISO timestamp.")
    try:
        created_at = datetime.fromisoformat(raw_created)
    except ValueError as exc:
        raise ValueError("Result created_at must be an ISO timestamp.") from exc
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)

    return GameResult(
        player_name=player_name,
        opponent_name=opponent_name or DEFAULT_OPPONENT_NAME,
        winner=str(winner),
        player_shots=player_shots,
        computer_shots=computer_shots,
        duration_seconds=duration,
        created_at=created_at,
    )


def _non_negative_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"Result {field_name} must be int-compatible.")
    try:
        number = int(value)
    except ValueError as exc:
        raise ValueError(f"Result {field_name} must be int-compatible.") from exc
    if number < 0:
        raise ValueError(f"Result {field_name} cannot be negative.")
    return number
