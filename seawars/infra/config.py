"""Application configuration and env loading."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PLAYER_NAME = "Player"
DEFAULT_CPU_SHOT_DELAY = 0.7

logger = logging.getLogger(__name__)


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files with optional local overrides.

    Later files win. Default order:
    1) appdata/config/.env
    2) appdata/config/.env.local
    3) .env
    4) .env.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env",
            "appdata/config/.env.local",
            ".env",
            ".env.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Tunables for a game session."""

    player_name: str = DEFAULT_PLAYER_NAME
    cpu_shot_delay: float = DEFAULT_CPU_SHOT_DELAY
    seed: int | None = None

    @classmethod
    def from_env(cls) -> GameSettings:
        """Read settings from SEAWARS_* variables, falling back on bad values."""
        player_name = os.getenv("SEAWARS_PLAYER_NAME", "").strip() or DEFAULT_PLAYER_NAME
        return cls(
            player_name=player_name,
            cpu_shot_delay=_float_env("SEAWARS_CPU_SHOT_DELAY", DEFAULT_CPU_SHOT_DELAY),
            seed=_optional_int_env("SEAWARS_SEED"),
        )


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("invalid_env name=%s value=%r", name, raw)
        return default
    if value < 0.0:
        logger.warning("invalid_env name=%s value=%r", name, raw)
        return default
    return value


def _optional_int_env(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid_env name=%s value=%r", name, raw)
        return None


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[2]
    return project_root / path
