"""Unified SeaWars app-data paths."""

from __future__ import annotations

import os
import sys
from pathlib import Path

RESULTS_FILE_NAME = "game_results.jsonl"


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for runtime state."""
    configured = os.getenv("SEAWARS_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_game_root() / candidate
    return resolve_game_root() / "appdata"


def resolve_game_root() -> Path:
    """Resolve the runtime game root directory."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def resolve_logs_dir() -> Path:
    """Resolve logs directory; SEAWARS_LOG_DIR overrides the app-data default."""
    configured = os.getenv("SEAWARS_LOG_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        return candidate if candidate.is_absolute() else resolve_app_data_root() / candidate
    return resolve_app_data_root() / "logs"


def resolve_results_file() -> Path:
    """Resolve the finished-games file; SEAWARS_RESULTS_FILE overrides it."""
    configured = os.getenv("SEAWARS_RESULTS_FILE", "").strip()
    if configured:
        candidate = Path(configured)
        return candidate if candidate.is_absolute() else resolve_app_data_root() / candidate
    return resolve_app_data_root() / "results" / RESULTS_FILE_NAME


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create app-data directories and return resolved paths."""
    root = resolve_app_data_root()
    logs = resolve_logs_dir()
    results = resolve_results_file()
    root.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)
    results.parent.mkdir(parents=True, exist_ok=True)
    return {"root": root, "logs": logs, "results": results}
