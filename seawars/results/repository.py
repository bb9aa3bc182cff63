"""Persistence layer for finished-game records."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ResultRepository:
    """Append-only JSON-lines file of game result payloads."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def append(self, payload: dict[str, object]) -> None:
        """Append one payload as a single line."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(payload, ensure_ascii=False)
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")

    def load_payloads(self) -> list[dict[str, object]]:
        """Load payloads in file order, skipping lines that cannot be parsed."""
        if not self._path.exists():
            return []
        payloads: list[dict[str, object]] = []
        with self._path.open("r", encoding="utf-8") as handle:
            for line_no, raw_line in enumerate(handle, start=1):
                line = raw_line.strip()
                if not line:
                    continue
                try:
                    payload = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("result_line_unreadable path=%s line=%d", self._path, line_no)
                    continue
                if not isinstance(payload, dict):
                    logger.warning("result_line_not_object path=%s line=%d", self._path, line_no)
                    continue
                payloads.append(payload)
        return payloads
