"""Memoryless uniform-random targeting."""

from __future__ import annotations

import random

from seawars.ai.strategy import TargetingPolicy
from seawars.core.board import Board
from seawars.core.errors import NoTargetsError
from seawars.core.models import Coord


class RandomTargetPolicy(TargetingPolicy):
    """Pick any unfired cell with equal probability; never chases hits."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def select_target(self, board: Board) -> Coord:
        candidates = board.unfired_cells()
        if not candidates:
            raise NoTargetsError("No unfired cells remain on the target board.")
        return self._rng.choice(candidates)
