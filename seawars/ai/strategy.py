"""Targeting policy interface for the automated opponent."""

from __future__ import annotations

from abc import ABC, abstractmethod

from seawars.core.board import Board
from seawars.core.models import Coord


class TargetingPolicy(ABC):
    """Chooses where the CPU fires next on the player's board."""

    @abstractmethod
    def select_target(self, board: Board) -> Coord:
        """Return an unfired coordinate on `board`."""
