"""Domain exceptions."""

from __future__ import annotations


class SeaWarsError(Exception):
    """Base class for game engine errors."""


class PlacementError(SeaWarsError):
    """Fleet could not be placed within the attempt budget."""


class NoTargetsError(SeaWarsError):
    """Targeting policy was asked for a shot on a fully fired board."""
