"""
errors.py - Exception types raised by the jigsaw and cup-game solvers
"""
from typing import Iterable, List, Optional


class PuzzleError(Exception):
    """Base class for every failure reported by this package."""


class TileParseError(PuzzleError, ValueError):
    """Tile text that is not a square bitmap of '#' and '.' under a 'Tile N:' header."""


class SolverStallError(PuzzleError, RuntimeError):
    """A full placement pass added nothing while tiles remain unplaced."""

    def __init__(self, unplaced: Iterable[int], message: Optional[str] = None):
        self.unplaced: List[int] = sorted(unplaced)
        if message is None:
            message = (
                f"No exposed edge accepts any of the {len(self.unplaced)} "
                f"remaining tile(s): {self.unplaced}"
            )
        super().__init__(message)


class PlacementConflictError(SolverStallError):
    """A placement would overlap another placement or repeat a placed tile."""


class NoSeaMonstersError(PuzzleError, LookupError):
    """No orientation of the stitched image contains the sea-monster stencil."""


class CupSeedError(PuzzleError, ValueError):
    """Cup seed or ring length outside the game's domain."""


class ConfigurationError(PuzzleError, ValueError):
    """Solver settings or input files the solvers cannot start from."""
