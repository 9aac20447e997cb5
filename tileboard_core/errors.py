from __future__ import annotations


class TileBoardError(Exception):
    """Base class for all board precondition violations."""


class OutOfRangeError(TileBoardError, IndexError):
    """Raised when cell coordinates fall outside the grid."""


class BoardFullError(TileBoardError, RuntimeError):
    """Raised when an empty cell is requested from a grid with no free cells."""


class InvalidRankError(TileBoardError, ValueError):
    """Raised when a rank index does not exist in the rank table."""
