from __future__ import annotations

# Facade module that re-exports the tileboard core API.
# The Flask app and tests import from here; single-responsibility modules
# live under tileboard_core/*.

from tileboard_core.errors import (
    TileBoardError,
    OutOfRangeError,
    BoardFullError,
    InvalidRankError,
)
from tileboard_core.grid import Cell, Coord, Direction, Grid
from tileboard_core.ranks import DEFAULT_VALUES, RankState, RankTable, default_rank_table
from tileboard_core.tile import Tile
from tileboard_core.rng import RandomRange
from tileboard_core.moves import (
    can_merge,
    traversal_cells,
    find_destination,
    choose_merge_rank,
)
from tileboard_core.outcome import MoveOutcome, SettleOutcome, TileMove
from tileboard_core.engine import TileBoard, new_board

__all__ = [
    'TileBoardError',
    'OutOfRangeError',
    'BoardFullError',
    'InvalidRankError',
    'Cell',
    'Coord',
    'Direction',
    'Grid',
    'DEFAULT_VALUES',
    'RankState',
    'RankTable',
    'default_rank_table',
    'Tile',
    'RandomRange',
    'can_merge',
    'traversal_cells',
    'find_destination',
    'choose_merge_rank',
    'MoveOutcome',
    'SettleOutcome',
    'TileMove',
    'TileBoard',
    'new_board',
]
