from __future__ import annotations

from typing import Iterator, Optional, Tuple

from .grid import Cell, Direction, Grid
from .ranks import RankTable
from .rng import RandomRange
from .tile import Tile

PROMOTION_ROLL_MAX = 100  # promotion draws are uniform in [1, PROMOTION_ROLL_MAX]
SATURATED_APPEAR = 100


def can_merge(a: Tile, b: Optional[Tile]) -> bool:
    """True iff `a` may merge into `b`: same rank and `b` not already merged this turn."""
    return b is not None and a.rank == b.rank and not b.locked


def traversal_cells(grid: Grid, direction: Direction) -> Iterator[Cell]:
    """Yields cells in the order a move in `direction` must process them."""
    start_x, inc_x, start_y, inc_y = direction.traversal(grid.width, grid.height)
    x = start_x
    while 0 <= x < grid.width:
        y = start_y
        while 0 <= y < grid.height:
            yield grid.get_cell(x, y)
            y += inc_y
        x += inc_x


def find_destination(grid: Grid, tile: Tile, direction: Direction) -> Tuple[Optional[Cell], Optional[Tile]]:
    """
    Walks from the tile's cell in `direction`.

    Returns (landing, target): `target` is the tile to merge into if the walk
    ends on a merge-eligible tile, otherwise None; `landing` is the farthest
    empty cell passed over, or None if the tile cannot slide at all.
    """
    assert tile.cell is not None
    landing: Optional[Cell] = None
    adjacent = grid.get_adjacent_cell(tile.cell, direction)
    while adjacent is not None:
        if adjacent.occupied:
            if can_merge(tile, adjacent.tile):
                return landing, adjacent.tile
            break
        landing = adjacent
        adjacent = grid.get_adjacent_cell(adjacent, direction)
    return landing, None


def choose_merge_rank(table: RankTable, rank: int, rng: RandomRange) -> int:
    """
    Picks the rank of a tile produced by merging two tiles of `rank`.

    A draw in [1, 100] at or under the next rank's appear weight plus misses
    promotes, and pins that rank's weight at 100. Otherwise the miss counter
    grows and the result falls to a random rank below `rank` (0 when `rank`
    is already 0). Merging at the terminal rank keeps the terminal rank.
    """
    table.check(rank)
    if table.is_terminal(rank):
        return rank
    next_rank = rank + 1
    nxt = table[next_rank]
    draw = rng.next_int(1, PROMOTION_ROLL_MAX + 1)
    if draw <= nxt.threshold:
        nxt.percent_appear = SATURATED_APPEAR
        return next_rank
    nxt.percent_miss_count += 1
    return rng.next_int(0, rank)
