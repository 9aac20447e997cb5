from __future__ import annotations

from typing import Optional

from .grid import Cell, Coord


class Tile:
    """
    A numbered tile. `rank` is an index into the board's RankTable.

    The tile and the cell holding it always point at each other; the methods
    below are the only places either side of that link is rewritten.
    """

    __slots__ = ('rank', 'cell', 'locked')

    def __init__(self, rank: int = 0) -> None:
        self.rank = rank
        self.cell: Optional[Cell] = None
        self.locked = False

    @property
    def coord(self) -> Optional[Coord]:
        return self.cell.coord if self.cell is not None else None

    def spawn(self, cell: Cell) -> None:
        if cell.tile is not None:
            raise ValueError(f"cell {cell.coord} already holds a tile")
        self.cell = cell
        cell.tile = self

    def move_to(self, cell: Cell) -> None:
        if self.cell is not None:
            self.cell.tile = None
        self.cell = cell
        cell.tile = self

    def merge_into(self, cell: Cell) -> None:
        """Detach from the grid and lock the tile that absorbs this one."""
        if self.cell is not None:
            self.cell.tile = None
        self.cell = None
        if cell.tile is not None:
            cell.tile.locked = True

    def __repr__(self) -> str:
        return f"Tile(rank={self.rank}, at={self.coord}, locked={self.locked})"
