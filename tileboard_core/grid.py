from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .errors import BoardFullError, OutOfRangeError

if TYPE_CHECKING:
    from .rng import RandomRange
    from .tile import Tile

Coord = Tuple[int, int]  # (x, y); y grows downward


class Direction(Enum):
    """The four move directions, each carrying its unit vector in grid coordinates."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def traversal(self, width: int, height: int) -> Tuple[int, int, int, int]:
        """
        Returns (start_x, inc_x, start_y, inc_y) for iterating cells during a move.

        Cells nearest the destination edge come first so a tile always meets
        tiles that have already settled. The edge row/column itself is skipped
        since nothing there can advance.
        """
        if self is Direction.UP:
            return 0, 1, 1, 1
        if self is Direction.LEFT:
            return 1, 1, 0, 1
        if self is Direction.DOWN:
            return 0, 1, height - 2, -1
        return width - 2, -1, 0, 1

    @classmethod
    def parse(cls, text: str) -> 'Direction':
        """Parses a direction name or a wasd key."""
        key = str(text).strip().lower()
        found = _ALIASES.get(key)
        if found is None:
            raise ValueError(f"unknown direction: {text!r}")
        return found


_ALIASES = {
    'up': Direction.UP, 'w': Direction.UP,
    'down': Direction.DOWN, 's': Direction.DOWN,
    'left': Direction.LEFT, 'a': Direction.LEFT,
    'right': Direction.RIGHT, 'd': Direction.RIGHT,
}


class Cell:
    """A single grid slot. Occupancy is derived from the tile reference."""

    __slots__ = ('x', 'y', 'tile')

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        self.tile: Optional['Tile'] = None

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)

    @property
    def occupied(self) -> bool:
        return self.tile is not None

    @property
    def empty(self) -> bool:
        return self.tile is None

    def __repr__(self) -> str:
        return f"Cell({self.x}, {self.y}, occupied={self.occupied})"


class Grid:
    """Fixed-size 2D array of cells, stored row-major."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[Cell] = [Cell(x, y) for y in range(height) for x in range(width)]

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise OutOfRangeError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.cells[y * self.width + x]

    def get_adjacent_cell(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        """Neighbor of `cell` one step in `direction`, or None past the edge."""
        x = cell.x + direction.dx
        y = cell.y + direction.dy
        if not self.in_bounds(x, y):
            return None
        return self.cells[y * self.width + x]

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        """Orthogonal neighbors that exist on the grid."""
        for direction in Direction:
            adjacent = self.get_adjacent_cell(cell, direction)
            if adjacent is not None:
                yield adjacent

    def empty_cells(self) -> List[Cell]:
        return [cell for cell in self.cells if cell.empty]

    def occupied_cells(self) -> List[Cell]:
        return [cell for cell in self.cells if cell.occupied]

    def first_empty_cell(self) -> Optional[Cell]:
        """First unoccupied cell in row-major scan order."""
        for cell in self.cells:
            if cell.empty:
                return cell
        return None

    def get_random_empty_cell(self, rng: 'RandomRange') -> Cell:
        empty = self.empty_cells()
        if not empty:
            raise BoardFullError(f"no empty cell in {self.width}x{self.height} grid")
        return empty[rng.next_int(0, len(empty))]

    def clear(self) -> None:
        for cell in self.cells:
            cell.tile = None
