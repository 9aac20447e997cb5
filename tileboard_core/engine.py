from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from .grid import Direction, Grid
from .moves import can_merge, choose_merge_rank, find_destination, traversal_cells
from .outcome import MoveOutcome, SettleOutcome, TileMove
from .ranks import RankTable, default_rank_table
from .rng import RandomRange
from .tile import Tile

logger = logging.getLogger(__name__)

Snapshot = Tuple[Tuple[Optional[int], ...], ...]


class TileBoard:
    """
    Sliding-tile merge board.

    A turn is two calls: move() slides and merges, then settle() (invoked by
    the host once its animations finish) unlocks merged tiles, spawns a new
    rank-0 tile and rescans for game over. Moves are rejected in between.
    """

    def __init__(
        self,
        width: int = 4,
        height: int = 4,
        rank_table: Optional[RankTable] = None,
        seed: Optional[int] = None,
        rng: Optional[RandomRange] = None,
    ) -> None:
        self.grid = Grid(width, height)
        self.rank_table = (rank_table or default_rank_table()).copy()
        self.rng = rng if rng is not None else RandomRange(seed)
        self.tiles: List[Tile] = []
        self.score = 0
        self.settling = False
        self.game_over = False

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def capacity(self) -> int:
        return self.grid.size

    @property
    def tile_count(self) -> int:
        return len(self.tiles)

    # ---------- setup ----------

    def reset(self) -> None:
        """Clears all tiles and starts a fresh game, rank bookkeeping included."""
        self.grid.clear()
        for tile in self.tiles:
            tile.cell = None
        self.tiles.clear()
        self.rank_table.reset()
        self.score = 0
        self.settling = False
        self.game_over = False

    def spawn_initial_tile(self) -> Tile:
        return self._create_tile()

    def place_tile(self, x: int, y: int, rank: int = 0) -> Tile:
        """Puts a tile of `rank` at (x, y). Used to set up specific positions."""
        cell = self.grid.get_cell(x, y)
        self.rank_table.check(rank)
        if cell.occupied:
            raise ValueError(f"cell ({x}, {y}) already holds a tile")
        tile = Tile(rank)
        tile.spawn(cell)
        self.tiles.append(tile)
        return tile

    def _create_tile(self) -> Tile:
        cell = self.grid.get_random_empty_cell(self.rng)
        tile = Tile(0)
        tile.spawn(cell)
        self.tiles.append(tile)
        logger.debug("spawned tile at %s", cell.coord)
        return tile

    # ---------- turn ----------

    def move(self, direction: Union[Direction, str]) -> MoveOutcome:
        if not isinstance(direction, Direction):
            direction = Direction.parse(direction)
        if self.settling or self.game_over:
            logger.info("move %s rejected (settling=%s, game_over=%s)", direction.name, self.settling, self.game_over)
            return MoveOutcome(accepted=False, changed=False, game_over=self.game_over)

        events: List[TileMove] = []
        gained = 0
        merges = 0
        for cell in traversal_cells(self.grid, direction):
            tile = cell.tile
            if tile is None:
                continue
            event = self._move_tile(tile, direction)
            if event is None:
                continue
            events.append(event)
            if event.merged:
                merges += 1
                gained += self.rank_table.value_of(event.rank)

        changed = bool(events)
        if changed:
            self.settling = True
            self.score += gained
        return MoveOutcome(
            accepted=True,
            changed=changed,
            score=gained,
            merges=merges,
            game_over=self.game_over,
            moves=tuple(events),
        )

    def _move_tile(self, tile: Tile, direction: Direction) -> Optional[TileMove]:
        assert tile.cell is not None
        src = tile.cell.coord
        landing, target = find_destination(self.grid, tile, direction)
        if target is not None:
            assert target.cell is not None
            return self._merge(tile, target, src)
        if landing is not None:
            tile.move_to(landing)
            return TileMove(src=src, dst=landing.coord, merged=False, rank=tile.rank)
        return None

    def _merge(self, a: Tile, b: Tile, src: Tuple[int, int]) -> TileMove:
        """Absorbs `a` into `b`; `b` survives with a freshly chosen rank."""
        assert b.cell is not None
        new_rank = choose_merge_rank(self.rank_table, b.rank, self.rng)
        self.tiles.remove(a)
        a.merge_into(b.cell)
        logger.debug("merged %s into %s: rank %d -> %d", src, b.cell.coord, b.rank, new_rank)
        b.rank = new_rank
        return TileMove(src=src, dst=b.cell.coord, merged=True, rank=new_rank)

    def settle(self) -> SettleOutcome:
        if not self.settling:
            self.game_over = self.is_game_over()
            return SettleOutcome(spawned=False, game_over=self.game_over)

        self.settling = False
        for tile in self.tiles:
            tile.locked = False

        spawned: Optional[Tile] = None
        if len(self.tiles) < self.capacity:
            spawned = self._create_tile()

        self.game_over = self.is_game_over()
        if self.game_over:
            logger.debug("game over with score %d", self.score)
        return SettleOutcome(
            spawned=spawned is not None,
            game_over=self.game_over,
            tile=spawned.coord if spawned is not None else None,
        )

    def is_game_over(self) -> bool:
        if len(self.tiles) != self.capacity:
            return False
        for tile in self.tiles:
            assert tile.cell is not None
            for neighbor in self.grid.neighbors(tile.cell):
                if can_merge(tile, neighbor.tile):
                    return False
        return True

    # ---------- views ----------

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        return self.grid.get_cell(x, y).tile

    def snapshot(self) -> Snapshot:
        """Rank index per cell, row by row; None for empty cells."""
        return tuple(
            tuple(self._rank_at(x, y) for x in range(self.width))
            for y in range(self.height)
        )

    def values(self) -> Tuple[Tuple[int, ...], ...]:
        """Display value per cell, row by row; 0 for empty cells."""
        return tuple(
            tuple(0 if r is None else self.rank_table.value_of(r) for r in row)
            for row in self.snapshot()
        )

    def _rank_at(self, x: int, y: int) -> Optional[int]:
        tile = self.grid.get_cell(x, y).tile
        return tile.rank if tile is not None else None

    def pretty(self) -> str:
        rows = self.values()
        cell_w = max(4, max(len(str(v)) for row in rows for v in row))
        lines = []
        for row in rows:
            lines.append(" ".join(("." if v == 0 else str(v)).rjust(cell_w) for v in row))
        return "\n".join(lines)


def new_board(
    width: int = 4,
    height: int = 4,
    rank_table: Optional[RankTable] = None,
    seed: Optional[int] = None,
) -> TileBoard:
    return TileBoard(width=width, height=height, rank_table=rank_table, seed=seed)

