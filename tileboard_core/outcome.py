from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .grid import Coord


@dataclass(frozen=True)
class TileMove:
    """One tile's displacement during a move, for host-side animation."""
    src: Coord
    dst: Coord
    merged: bool
    rank: int  # rank at dst after the move

    def to_json(self) -> Dict[str, Any]:
        return {"from": list(self.src), "to": list(self.dst), "merged": self.merged, "rank": self.rank}


@dataclass(frozen=True)
class MoveOutcome:
    accepted: bool
    changed: bool
    score: int = 0
    merges: int = 0
    game_over: bool = False
    moves: Tuple[TileMove, ...] = ()

    def to_json(self) -> Dict[str, Any]:
        return {
            "accepted": self.accepted,
            "changed": self.changed,
            "score": self.score,
            "merges": self.merges,
            "gameOver": self.game_over,
            "moves": [m.to_json() for m in self.moves],
        }


@dataclass(frozen=True)
class SettleOutcome:
    spawned: bool
    game_over: bool
    tile: Optional[Coord] = None  # where the new tile landed

    def to_json(self) -> Dict[str, Any]:
        return {
            "spawned": self.spawned,
            "gameOver": self.game_over,
            "tile": list(self.tile) if self.tile is not None else None,
        }
