from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from .errors import InvalidRankError

DEFAULT_VALUES = (2, 4, 8, 16, 32, 64, 128, 256, 512, 1024, 2048)


@dataclass
class RankState:
    """One rung of the promotion ladder plus its merge-outcome bookkeeping."""
    value: int
    percent_appear: int
    percent_miss_count: int = 0
    initial_percent_appear: Optional[int] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.initial_percent_appear is None:
            self.initial_percent_appear = self.percent_appear

    @property
    def threshold(self) -> int:
        """Upper bound (inclusive) of a 1..100 draw that promotes into this rank."""
        return self.percent_appear + self.percent_miss_count

    def reset(self) -> None:
        assert self.initial_percent_appear is not None
        self.percent_appear = self.initial_percent_appear
        self.percent_miss_count = 0


class RankTable:
    """
    Ordered rank ladder. Index 0 is the spawn rank; the last index is terminal.

    The bookkeeping on each RankState is mutable and owned by whoever holds the
    table, so each board takes its own copy().
    """

    def __init__(self, states: Iterable[RankState]) -> None:
        self.states: List[RankState] = list(states)
        if not self.states:
            raise ValueError("rank table needs at least one rank")

    @classmethod
    def from_values(cls, values: Sequence[int], percent_appear: Optional[Sequence[int]] = None) -> 'RankTable':
        if percent_appear is None:
            percent_appear = [max(10, 100 - 10 * i) for i in range(len(values))]
        if len(percent_appear) != len(values):
            raise ValueError("percent_appear must match values in length")
        return cls(RankState(value=int(v), percent_appear=int(p)) for v, p in zip(values, percent_appear))

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[RankState]:
        return iter(self.states)

    def __getitem__(self, index: int) -> RankState:
        self.check(index)
        return self.states[index]

    @property
    def max_index(self) -> int:
        return len(self.states) - 1

    def is_valid(self, index: int) -> bool:
        return isinstance(index, int) and 0 <= index < len(self.states)

    def check(self, index: int) -> None:
        if not self.is_valid(index):
            raise InvalidRankError(f"rank {index!r} outside table of {len(self.states)} ranks")

    def is_terminal(self, index: int) -> bool:
        return index == self.max_index

    def index_of(self, value: int) -> int:
        """Rank index for a display value (linear scan; tables are small)."""
        for i, state in enumerate(self.states):
            if state.value == value:
                return i
        raise InvalidRankError(f"no rank with value {value!r}")

    def value_of(self, index: int) -> int:
        return self[index].value

    def reset(self) -> None:
        for state in self.states:
            state.reset()

    def copy(self) -> 'RankTable':
        return RankTable(copy.deepcopy(self.states))


def default_rank_table() -> RankTable:
    """The classic 2..2048 ladder with tapering appearance weights."""
    return RankTable.from_values(DEFAULT_VALUES)
