from __future__ import annotations

import random
from typing import List, MutableSequence, Optional, TypeVar

from watersort.core.board import Board
from watersort.core.config import GameConfig

T = TypeVar("T")


def fisher_yates(items: MutableSequence[T], rng: random.Random) -> MutableSequence[T]:
    """Shuffle ``items`` in place, walking from the last index down to 1."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


class LevelGenerator:
    """Builds shuffled starting boards.

    Every palette color contributes ``capacity`` units; the shuffled units are
    dealt in order into the filled bottles and the spare bottles start empty.
    No solvability check is made, so a board may come out already solved or hard.
    """

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None) -> None:
        self._config = config
        self._rng = rng if rng is not None else random.Random()

    @property
    def config(self) -> GameConfig:
        return self._config

    def generate(self) -> Board:
        capacity = self._config.capacity
        units: List[str] = [color for color in self._config.palette for _ in range(capacity)]
        fisher_yates(units, self._rng)

        board: Board = [
            units[i * capacity:(i + 1) * capacity] for i in range(self._config.filled_bottles)
        ]
        board.extend([] for _ in range(self._config.empty_bottles))
        return board
