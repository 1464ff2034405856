from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from itertools import takewhile
from typing import Iterable, List, Optional, Sequence, Tuple

from watersort.core.board import (
    Board,
    Color,
    clone_board,
    fits_geometry,
    freeze_board,
    is_starting_board,
)
from watersort.core.config import GameConfig
from watersort.core.generator import LevelGenerator
from watersort.core.progress import GameStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Level:
    index: int
    bottles: Tuple[Tuple[Color, ...], ...]

    def starting_board(self) -> Board:
        """Fresh mutable copy of this level's board."""
        return clone_board(self.bottles)


class LevelSet:
    """Append-only list of levels, generated on demand."""

    def __init__(
        self,
        generator: LevelGenerator,
        boards: Optional[Iterable[Sequence[Sequence[Color]]]] = None,
    ) -> None:
        self._generator = generator
        self._levels: List[Level] = []
        if boards is not None:
            self._adopt(boards)

    def __len__(self) -> int:
        return len(self._levels)

    def all(self) -> List[Level]:
        return list(self._levels)

    def get(self, index: int) -> Level:
        if index < 0:
            raise IndexError(f"Level index out of range: {index}")
        return self._levels[index]

    def ensure(self, count: int) -> int:
        """Generate levels until at least ``count`` exist; return how many were added."""
        added = 0
        while len(self._levels) < count:
            board = self._generator.generate()
            self._levels.append(Level(index=len(self._levels), bottles=freeze_board(board)))
            added += 1
        if added:
            logger.debug("Generated %d new levels (total %d)", added, len(self._levels))
        return added

    def boards(self) -> List[Board]:
        """Starting boards as plain lists, ready for JSON."""
        return [level.starting_board() for level in self._levels]

    def _adopt(self, boards: Iterable[Sequence[Sequence[Color]]]) -> None:
        config = self._generator.config
        for board in boards:
            if not fits_geometry(board, config.bottle_count, config.capacity):
                logger.warning(
                    "Discarding stored levels from index %d: board does not fit %d bottles of %d",
                    len(self._levels),
                    config.bottle_count,
                    config.capacity,
                )
                break
            self._levels.append(Level(index=len(self._levels), bottles=freeze_board(board)))


def build_level_set(config: GameConfig, store: GameStore, rng: Optional[random.Random] = None) -> LevelSet:
    """Reuse stored levels that are fresh deals for ``config`` and top the set up to ``level_count``.

    Stored levels are kept up to the first one dealt for another layout or
    palette; that one and everything after it are generated again.
    """
    stored = store.load_levels()
    usable = list(takewhile(lambda board: _is_fresh_deal(board, config), stored))
    if len(usable) < len(stored):
        logger.warning(
            "Discarding %d stored levels from index %d: not dealt for the current config",
            len(stored) - len(usable),
            len(usable),
        )
    levels = LevelSet(LevelGenerator(config, rng), boards=usable)
    added = levels.ensure(config.level_count)
    if added or len(usable) < len(stored):
        store.save_levels(levels.boards())
    logger.info("Level set ready: %d levels (%d new)", len(levels), added)
    return levels


def _is_fresh_deal(board: Board, config: GameConfig) -> bool:
    return is_starting_board(
        board, config.palette, config.capacity, config.filled_bottles, config.empty_bottles
    )
