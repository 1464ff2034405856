from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from watersort.core.board import Board, fits_geometry, is_uniform_full, unit_counts
from watersort.core.config import GameConfig
from watersort.core.levels import Level, LevelSet
from watersort.core.progress import GameStore

logger = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    ARMED = "armed"


@dataclass(frozen=True)
class MoveOutcome:
    """What a click did.

    ``accepted`` is False when the click was dropped (cooldown, bad index,
    nothing armed). ``poured`` is True only if a unit actually moved.
    """

    accepted: bool
    selected: Optional[int] = None
    poured: bool = False
    completed_bottle: Optional[int] = None
    won: bool = False


REJECTED = MoveOutcome(accepted=False)


class PuzzleSession:
    """Plays one level at a time from a level set.

    Input is two-phase: the first click arms a source bottle, the second
    pours one unit onto the target and disarms. After each pour attempt a
    short cooldown drops further clicks so a double click is not read as two
    moves.
    """

    def __init__(
        self,
        config: GameConfig,
        levels: LevelSet,
        store: Optional[GameStore] = None,
        level_index: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not 0 <= level_index < len(levels):
            raise IndexError(f"Level index {level_index} outside level set of {len(levels)}")
        self._config = config
        self._levels = levels
        self._store = store
        self._clock = clock
        self._level_index = level_index
        self._bottles: Board = levels.get(level_index).starting_board()
        self._phase = Phase.IDLE
        self._source: Optional[int] = None
        self._cooldown_until = 0.0

    @classmethod
    def restore(
        cls,
        config: GameConfig,
        levels: LevelSet,
        store: GameStore,
        clock: Callable[[], float] = time.monotonic,
    ) -> "PuzzleSession":
        """Resume from the store, falling back to a fresh level 0."""
        saved = store.load()
        if saved is None:
            return cls(config, levels, store, clock=clock)
        if saved.level_index >= len(levels):
            logger.warning("Saved level %d is beyond the level set; starting at level 1", saved.level_index + 1)
            return cls(config, levels, store, clock=clock)

        session = cls(config, levels, store, level_index=saved.level_index, clock=clock)
        if saved.bottles is not None:
            # pours only move units, so a real in-progress board keeps the level's colors
            if fits_geometry(saved.bottles, config.bottle_count, config.capacity) and unit_counts(
                saved.bottles
            ) == unit_counts(session.level.bottles):
                session._bottles = saved.bottles
            else:
                logger.warning("Saved board does not match level %d; restarting it", saved.level_index + 1)
        return session

    @property
    def level_index(self) -> int:
        return self._level_index

    @property
    def level(self) -> Level:
        return self._levels.get(self._level_index)

    @property
    def level_count(self) -> int:
        return len(self._levels)

    @property
    def bottles(self) -> Board:
        """Working board. Treat as read-only; mutate through the session."""
        return self._bottles

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def source(self) -> Optional[int]:
        """Armed source bottle, or None when idle."""
        return self._source

    def is_cooling_down(self) -> bool:
        return self._clock() < self._cooldown_until

    def click(self, index: int) -> MoveOutcome:
        """Route a bottle click: arm when idle, pour when armed."""
        if self._phase is Phase.IDLE:
            if not self.select_source(index):
                return REJECTED
            return MoveOutcome(accepted=True, selected=index)
        return self.pour_to(index)

    def select_source(self, index: int) -> bool:
        if self.is_cooling_down() or not self._in_range(index):
            return False
        self._source = index
        self._phase = Phase.ARMED
        return True

    def pour_to(self, target: int) -> MoveOutcome:
        """Complete an armed selection by pouring onto ``target``."""
        if self._phase is not Phase.ARMED or self._source is None:
            return REJECTED
        if self.is_cooling_down() or not self._in_range(target):
            return REJECTED

        source = self._source
        self._source = None
        self._phase = Phase.IDLE
        self._cooldown_until = self._clock() + self._config.cooldown_seconds

        poured = self.pour(source, target)
        completed = None
        if poured and target < self._config.filled_bottles and is_uniform_full(
            self._bottles[target], self._config.capacity
        ):
            completed = target

        won = poured and self.check_win()
        if won:
            logger.info("Level %d solved", self._level_index + 1)
            self._save()
        return MoveOutcome(accepted=True, poured=poured, completed_bottle=completed, won=won)

    def pour(self, from_index: int, to_index: int) -> bool:
        """Move one unit from ``from_index`` to ``to_index`` if the rules allow it.

        Returns False and leaves the board untouched when the bottles are the
        same, the source is empty, the destination is full, or the top colors
        differ.
        """
        if from_index == to_index:
            return False
        if not (self._in_range(from_index) and self._in_range(to_index)):
            return False
        source = self._bottles[from_index]
        destination = self._bottles[to_index]
        if not source or len(destination) >= self._config.capacity:
            return False
        if destination and destination[-1] != source[-1]:
            return False

        destination.append(source.pop())
        logger.debug("Poured %s from bottle %d to %d", destination[-1], from_index, to_index)
        return True

    def check_win(self) -> bool:
        """True when every filled-role bottle is full of one color. Spare bottles are ignored."""
        capacity = self._config.capacity
        return all(
            is_uniform_full(bottle, capacity) for bottle in self._bottles[: self._config.filled_bottles]
        )

    def reset(self) -> None:
        self._bottles = self.level.starting_board()
        self._source = None
        self._phase = Phase.IDLE

    def change_level(self, delta: int) -> bool:
        new_index = self._level_index + delta
        if not 0 <= new_index < len(self._levels):
            return False
        self._level_index = new_index
        self.reset()
        logger.info("Changed to level %d", new_index + 1)
        self._save()
        return True

    def advance(self) -> bool:
        """Go to the next level, only from a solved board."""
        if not self.check_win():
            return False
        return self.change_level(1)

    def save(self) -> None:
        """Persist the current level and board (e.g. on app exit)."""
        self._save()

    def _save(self) -> None:
        if self._store is not None:
            self._store.save(self._level_index, self._bottles)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._bottles)
