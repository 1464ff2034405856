"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from watersort.core.board import is_uniform_full
from watersort.core.config import GameConfig
from watersort.core.session import PuzzleSession


@dataclass
class BottleState:
    """What a bottle widget paints: units bottom-to-top plus highlight flags."""

    index: int
    units: List[str] = field(default_factory=list)
    capacity: int = 4
    selected: bool = False
    complete: bool = False


def build_bottle_states(session: PuzzleSession, config: GameConfig) -> List[BottleState]:
    """View state per bottle; only filled-role bottles are ever marked complete."""
    capacity = config.capacity
    return [
        BottleState(
            index=i,
            units=list(bottle),
            capacity=capacity,
            selected=session.source == i,
            complete=i < config.filled_bottles and is_uniform_full(bottle, capacity),
        )
        for i, bottle in enumerate(session.bottles)
    ]
