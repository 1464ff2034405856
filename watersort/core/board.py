"""Board types and pure helpers shared by the generator, levels and session."""

from __future__ import annotations

from collections import Counter
from typing import Any, List, Sequence

Color = str
Bottle = List[Color]
Board = List[Bottle]


def clone_board(board: Sequence[Sequence[Color]]) -> Board:
    """Deep copy into fresh lists; accepts tuples as stored by levels."""
    return [list(bottle) for bottle in board]


def freeze_board(board: Sequence[Sequence[Color]]) -> tuple[tuple[Color, ...], ...]:
    return tuple(tuple(bottle) for bottle in board)


def unit_counts(board: Sequence[Sequence[Color]]) -> Counter:
    """Multiset of colors across the whole board."""
    counts: Counter = Counter()
    for bottle in board:
        counts.update(bottle)
    return counts


def is_uniform_full(bottle: Sequence[Color], capacity: int) -> bool:
    return len(bottle) == capacity and len(set(bottle)) == 1


def fits_geometry(board: Any, bottle_count: int, capacity: int) -> bool:
    """True if ``board`` is a list of ``bottle_count`` bottles of color strings, none over capacity.

    Used to vet boards read back from disk before they reach a session.
    """
    if not isinstance(board, list) or len(board) != bottle_count:
        return False
    for bottle in board:
        if not isinstance(bottle, list) or len(bottle) > capacity:
            return False
        if not all(isinstance(color, str) for color in bottle):
            return False
    return True


def is_starting_board(
    board: Any,
    palette: Sequence[Color],
    capacity: int,
    filled_bottles: int,
    empty_bottles: int,
) -> bool:
    """True if ``board`` is a fresh deal for this layout.

    Every palette color appears exactly ``capacity`` times, the filled bottles
    are full and the spare bottles are empty.
    """
    if not fits_geometry(board, filled_bottles + empty_bottles, capacity):
        return False
    if any(len(bottle) != capacity for bottle in board[:filled_bottles]):
        return False
    if any(board[filled_bottles:]):
        return False
    return unit_counts(board) == {color: capacity for color in palette}
