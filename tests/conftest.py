"""Shared fixtures: small board configs and a controllable clock."""

from __future__ import annotations

from pathlib import Path

import pytest

from watersort.core.config import GameConfig
from watersort.core.progress import GameStore


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def default_config() -> GameConfig:
    return GameConfig(palette=tuple(f"#00000{i}" for i in range(9)), level_count=5)


@pytest.fixture()
def small_config() -> GameConfig:
    """Two colors, two filled bottles, one spare."""
    return GameConfig(
        palette=("A", "B"),
        capacity=4,
        filled_bottles=2,
        empty_bottles=1,
        level_count=3,
        cooldown_ms=500,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(tmp_path: Path) -> GameStore:
    """GameStore backed by a temp file so tests don't touch ~/.watersort."""
    return GameStore(tmp_path / "state.json")
