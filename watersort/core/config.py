from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml

CONFIG_ENV_VAR = "WATERSORT_CONFIG"


def default_config_path() -> Path:
    """Packaged config, unless ``WATERSORT_CONFIG`` points elsewhere."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / "data" / "config.yaml"


@dataclass(frozen=True)
class GameConfig:
    palette: Tuple[str, ...]
    capacity: int = 4
    filled_bottles: int = 9
    empty_bottles: int = 2
    level_count: int = 1500
    cooldown_ms: int = 500

    @property
    def bottle_count(self) -> int:
        return self.filled_bottles + self.empty_bottles

    @property
    def cooldown_seconds(self) -> float:
        return self.cooldown_ms / 1000.0

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "GameConfig":
        """Read and validate a YAML config file."""
        config_path = path if path is not None else default_config_path()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        try:
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ValueError(f"{config_path.name}: invalid YAML ({e})") from e
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{config_path.name}: expected a YAML mapping with a 'palette'")
        return cls.from_mapping(raw, source=config_path.name)

    @classmethod
    def from_mapping(cls, raw: dict, source: str = "config") -> "GameConfig":
        palette = raw.get("palette")
        if not isinstance(palette, list) or not palette:
            raise ValueError(f"{source}: missing or empty 'palette'")
        colors = tuple(str(color).strip() for color in palette)
        if any(not color for color in colors):
            raise ValueError(f"{source}: 'palette' contains a blank color")
        if len(set(colors)) != len(colors):
            raise ValueError(f"{source}: 'palette' colors must be unique")

        def _int(key: str, default: int, minimum: int) -> int:
            value = raw.get(key, default)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{source}: '{key}' must be an integer")
            if value < minimum:
                raise ValueError(f"{source}: '{key}' must be >= {minimum}")
            return value

        capacity = _int("capacity", 4, 1)
        filled = _int("filled_bottles", len(colors), 1)
        empty = _int("empty_bottles", 2, 0)
        level_count = _int("level_count", 1500, 1)
        cooldown_ms = _int("cooldown_ms", 500, 0)

        # every palette color fills exactly one bottle's worth of units
        if filled != len(colors):
            raise ValueError(
                f"{source}: 'filled_bottles' ({filled}) must equal the number of palette colors ({len(colors)})"
            )
        return cls(
            palette=colors,
            capacity=capacity,
            filled_bottles=filled,
            empty_bottles=empty,
            level_count=level_count,
            cooldown_ms=cooldown_ms,
        )
