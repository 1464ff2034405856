from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from watersort.core.board import Board, Color, clone_board

logger = logging.getLogger(__name__)


@dataclass
class SavedGame:
    level_index: int
    bottles: Optional[Board] = None


def default_state_path() -> Path:
    return Path.home() / ".watersort" / "state.json"


class GameStore:
    """Stores the current level and board, plus the generated level set.
    Files: ~/.watersort/state.json (level and board) and levels.json beside it.
    The level set is only rewritten by save_levels."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path if file_path is not None else default_state_path()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._levels_path = self._file_path.with_name("levels.json")
        self._payload = self._load(self._file_path)
        self._levels_payload = self._load(self._levels_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def levels_path(self) -> Path:
        return self._levels_path

    def load(self) -> Optional[SavedGame]:
        """Return the saved level and board, or None if nothing usable is stored."""
        level = self._payload.get("current_level")
        if level is None:
            return None
        if isinstance(level, bool) or not isinstance(level, int) or level < 0:
            logger.warning("Ignoring invalid saved level in %s: %r", self._file_path, level)
            return None
        bottles = self._payload.get("bottles")
        if not _is_board_shaped(bottles):
            if bottles is not None:
                logger.warning("Ignoring invalid saved board in %s", self._file_path)
            return SavedGame(level_index=level)
        return SavedGame(level_index=level, bottles=clone_board(bottles))

    def save(self, level_index: int, bottles: Sequence[Sequence[Color]]) -> None:
        self._payload["current_level"] = int(level_index)
        self._payload["bottles"] = clone_board(bottles)
        self._payload.pop("levels", None)
        self._save(self._file_path, self._payload)

    def load_levels(self) -> List[Board]:
        levels = self._levels_payload.get("levels")
        if not isinstance(levels, list):
            return []
        boards: List[Board] = []
        for board in levels:
            if not _is_board_shaped(board):
                logger.warning("Stored level set in %s is damaged after %d levels", self._levels_path, len(boards))
                break
            boards.append(clone_board(board))
        return boards

    def save_levels(self, boards: Sequence[Sequence[Sequence[Color]]]) -> None:
        self._levels_payload = {"levels": [clone_board(board) for board in boards]}
        self._save(self._levels_path, self._levels_payload)

    def clear(self) -> None:
        """Forget everything, including the level set."""
        self._payload = {}
        self._levels_payload = {}
        self._save(self._file_path, self._payload)
        self._save(self._levels_path, self._levels_payload)

    def _load(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load game state from %s: %s", path, e)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Could not load game state from %s: expected a JSON object", path)
            return {}
        return payload

    def _save(self, path: Path, payload: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            path.write_text(json.dumps(payload), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save game state to %s: %s", path, e)


def _is_board_shaped(value: Any) -> bool:
    return isinstance(value, list) and all(
        isinstance(bottle, list) and all(isinstance(color, str) for color in bottle) for bottle in value
    )
