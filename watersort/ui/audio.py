"""Sound cues for selecting a bottle and completing one."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import QObject, QUrl
from PySide6.QtMultimedia import QSoundEffect

logger = logging.getLogger(__name__)

SOUNDS_DIR = Path(__file__).resolve().parent.parent / "assets" / "sounds"

SELECT = "select"
FILLED = "filled"


class AudioCues:
    """Fire-and-forget playback; missing files are logged once and skipped."""

    def __init__(self, parent: Optional[QObject] = None, sounds_dir: Path = SOUNDS_DIR) -> None:
        self._effects: Dict[str, QSoundEffect] = {}
        for name in (SELECT, FILLED):
            path = sounds_dir / f"{name}.wav"
            if not path.exists():
                logger.warning(f"Sound file not found: {path}")
                continue
            effect = QSoundEffect(parent)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(0.8)
            self._effects[name] = effect

    def play(self, name: str) -> None:
        effect = self._effects.get(name)
        if effect is None:
            return
        if effect.status() == QSoundEffect.Status.Error:
            logger.debug("Skipping sound %s: failed to load", name)
            return
        effect.play()
