from __future__ import annotations

from typing import List

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from watersort.core.config import GameConfig
from watersort.core.session import MoveOutcome, PuzzleSession
from watersort.ui.audio import FILLED, SELECT, AudioCues
from watersort.ui.bottle_widget import BottleWidget
from watersort.ui.colors import BoardColors
from watersort.ui.models import build_bottle_states

MAX_PER_ROW = 6


class MainWindow(QMainWindow):
    """Board window: level label, one widget per bottle, and the level controls.

    Every click goes to the session; the window only repaints from session
    state and plays the matching sound cue.
    """

    def __init__(self, session: PuzzleSession, config: GameConfig) -> None:
        super().__init__()
        self._session = session
        self._config = config
        self._audio = AudioCues(self)
        self._bottle_widgets: List[BottleWidget] = []

        self.setWindowTitle("Water Sort")
        self._build_ui()
        self._render()

    def _build_ui(self) -> None:
        central = QWidget()
        central.setObjectName("board")
        self.setCentralWidget(central)
        self.setStyleSheet(f"""
            QWidget#board {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {BoardColors.BG_TOP}, stop:1 {BoardColors.BG_BOTTOM});
            }}
            QPushButton {{
                background: {BoardColors.PRIMARY};
                color: white;
                border: none;
                border-radius: 10px;
                padding: 8px 18px;
                font-weight: 800;
            }}
            QPushButton:hover {{ background: {BoardColors.PRIMARY_LIGHT}; }}
            QPushButton:disabled {{ background: {BoardColors.TEXT_MUTED}; }}
        """)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(18)

        self._level_label = QLabel("")
        self._level_label.setAlignment(Qt.AlignCenter)
        self._level_label.setStyleSheet(f"color: {BoardColors.PRIMARY_DARK}; font-size: 24px; font-weight: 900;")
        layout.addWidget(self._level_label)

        grid_host = QWidget()
        grid = QGridLayout(grid_host)
        grid.setHorizontalSpacing(14)
        grid.setVerticalSpacing(24)
        for i in range(self._config.bottle_count):
            widget = BottleWidget(i, on_click=self._on_bottle_clicked)
            grid.addWidget(widget, i // MAX_PER_ROW, i % MAX_PER_ROW, Qt.AlignCenter)
            self._bottle_widgets.append(widget)
        layout.addWidget(grid_host, 1, Qt.AlignCenter)

        controls = QHBoxLayout()
        controls.setSpacing(12)
        self._prev_button = QPushButton("Previous level")
        self._reset_button = QPushButton("Reset")
        self._next_button = QPushButton("Next level")
        self._prev_button.clicked.connect(lambda: self._change_level(-1))
        self._reset_button.clicked.connect(self._reset_level)
        self._next_button.clicked.connect(self._next_level)
        controls.addStretch(1)
        for button in (self._prev_button, self._reset_button, self._next_button):
            button.setCursor(Qt.PointingHandCursor)
            controls.addWidget(button)
        controls.addStretch(1)
        layout.addLayout(controls)

        self._reset_shortcut = QShortcut(QKeySequence("R"), self)
        self._reset_shortcut.activated.connect(self._reset_level)

    def _render(self) -> None:
        session = self._session
        for widget, state in zip(self._bottle_widgets, build_bottle_states(session, self._config)):
            widget.set_state(state)
        self._level_label.setText(f"Level {session.level_index + 1}")
        self._prev_button.setEnabled(session.level_index > 0)
        self._next_button.setEnabled(
            session.check_win() and session.level_index + 1 < session.level_count
        )

    def _on_bottle_clicked(self, index: int) -> None:
        outcome = self._session.click(index)
        if not outcome.accepted:
            return
        self._play_cues(outcome)
        self._render()
        if outcome.won:
            QMessageBox.information(self, "Water Sort", f"You won Level {self._session.level_index + 1}!")

    def _play_cues(self, outcome: MoveOutcome) -> None:
        if outcome.selected is not None:
            self._audio.play(SELECT)
        elif outcome.completed_bottle is not None or outcome.won:
            self._audio.play(FILLED)

    def _reset_level(self) -> None:
        self._session.reset()
        self._render()

    def _change_level(self, delta: int) -> None:
        if self._session.change_level(delta):
            self._render()

    def _next_level(self) -> None:
        if self._session.advance():
            self._render()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Persist the board when closing the app."""
        self._session.save()
        super().closeEvent(event)
