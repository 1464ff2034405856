"""Board UI: one painted bottle per widget."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import QWidget

from watersort.ui.colors import BoardColors, blend_hex
from watersort.ui.models import BottleState


class BottleWidget(QWidget):
    """A clickable glass bottle; units are stacked bottom-to-top."""

    def __init__(
        self,
        index: int,
        *,
        on_click: Callable[[int], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._state = BottleState(index=index)
        self._on_click = on_click
        self.setFixedSize(64, 220)
        self.setCursor(Qt.PointingHandCursor)

    def set_state(self, state: BottleState) -> None:
        self._state = state
        self.update()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._on_click(self._state.index)
        super().mousePressEvent(event)

    def paintEvent(self, event) -> None:
        """Paint the glass outline and its color units."""
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        state = self._state
        # selected bottles sit a little higher, like lifting it to pour
        lift = 0 if state.selected else 16
        glass = QRectF(6, 6 + lift, self.width() - 12, self.height() - 12 - 16)

        if state.selected:
            border = BoardColors.SELECTED_BORDER
        elif state.complete:
            border = BoardColors.COMPLETE_BORDER
        else:
            border = BoardColors.GLASS_BORDER
        painter.setPen(QPen(QColor(border), 3))
        painter.setBrush(QColor(BoardColors.GLASS))
        painter.drawRoundedRect(glass, 12, 12)

        capacity = max(1, state.capacity)
        padding = 5
        slot_h = (glass.height() - 2 * padding) / capacity
        painter.setPen(Qt.NoPen)
        for i, color in enumerate(state.units):
            top = glass.bottom() - padding - (i + 1) * slot_h
            painter.setBrush(QColor(color))
            painter.drawRoundedRect(
                QRectF(glass.left() + padding, top + 1, glass.width() - 2 * padding, slot_h - 2), 6, 6
            )
            # thin highlight across the top of each unit
            painter.setBrush(QColor(blend_hex(color, "#FFFFFF", 0.35)))
            painter.drawRect(QRectF(glass.left() + padding + 4, top + 3, glass.width() - 2 * padding - 8, 3))
