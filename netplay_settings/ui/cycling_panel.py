"""Character cycling list: click a row to toggle it, drag a row to reorder."""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QMimeData, QPoint, Qt, pyqtSignal
from PyQt6.QtGui import QDrag
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from netplay_settings.models import Character, CyclingEntry

logger = logging.getLogger(__name__)

MIME_CYCLING_ITEM = "application/x-netplay-cycling-index"
DRAG_THRESHOLD_PX = 5


def drop_target_index(old_index: int, insert_before: int, count: int) -> int:
    """Convert an insertion point (row the item is dropped above) to a move target index."""
    new_index = insert_before - 1 if insert_before > old_index else insert_before
    return max(0, min(new_index, count - 1))


class CyclingItemWidget(QFrame):
    """One row: drag handle + position + character name."""

    toggle_requested = pyqtSignal(int)

    def __init__(self, index: int, entry: CyclingEntry, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._index = index
        self._on = entry.on
        self._drag_start: Optional[QPoint] = None
        self._dragged = False
        self.setObjectName("cyclingItem")
        layout = QHBoxLayout(self)
        layout.setContentsMargins(6, 4, 6, 4)
        layout.setSpacing(6)

        handle = QLabel("⣿")
        handle.setStyleSheet("color: #666;")
        handle.setCursor(Qt.CursorShape.OpenHandCursor)
        layout.addWidget(handle)

        rank = QLabel(str(index + 1))
        rank.setMinimumWidth(18)
        rank.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(rank)

        self._name_label = QLabel(Character(entry.character_id).display_name)
        layout.addWidget(self._name_label, 1)

        self._state_label = QLabel("")
        self._state_label.setMinimumWidth(28)
        layout.addWidget(self._state_label)

        self.setFixedHeight(32)
        self._update_style()

    @property
    def index(self) -> int:
        return self._index

    def _update_style(self) -> None:
        color = "#88ff88" if self._on else "#777777"
        self._state_label.setText("on" if self._on else "off")
        self._name_label.setStyleSheet(f"color: {color};")
        self._state_label.setStyleSheet(f"color: {color}; font-family: monospace;")
        self.setStyleSheet(
            "#cyclingItem { border: 1px solid %s; border-radius: 3px; }"
            % ("#3a7a3a" if self._on else "#444")
        )

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_start = event.position().toPoint()
            self._dragged = False
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self._drag_start is None:
            super().mouseMoveEvent(event)
            return
        if (event.position().toPoint() - self._drag_start).manhattanLength() < DRAG_THRESHOLD_PX:
            super().mouseMoveEvent(event)
            return
        self._dragged = True
        mime = QMimeData()
        mime.setData(MIME_CYCLING_ITEM, str(self._index).encode())
        drag = QDrag(self)
        drag.setMimeData(mime)
        drag.exec(Qt.DropAction.MoveAction)
        self._drag_start = None

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            if self._drag_start is not None and not self._dragged:
                self.toggle_requested.emit(self._index)
            self._drag_start = None
        super().mouseReleaseEvent(event)


class CyclingListWidget(QWidget):
    """Vertical list of cycling entries. Holds no state beyond the rows it renders."""

    toggle_requested = pyqtSignal(int)
    reorder_requested = pyqtSignal(int, int)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setAcceptDrops(True)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(2)
        self._item_widgets: list[CyclingItemWidget] = []

    def set_order(self, order: list[CyclingEntry]) -> None:
        for w in self._item_widgets:
            w.deleteLater()
        self._item_widgets.clear()
        for index, entry in enumerate(order):
            w = CyclingItemWidget(index, entry, self)
            w.toggle_requested.connect(self.toggle_requested.emit)
            self._layout.addWidget(w)
            self._item_widgets.append(w)

    def dragEnterEvent(self, event) -> None:
        if event.mimeData().hasFormat(MIME_CYCLING_ITEM):
            event.acceptProposedAction()

    def dragMoveEvent(self, event) -> None:
        if event.mimeData().hasFormat(MIME_CYCLING_ITEM):
            event.acceptProposedAction()

    def dropEvent(self, event) -> None:
        mime = event.mimeData()
        if not mime.hasFormat(MIME_CYCLING_ITEM):
            event.ignore()
            return
        try:
            old_index = int(mime.data(MIME_CYCLING_ITEM).data().decode())
        except ValueError:
            event.ignore()
            return
        count = len(self._item_widgets)
        if not 0 <= old_index < count:
            event.ignore()
            return
        y = event.position().toPoint().y()
        insert_before = count
        for i, w in enumerate(self._item_widgets):
            if y < w.y() + w.height() // 2:
                insert_before = i
                break
        new_index = drop_target_index(old_index, insert_before, count)
        event.acceptProposedAction()
        if new_index != old_index:
            logger.debug("Cycling reorder %d -> %d", old_index, new_index)
            self.reorder_requested.emit(old_index, new_index)
