"""Small widgets used by the settings view."""
from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QWidget

from netplay_settings.automation.binds import format_bind_for_display
from netplay_settings.models import HotkeyShortcut


class WarningPanel(QFrame):
    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("warningPanel")
        self.setStyleSheet(
            "#warningPanel { background: #4a2a12; border: 1px solid #d3a75b; border-radius: 4px; }"
        )
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 6)
        self._label = QLabel("")
        self._label.setWordWrap(True)
        self._label.setStyleSheet("color: #ffd37a;")
        layout.addWidget(self._label)
        self.hide()

    def set_warning(self, text: str) -> None:
        self._label.setText(text)
        self.setVisible(bool(text))


class HotkeyButton(QPushButton):
    """Shows one shortcut's key. Left click asks to capture a key, right click unassigns."""

    capture_requested = pyqtSignal(str)
    unassign_requested = pyqtSignal(str)

    def __init__(self, shortcut: HotkeyShortcut, title: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._shortcut = shortcut
        self._title = title
        self._hotkey: Optional[str] = None
        self._capturing = False
        self.setMinimumWidth(76)
        self.setToolTip(f"{title}: click to assign, right click to unassign")
        self.clicked.connect(lambda: self.capture_requested.emit(self._shortcut.value))
        self._update_text()

    @property
    def shortcut(self) -> HotkeyShortcut:
        return self._shortcut

    def set_hotkey(self, hotkey: Optional[str]) -> None:
        self._hotkey = hotkey
        self._update_text()

    def set_capturing(self, capturing: bool) -> None:
        self._capturing = capturing
        self.setStyleSheet("background-color: #2d2d5a; color: white;" if capturing else "")
        self._update_text()

    def _update_text(self) -> None:
        key = "..." if self._capturing else format_bind_for_display(self._hotkey)
        self.setText(f"{self._title}\n[{key}]")

    def contextMenuEvent(self, event) -> None:
        self.unassign_requested.emit(self._shortcut.value)
        event.accept()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.RightButton:
            event.accept()
            return
        super().mousePressEvent(event)
