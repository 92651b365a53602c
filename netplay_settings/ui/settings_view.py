"""Settings window: renders the editor's draft and forwards every edit to it.

The view keeps no settings of its own. Each control change calls one SettingsEditor
operation; the editor's change notification re-renders the affected controls.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QEvent, Qt, QTimer
from PyQt6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QDialog,
    QFormLayout,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from netplay_settings.automation.global_hotkey import CaptureOneKeyThread
from netplay_settings.devices import GamepadManager, GamepadWatcher
from netplay_settings.editor import SettingsEditor
from netplay_settings.editor.sinks import SessionSync, SettingsStore
from netplay_settings.models import MAX_LENGTH_USERNAME, Character, HotkeyShortcut
from netplay_settings.ui.cycling_panel import CyclingListWidget
from netplay_settings.ui.widgets import HotkeyButton, WarningPanel

logger = logging.getLogger(__name__)

LABEL_MIN_WIDTH = 110
SECTION_GAP = 10
SAVED_DISPLAY_MS = 2000


def _row_label(text: str) -> QLabel:
    l = QLabel(text)
    l.setMinimumWidth(LABEL_MIN_WIDTH)
    l.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
    return l


def _section_frame(title: str, content: QWidget) -> QFrame:
    f = QFrame()
    f.setObjectName("section")
    layout = QVBoxLayout(f)
    layout.setContentsMargins(5, 6, 5, 6)
    layout.setSpacing(6)
    title_l = QLabel(title.upper())
    title_l.setStyleSheet(
        "font-family: monospace; font-size: 10px; color: #666; font-weight: bold; letter-spacing: 1.5px;"
    )
    layout.addWidget(title_l)
    layout.addWidget(content)
    return f


class SettingsView(QDialog):
    """One edit session per show; closing the window ends the session."""

    def __init__(
        self,
        store: SettingsStore,
        session: SessionSync,
        gamepads: GamepadManager,
        gamepad_watcher: Optional[GamepadWatcher] = None,
        connection_error: Optional[Callable[[], str]] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._store = store
        self._session = session
        self._gamepads = gamepads
        self._connection_error = connection_error or (lambda: getattr(session, "connection_error", ""))
        self._editor: Optional[SettingsEditor] = None
        self._capture_thread: Optional[CaptureOneKeyThread] = None
        self._capture_button: Optional[HotkeyButton] = None
        self._event_filter_installed = False
        self._hotkey_buttons: dict[HotkeyShortcut, HotkeyButton] = {}
        self.setWindowTitle("Settings")
        self.setMinimumWidth(460)
        self._build_ui()
        self._connect_signals()
        if gamepad_watcher is not None:
            gamepad_watcher.gamepad_connected.connect(self._on_gamepads_changed)
            gamepad_watcher.gamepad_disconnected.connect(self._on_gamepads_changed)

    @property
    def editor(self) -> Optional[SettingsEditor]:
        return self._editor

    # --- layout ---

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(0)

        content = QWidget()
        content_layout = QVBoxLayout(content)
        content_layout.setSpacing(SECTION_GAP)
        self._warning_panel = WarningPanel()
        self._connection_panel = WarningPanel()
        content_layout.addWidget(self._warning_panel)
        content_layout.addWidget(self._connection_panel)
        content_layout.addWidget(_section_frame("Player", self._player_section()))
        content_layout.addWidget(_section_frame("Character Hotkeys", self._hotkey_section()))
        content_layout.addWidget(_section_frame("Character Cycling Order", self._cycling_section()))
        content_layout.addStretch()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        scroll.setWidget(content)
        layout.addWidget(scroll)

        bottom = QWidget()
        bottom_layout = QHBoxLayout(bottom)
        bottom_layout.setContentsMargins(14, 6, 14, 6)
        self._status_text = QLabel("")
        self._status_text.setStyleSheet("color: #88ff88;")
        bottom_layout.addWidget(self._status_text)
        bottom_layout.addStretch()
        self._btn_save = QPushButton("Save")
        self._btn_save.setDefault(True)
        bottom_layout.addWidget(self._btn_save)
        layout.addWidget(bottom)

    def _player_section(self) -> QWidget:
        w = QWidget()
        fl = QFormLayout(w)
        self._edit_username = QLineEdit()
        self._edit_username.setMaxLength(MAX_LENGTH_USERNAME)
        self._edit_username.setPlaceholderText("letters, digits and _")
        fl.addRow(_row_label("Username:"), self._edit_username)
        self._combo_character = QComboBox()
        for c in Character:
            self._combo_character.addItem(c.display_name, c.value)
        fl.addRow(_row_label("Character:"), self._combo_character)
        self._combo_gamepad = QComboBox()
        fl.addRow(_row_label("Gamepad:"), self._combo_gamepad)
        self._check_emu_chat = QCheckBox("In-game chat view")
        fl.addRow("", self._check_emu_chat)
        self._check_global_hotkeys = QCheckBox("Enable global character keyboard shortcuts")
        fl.addRow("", self._check_global_hotkeys)
        return w

    def _hotkey_section(self) -> QWidget:
        w = QWidget()
        outer = QVBoxLayout(w)
        hint = QLabel("Click to assign, right click to unassign")
        hint.setStyleSheet("color: #888;")
        outer.addWidget(hint)
        grid = QGridLayout()
        for c in Character:
            btn = HotkeyButton(HotkeyShortcut.for_character(c.value), c.display_name)
            self._hotkey_buttons[btn.shortcut] = btn
            grid.addWidget(btn, c.value // 4, c.value % 4)
        outer.addLayout(grid)
        row = QHBoxLayout()
        for shortcut, title in (
            (HotkeyShortcut.PREVIOUS_CHARACTER, "Previous Character"),
            (HotkeyShortcut.NEXT_CHARACTER, "Next Character"),
        ):
            btn = HotkeyButton(shortcut, title)
            self._hotkey_buttons[shortcut] = btn
            row.addWidget(btn)
        outer.addLayout(row)
        self._btn_unbind_all = QPushButton("Unbind all")
        outer.addWidget(self._btn_unbind_all)
        return w

    def _cycling_section(self) -> QWidget:
        w = QWidget()
        outer = QVBoxLayout(w)
        hint = QLabel("Click to toggle, drag to reorder")
        hint.setStyleSheet("color: #888;")
        outer.addWidget(hint)
        self._cycling_list = CyclingListWidget()
        outer.addWidget(self._cycling_list)
        row = QHBoxLayout()
        self._btn_enable_all = QPushButton("Enable all")
        self._btn_disable_all = QPushButton("Disable all")
        row.addWidget(self._btn_enable_all)
        row.addWidget(self._btn_disable_all)
        outer.addLayout(row)
        return w

    def _connect_signals(self) -> None:
        self._edit_username.textEdited.connect(self._on_username_edited)
        self._combo_character.currentIndexChanged.connect(self._on_character_changed)
        self._combo_gamepad.currentIndexChanged.connect(self._on_gamepad_changed)
        self._check_emu_chat.toggled.connect(lambda checked: self._edit(lambda e: e.set_emu_chat(checked)))
        self._check_global_hotkeys.toggled.connect(
            lambda checked: self._edit(lambda e: e.set_global_hotkeys_enabled(checked))
        )
        for btn in self._hotkey_buttons.values():
            btn.capture_requested.connect(self._on_capture_requested)
            btn.unassign_requested.connect(
                lambda shortcut: self._edit(lambda e: e.set_hotkey_binding(shortcut, None))
            )
        self._btn_unbind_all.clicked.connect(lambda: self._edit(lambda e: e.unbind_all()))
        self._cycling_list.toggle_requested.connect(
            lambda index: self._edit(lambda e: e.toggle_cycling(index))
        )
        self._cycling_list.reorder_requested.connect(
            lambda old, new: self._edit(lambda e: e.reorder_cycling(old, new))
        )
        self._btn_enable_all.clicked.connect(lambda: self._edit(lambda e: e.set_all_cycling(True)))
        self._btn_disable_all.clicked.connect(lambda: self._edit(lambda e: e.set_all_cycling(False)))
        self._btn_save.clicked.connect(self._on_save)

    # --- session ---

    def _begin_session(self) -> None:
        if self._editor is not None:
            return
        self._editor = SettingsEditor(
            self._store, self._session, self._gamepads, on_saved=self._show_saved
        )
        self._editor.add_listener(self._on_editor_changed)
        self._sync_from_editor()

    def _end_session(self) -> None:
        self._cancel_capture()
        if self._editor is not None:
            self._editor.close()
            self._editor = None

    def _edit(self, op: Callable[[SettingsEditor], None]) -> None:
        if self._editor is not None:
            op(self._editor)

    # --- rendering ---

    def _on_editor_changed(self, field_name: str) -> None:
        if field_name == "username":
            # Re-render only when normalization changed what the user typed
            if self._edit_username.text() != self._editor.draft.username:
                self._sync_username()
        elif field_name == "validation_message":
            self._sync_warnings()
        else:
            self._sync_from_editor()

    def _sync_username(self) -> None:
        pos = self._edit_username.cursorPosition()
        self._edit_username.blockSignals(True)
        self._edit_username.setText(self._editor.draft.username)
        self._edit_username.setCursorPosition(min(pos, len(self._editor.draft.username)))
        self._edit_username.blockSignals(False)

    def _sync_warnings(self) -> None:
        self._warning_panel.set_warning(self._editor.validation_message)
        self._connection_panel.set_warning(self._connection_error() or "")

    def _sync_gamepads(self) -> None:
        draft = self._editor.draft
        self._combo_gamepad.blockSignals(True)
        try:
            self._combo_gamepad.clear()
            self._combo_gamepad.addItem("None", None)
            for gamepad in self._editor.available_devices():
                self._combo_gamepad.addItem(gamepad.id, gamepad.id)
            if self._editor.device_selection_is_stale:
                # Keep showing a selection whose device went away
                self._combo_gamepad.addItem(f"{draft.gamepad_id} (disconnected)", draft.gamepad_id)
            idx = self._combo_gamepad.findData(draft.gamepad_id)
            self._combo_gamepad.setCurrentIndex(max(0, idx))
        finally:
            self._combo_gamepad.blockSignals(False)

    def _sync_from_editor(self) -> None:
        """Populate all controls from the draft."""
        if self._editor is None:
            return
        draft = self._editor.draft
        self._sync_username()
        self._combo_character.blockSignals(True)
        self._combo_character.setCurrentIndex(max(0, self._combo_character.findData(draft.character)))
        self._combo_character.blockSignals(False)
        self._check_emu_chat.blockSignals(True)
        self._check_emu_chat.setChecked(draft.emu_chat)
        self._check_emu_chat.blockSignals(False)
        self._check_global_hotkeys.blockSignals(True)
        self._check_global_hotkeys.setChecked(draft.global_hotkeys_enabled)
        self._check_global_hotkeys.blockSignals(False)
        for shortcut, btn in self._hotkey_buttons.items():
            keys = draft.hotkey_bindings.get(shortcut, [])
            btn.set_hotkey(keys[0] if keys else None)
        self._cycling_list.set_order(draft.character_cycling_order)
        self._sync_gamepads()
        self._sync_warnings()

    def _on_gamepads_changed(self, _gamepad_id: str) -> None:
        if self._editor is not None:
            self._sync_gamepads()

    def _show_saved(self, message: str) -> None:
        self._status_text.setText(message)
        QTimer.singleShot(SAVED_DISPLAY_MS, lambda: self._status_text.setText(""))

    # --- control handlers ---

    def _on_username_edited(self, text: str) -> None:
        self._edit(lambda e: e.set_username(text))

    def _on_character_changed(self, index: int) -> None:
        if index < 0:
            return
        character_id = self._combo_character.itemData(index)
        if character_id is not None:
            self._edit(lambda e: e.set_character(int(character_id)))

    def _on_gamepad_changed(self, index: int) -> None:
        if index < 0:
            return
        self._edit(lambda e: e.set_device_selection(self._combo_gamepad.itemData(index)))

    def _on_save(self) -> None:
        if self._editor is None:
            return
        try:
            self._editor.commit()
        except OSError as e:
            logger.error(f"Saving settings failed: {e}")
            self._warning_panel.set_warning(f"Could not save settings: {e}")

    # --- hotkey capture ---

    def _on_capture_requested(self, shortcut_value: str) -> None:
        if self._capture_thread is not None and self._capture_thread.isRunning():
            return
        btn = self._hotkey_buttons[HotkeyShortcut(shortcut_value)]
        self._capture_button = btn
        btn.set_capturing(True)
        btn.setFocus(Qt.FocusReason.OtherFocusReason)
        self._capture_thread = CaptureOneKeyThread(self)
        self._capture_thread.captured.connect(self._on_key_captured)
        self._capture_thread.finished.connect(self._on_capture_finished)
        self._install_capture_event_filter()
        self._capture_thread.start()

    def _on_key_captured(self, bind: str) -> None:
        if self._capture_button is None:
            return
        shortcut = self._capture_button.shortcut
        self._edit(lambda e: e.set_hotkey_binding(shortcut, bind))

    def _on_capture_finished(self) -> None:
        self._remove_capture_event_filter()
        if self._capture_button is not None:
            self._capture_button.set_capturing(False)
        self._capture_thread = None
        self._capture_button = None

    def _cancel_capture(self) -> None:
        if self._capture_thread is not None:
            self._capture_thread.cancel()
            self._capture_thread.wait(1000)

    def _install_capture_event_filter(self) -> None:
        if self._event_filter_installed:
            return
        app = QApplication.instance()
        if app is None:
            return
        app.installEventFilter(self)
        self._event_filter_installed = True

    def _remove_capture_event_filter(self) -> None:
        if not self._event_filter_installed:
            return
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)
        self._event_filter_installed = False

    def eventFilter(self, watched, event):  # type: ignore[override]
        capture_active = self._capture_thread is not None and self._capture_thread.isRunning()
        if capture_active and event.type() in (
            QEvent.Type.ShortcutOverride,
            QEvent.Type.KeyPress,
            QEvent.Type.KeyRelease,
        ):
            return True
        return super().eventFilter(watched, event)

    # --- window ---

    def closeEvent(self, event) -> None:
        self._end_session()
        self._remove_capture_event_filter()
        event.accept()
        self.hide()

    def show_or_raise(self) -> None:
        self._begin_session()
        if self.isVisible():
            self.raise_()
            self.activateWindow()
        else:
            self.show()
