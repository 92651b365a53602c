"""Global character hotkeys (work while the app does not have focus).

A low-level keyboard.hook sees every key down/up, so a bound key still fires while
other keys are held. Only keyboard keys are supported.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from netplay_settings.automation.binds import (
    is_modifier_token,
    normalize_bind,
    normalize_bind_from_parts,
    normalize_key_token,
)
from netplay_settings.models import HotkeyShortcut

logger = logging.getLogger(__name__)

BindingsGetter = Callable[[], dict[HotkeyShortcut, list[str]]]


def shortcuts_by_bind(bindings: dict[HotkeyShortcut, list[str]]) -> dict[str, list[HotkeyShortcut]]:
    """Invert the binding table. One key may trigger several shortcuts."""
    result: dict[str, list[HotkeyShortcut]] = {}
    for shortcut in HotkeyShortcut:
        for key in bindings.get(shortcut, [])[:1]:
            bind = normalize_bind(key)
            if bind:
                result.setdefault(bind, []).append(shortcut)
    return result


def _unhook(keyboard, hook) -> None:
    try:
        keyboard.unhook(hook)
    except (KeyError, ValueError) as e:
        logger.debug("keyboard unhook failed: %s", e)


class _ListenerThread(QThread):
    triggered = pyqtSignal(str)

    def __init__(
        self,
        get_bindings: BindingsGetter,
        is_enabled: Callable[[], bool],
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._get_bindings = get_bindings
        self._is_enabled = is_enabled
        self._running = True
        self._hook = None

    def _current_table(self) -> dict[str, list[HotkeyShortcut]]:
        if not self._is_enabled():
            return {}
        return shortcuts_by_bind(self._get_bindings() or {})

    def run(self) -> None:
        try:
            import keyboard
        except ImportError:
            logger.warning(
                "keyboard library not installed; global character hotkeys disabled. "
                "Install with: pip install keyboard"
            )
            return

        while self._running:
            table = self._current_table()
            if self._hook is not None:
                _unhook(keyboard, self._hook)
                self._hook = None
                logger.info("Global hotkeys released")
            if not table:
                self.msleep(500)
                continue

            held_keys: set[str] = set()
            held_modifiers: set[str] = set()

            def on_event(event, table=table):
                if not self._running:
                    return
                token = normalize_key_token(str(getattr(event, "name", None) or ""))
                if not token:
                    return
                if event.event_type == keyboard.KEY_DOWN:
                    if is_modifier_token(token):
                        held_modifiers.add(token)
                        return
                    if token in held_keys:
                        return
                    held_keys.add(token)
                    bind = normalize_bind_from_parts(held_modifiers, token)
                    for shortcut in table.get(bind, []):
                        self.triggered.emit(shortcut.value)
                elif event.event_type == keyboard.KEY_UP:
                    if is_modifier_token(token):
                        held_modifiers.discard(token)
                    else:
                        held_keys.discard(token)

            try:
                self._hook = keyboard.hook(on_event)
                logger.info(f"Global hotkeys active for {sorted(table)}")
            except (OSError, ImportError) as e:
                logger.error(f"keyboard hook failed: {e}")
                return

            while self._running and self._current_table() == table:
                self.msleep(200)

        if self._hook is not None:
            _unhook(keyboard, self._hook)
            self._hook = None

    def stop(self) -> None:
        self._running = False


class GlobalHotkeyListener(QObject):
    """Emits the triggered shortcut value ("0".."11", "previousCharacter", "nextCharacter")."""

    triggered = pyqtSignal(str)

    def __init__(
        self,
        get_bindings: BindingsGetter,
        is_enabled: Callable[[], bool],
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._get_bindings = get_bindings
        self._is_enabled = is_enabled
        self._thread: Optional[_ListenerThread] = None

    def start(self) -> None:
        if self._thread is not None and self._thread.isRunning():
            return
        self._thread = _ListenerThread(self._get_bindings, self._is_enabled, self)
        self._thread.triggered.connect(self.triggered.emit)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is not None:
            self._thread.stop()
            self._thread.wait(2000)
            self._thread = None


class CaptureOneKeyThread(QThread):
    """Captures the next key combo for a hotkey button; Escape cancels."""

    captured = pyqtSignal(str)
    cancelled = pyqtSignal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._done = False

    def run(self) -> None:
        try:
            import keyboard
        except ImportError:
            logger.warning("keyboard library not installed; cannot capture a hotkey")
            self.cancelled.emit()
            return

        result = [""]
        held_modifiers: set[str] = set()

        def on_event(event):
            if result[0]:
                return
            token = normalize_key_token(str(getattr(event, "name", None) or ""))
            if not token:
                return
            if event.event_type == keyboard.KEY_DOWN:
                if is_modifier_token(token):
                    held_modifiers.add(token)
                else:
                    result[0] = normalize_bind_from_parts(held_modifiers, token)
            elif event.event_type == keyboard.KEY_UP and is_modifier_token(token):
                held_modifiers.discard(token)

        hook = keyboard.hook(on_event)
        try:
            while not self._done and not result[0]:
                self.msleep(50)
        finally:
            _unhook(keyboard, hook)
        if not result[0] or result[0] == "escape":
            self.cancelled.emit()
        else:
            self.captured.emit(result[0])

    def cancel(self) -> None:
        self._done = True
