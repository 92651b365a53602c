"""Netplay settings: main entry point.

Wires together: settings store + session sink + gamepads → settings view,
and the global character hotkeys that act on the committed settings.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from netplay_settings.automation.character_cycler import resolve_shortcut
from netplay_settings.automation.global_hotkey import GlobalHotkeyListener
from netplay_settings.devices import GamepadManager, GamepadWatcher
from netplay_settings.models import Character
from netplay_settings.session import OfflineSessionSync
from netplay_settings.store import JsonSettingsStore
from netplay_settings.ui import SettingsView

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    store = JsonSettingsStore()
    session = OfflineSessionSync()
    committed = store.load()

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    # --- Gamepads: restore the saved selection if that gamepad is connected ---
    gamepads = GamepadManager()
    if committed.gamepad_id:
        saved = next(
            (g for g in gamepads.connected_devices() if g is not None and g.id == committed.gamepad_id),
            None,
        )
        gamepads.set_active_device(saved)
    watcher = GamepadWatcher(gamepads)
    watcher.start()

    view = SettingsView(store, session, gamepads, watcher)
    view.show_or_raise()

    # --- Global character hotkeys act on the committed settings ---
    def on_shortcut(shortcut: str) -> None:
        current = store.load()
        character = resolve_shortcut(shortcut, current.character, current.character_cycling_order)
        if character == current.character:
            return
        logger.info(f"Hotkey {shortcut}: switching to {Character(character).display_name}")
        store.set_character(character)
        session.player_update(current.username, character)

    hotkey_listener = GlobalHotkeyListener(
        get_bindings=lambda: store.load().hotkey_bindings,
        is_enabled=lambda: store.load().global_hotkeys_enabled,
    )
    hotkey_listener.triggered.connect(on_shortcut)
    hotkey_listener.start()

    exit_code = app.exec()

    hotkey_listener.stop()
    watcher.stop()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
