"""Settings editor: an uncommitted draft of SaveData plus an explicit commit.

Edits only touch the draft. commit() validates, then writes the full payload to
the settings store and informs the live session in topical groups. There is no
rollback: if a sink raises, the exception propagates and whatever the earlier
sinks already received stays received.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from netplay_settings.editor import cycling_order
from netplay_settings.editor.sinks import Device, DeviceProvider, SessionSync, SettingsStore
from netplay_settings.editor.validation import (
    SettingsValidationError,
    normalize_username,
    seed_message,
    validate_username,
)
from netplay_settings.models import HotkeyShortcut, SaveData, empty_hotkey_bindings

logger = logging.getLogger(__name__)

SAVED_MESSAGE = "Saved"


class SettingsEditor:
    """Owns the draft for one edit session.

    Listeners registered with add_listener() are called with the name of the
    field that changed after every edit, and with "committed" after a commit.
    """

    def __init__(
        self,
        store: SettingsStore,
        session: SessionSync,
        devices: Optional[DeviceProvider] = None,
        on_saved: Optional[Callable[[str], None]] = None,
    ):
        self._store = store
        self._session = session
        self._devices = devices
        self._on_saved = on_saved
        self._listeners: list[Callable[[str], None]] = []
        self._committing = False
        self._committed = store.load()
        self._draft = self._committed.copy()
        self.validation_message = seed_message(self._draft.username)
        store.add_character_listener(self.on_committed_character_changed)

    def close(self) -> None:
        """End the session: stop following committed-state changes."""
        self._store.remove_character_listener(self.on_committed_character_changed)
        self._listeners.clear()

    # --- read-only projection ---

    @property
    def draft(self) -> SaveData:
        return self._draft

    @property
    def committed(self) -> SaveData:
        return self._committed

    @property
    def is_dirty(self) -> bool:
        return self._draft != self._committed

    def warnings(self, connection_error: str = "") -> list[str]:
        """Messages to show, own validation message first, then the passed-through connection error."""
        return [m for m in (self.validation_message, connection_error) if m]

    def available_devices(self) -> list[Device]:
        """Currently connected devices, re-read on every call."""
        if self._devices is None:
            return []
        return [d for d in self._devices.connected_devices() if d is not None]

    @property
    def device_selection_is_stale(self) -> bool:
        """True when the selected id does not match any connected device."""
        gamepad_id = self._draft.gamepad_id
        if not gamepad_id:
            return False
        return all(d.id != gamepad_id for d in self.available_devices())

    def add_listener(self, callback: Callable[[str], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[str], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _changed(self, field_name: str) -> None:
        for cb in list(self._listeners):
            cb(field_name)

    # --- edits ---

    def set_username(self, raw: str) -> None:
        self._draft.username = normalize_username(raw)
        self._changed("username")

    def set_character(self, character_id: int) -> None:
        self._draft.character = character_id
        self._changed("character")

    def set_emu_chat(self, emu_chat: bool) -> None:
        self._draft.emu_chat = bool(emu_chat)
        self._changed("emu_chat")

    def set_global_hotkeys_enabled(self, enabled: bool) -> None:
        self._draft.global_hotkeys_enabled = bool(enabled)
        self._changed("global_hotkeys_enabled")

    def set_hotkey_binding(self, shortcut: HotkeyShortcut | str, key: Optional[str] = None) -> None:
        """Bind `key` to `shortcut`, or unbind it when key is None/empty."""
        shortcut = HotkeyShortcut(shortcut)
        bindings = dict(self._draft.hotkey_bindings)
        bindings[shortcut] = [key] if key else []
        self._draft.hotkey_bindings = bindings
        self._changed("hotkey_bindings")

    def unbind_all(self) -> None:
        self._draft.hotkey_bindings = empty_hotkey_bindings()
        self._changed("hotkey_bindings")

    def toggle_cycling(self, index: int) -> None:
        self._draft.character_cycling_order = cycling_order.toggle(
            self._draft.character_cycling_order, index
        )
        self._changed("character_cycling_order")

    def reorder_cycling(self, old_index: int, new_index: int) -> None:
        self._draft.character_cycling_order = cycling_order.reorder(
            self._draft.character_cycling_order, old_index, new_index
        )
        self._changed("character_cycling_order")

    def set_all_cycling(self, on: bool) -> None:
        self._draft.character_cycling_order = cycling_order.set_all(
            self._draft.character_cycling_order, on
        )
        self._changed("character_cycling_order")

    def set_device_selection(self, device_id: Optional[str]) -> None:
        """Record the chosen device and make it the active one before returning."""
        device_id = device_id or None
        if self._devices is not None:
            device = next(
                (d for d in self._devices.connected_devices() if d is not None and d.id == device_id),
                None,
            )
            self._devices.set_active_device(device)
        self._draft.gamepad_id = device_id
        self._changed("gamepad_id")

    # --- external changes ---

    def on_committed_character_changed(self, character: int) -> None:
        """Committed character changed elsewhere: follow it, keep every other edit."""
        # Our own store.save echoes the new character back while commit() runs
        if self._committing or character == self._committed.character:
            return
        self._committed = replace(self._committed, character=character)
        self._draft.character = character
        self._changed("character")

    # --- commit ---

    def commit(self) -> bool:
        """Validate and publish the draft. Returns False (no side effects) when invalid."""
        try:
            username = validate_username(self._draft.username)
        except SettingsValidationError as e:
            self.validation_message = str(e)
            logger.info(f"Settings not saved: {e}")
            self._changed("validation_message")
            return False
        committed = self._draft.copy()
        committed.username = username

        self._committing = True
        try:
            self._store.save(committed)
            self._session.player_update(committed.username, committed.character)
            self._session.change_emu_chat(committed.emu_chat)
            self._session.change_hotkey_bindings(
                committed.hotkey_bindings, committed.global_hotkeys_enabled
            )
            self._session.change_character_cycling_order(committed.character_cycling_order)
        finally:
            self._committing = False
        self.validation_message = ""
        logger.info(f"Settings committed for {committed.username!r}")

        self._committed = committed
        self._draft = committed.copy()
        if self._on_saved is not None:
            self._on_saved(SAVED_MESSAGE)
        self._changed("committed")
        return True
