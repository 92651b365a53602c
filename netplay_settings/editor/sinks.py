"""Collaborators the editor talks to. Implementations live outside the editor package."""
from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from netplay_settings.models import CyclingEntry, HotkeyShortcut, SaveData


class SettingsStore(Protocol):
    """Persisted application store (committed settings)."""

    def load(self) -> SaveData: ...

    def save(self, data: SaveData) -> None: ...

    def add_character_listener(self, callback: Callable[[int], None]) -> None: ...

    def remove_character_listener(self, callback: Callable[[int], None]) -> None: ...


class SessionSync(Protocol):
    """Live session other participants observe; informed in topical groups."""

    connection_error: str

    def player_update(self, username: str, character_id: int) -> None: ...

    def change_emu_chat(self, emu_chat: bool) -> None: ...

    def change_hotkey_bindings(
        self,
        hotkey_bindings: dict[HotkeyShortcut, list[str]],
        global_hotkeys_enabled: bool,
    ) -> None: ...

    def change_character_cycling_order(
        self, character_cycling_order: list[CyclingEntry]
    ) -> None: ...


class Device(Protocol):
    id: str


class DeviceProvider(Protocol):
    """Input-device subsystem: snapshot query plus active-device command."""

    def connected_devices(self) -> Sequence[Optional[Device]]: ...

    def set_active_device(self, device: Optional[Device]) -> None: ...
