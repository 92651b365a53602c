"""Session sink used when no netplay connection is available."""
from __future__ import annotations

import logging

from netplay_settings.models import CyclingEntry, HotkeyShortcut

logger = logging.getLogger(__name__)

NOT_CONNECTED_MESSAGE = "Not connected to a netplay session"


class OfflineSessionSync:
    """Accepts session updates and logs them; reports itself as disconnected."""

    def __init__(self) -> None:
        self.connection_error = NOT_CONNECTED_MESSAGE

    def player_update(self, username: str, character_id: int) -> None:
        logger.info("Player update (offline): username=%s character=%s", username, character_id)

    def change_emu_chat(self, emu_chat: bool) -> None:
        logger.debug("Emu chat (offline): %s", emu_chat)

    def change_hotkey_bindings(
        self,
        hotkey_bindings: dict[HotkeyShortcut, list[str]],
        global_hotkeys_enabled: bool,
    ) -> None:
        bound = {s.value: keys[0] for s, keys in hotkey_bindings.items() if keys}
        logger.debug(
            "Hotkey bindings (offline): global=%s bound=%s", global_hotkeys_enabled, bound
        )

    def change_character_cycling_order(self, character_cycling_order: list[CyclingEntry]) -> None:
        logger.debug(
            "Cycling order (offline): %s",
            [(e.character_id, e.on) for e in character_cycling_order],
        )
