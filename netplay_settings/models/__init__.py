from netplay_settings.models.settings import (
    CHARACTER_COUNT,
    MAX_LENGTH_USERNAME,
    MIN_LENGTH_USERNAME,
    Character,
    CyclingEntry,
    HotkeyShortcut,
    SaveData,
    default_cycling_order,
    empty_hotkey_bindings,
)

__all__ = [
    "CHARACTER_COUNT",
    "MAX_LENGTH_USERNAME",
    "MIN_LENGTH_USERNAME",
    "Character",
    "CyclingEntry",
    "HotkeyShortcut",
    "SaveData",
    "default_cycling_order",
    "empty_hotkey_bindings",
]
