"""Resolve a triggered hotkey shortcut to the character it selects."""
from __future__ import annotations

from netplay_settings.editor.cycling_order import enabled_ids
from netplay_settings.models import CyclingEntry, HotkeyShortcut


def cycle_character(order: list[CyclingEntry], current: int, step: int) -> int:
    """Next (step=1) or previous (step=-1) enabled character in cycling order, wrapping.

    When the current character is not enabled, stepping starts from its position in
    the full order. Returns `current` when nothing is enabled.
    """
    enabled = enabled_ids(order)
    if not enabled:
        return current
    if current in enabled:
        return enabled[(enabled.index(current) + step) % len(enabled)]
    positions = [e.character_id for e in order]
    if current not in positions:
        return enabled[0] if step > 0 else enabled[-1]
    n = len(order)
    pos = positions.index(current)
    for offset in range(1, n + 1):
        entry = order[(pos + step * offset) % n]
        if entry.on:
            return entry.character_id
    return current


def resolve_shortcut(shortcut: HotkeyShortcut | str, current: int, order: list[CyclingEntry]) -> int:
    shortcut = HotkeyShortcut(shortcut)
    if shortcut == HotkeyShortcut.NEXT_CHARACTER:
        return cycle_character(order, current, 1)
    if shortcut == HotkeyShortcut.PREVIOUS_CHARACTER:
        return cycle_character(order, current, -1)
    return shortcut.character_id
