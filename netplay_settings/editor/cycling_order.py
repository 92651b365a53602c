"""Position-addressed transforms over the character cycling order.

Every function returns a new list so consecutive reads never compare identical;
entries that change are new objects, untouched entries are shared.
"""
from __future__ import annotations

from dataclasses import replace

from netplay_settings.models import CyclingEntry


def toggle(order: list[CyclingEntry], index: int) -> list[CyclingEntry]:
    """Flip `on` for the entry currently at position `index`."""
    result = list(order)
    entry = result[index]
    result[index] = replace(entry, on=not entry.on)
    return result


def reorder(order: list[CyclingEntry], old_index: int, new_index: int) -> list[CyclingEntry]:
    """Move the entry at old_index to new_index (remove then insert, not swap)."""
    n = len(order)
    if not 0 <= old_index < n or not 0 <= new_index < n:
        raise IndexError(f"reorder({old_index}, {new_index}) out of range for {n} entries")
    result = list(order)
    item = result.pop(old_index)
    result.insert(new_index, item)
    return result


def set_all(order: list[CyclingEntry], on: bool) -> list[CyclingEntry]:
    return [replace(e, on=bool(on)) for e in order]


def enabled_ids(order: list[CyclingEntry]) -> list[int]:
    return [e.character_id for e in order if e.on]
