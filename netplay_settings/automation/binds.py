"""Hotkey strings as stored in the settings file: "ctrl+shift+f", "f9", "page up".

A bind is zero or more modifiers (always written in ctrl, shift, alt order)
followed by exactly one primary key.
"""
from __future__ import annotations

from typing import NamedTuple, Optional

MODIFIERS = ("ctrl", "shift", "alt")


def _modifier_names() -> dict[str, str]:
    spellings = {"ctrl": ("ctrl", "control"), "shift": ("shift",), "alt": ("alt",)}
    names = {"alt gr": "alt", "altgr": "alt"}
    for canonical, words in spellings.items():
        for word in words:
            names[word] = canonical
            for side in ("left", "right"):
                names[f"{side} {word}"] = canonical
            # X11 style: Control_L, Shift_R
            for suffix in ("l", "r"):
                names[f"{word} {suffix}"] = canonical
    return names


_MODIFIER_NAMES = _modifier_names()

_KEY_SYNONYMS = {
    "esc": "escape",
    "return": "enter",
    "spacebar": "space",
    "ins": "insert",
    "del": "delete",
    "pgup": "page up",
    "pageup": "page up",
    "pgdn": "page down",
    "pagedown": "page down",
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
}

_ARROWS = {"up": "↑", "down": "↓", "left": "←", "right": "→"}


class Bind(NamedTuple):
    modifiers: frozenset[str]
    key: str

    def __str__(self) -> str:
        return "+".join([m for m in MODIFIERS if m in self.modifiers] + [self.key])


def normalize_key_token(token: str) -> str:
    """Canonical name of one key ("Control_L" -> "ctrl", "Esc" -> "escape")."""
    words = str(token or "").lower().replace("_", " ").split()
    name = " ".join(words)
    return _MODIFIER_NAMES.get(name) or _KEY_SYNONYMS.get(name, name)


def is_modifier_token(token: str) -> bool:
    return normalize_key_token(token) in MODIFIERS


def normalize_bind_from_parts(modifiers: set[str], primary_key: str) -> str:
    key = normalize_key_token(primary_key)
    if key == "" or is_modifier_token(key):
        return ""
    mods = {normalize_key_token(m) for m in modifiers}
    return str(Bind(frozenset(m for m in mods if m in MODIFIERS), key))


def parse_bind(bind: str) -> Optional[Bind]:
    """Split a bind string; None when it has no primary key or more than one."""
    modifiers = set()
    keys = []
    for token in str(bind or "").split("+"):
        name = normalize_key_token(token)
        if name in MODIFIERS:
            modifiers.add(name)
        elif name:
            keys.append(name)
    if len(keys) != 1:
        return None
    return Bind(frozenset(modifiers), keys[0])


def normalize_bind(bind: str) -> str:
    """'Shift + F' -> 'shift+f'; '' for anything that is not a valid bind."""
    parsed = parse_bind(bind)
    return str(parsed) if parsed else ""


def _display_token(name: str) -> str:
    if name in MODIFIERS:
        return name.capitalize()
    if name in _ARROWS:
        return _ARROWS[name]
    # f1..f12 and other short names read better in capitals
    return name.upper() if len(name) <= 3 else name.title()


def format_bind_for_display(bind: Optional[str]) -> str:
    """Hotkey button caption; "-" when unbound."""
    parsed = parse_bind(bind or "")
    if parsed is None:
        return "-"
    return "+".join(_display_token(part) for part in str(parsed).split("+"))
