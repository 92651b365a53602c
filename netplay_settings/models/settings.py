from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

MIN_LENGTH_USERNAME = 3
MAX_LENGTH_USERNAME = 24


class Character(Enum):
    MARIO = 0
    LUIGI = 1
    YOSHI = 2
    WARIO = 3
    PEACH = 4
    TOAD = 5
    WALUIGI = 6
    ROSALINA = 7
    SONIC = 8
    KNUCKLES = 9
    GOOMBA = 10
    KIRBY = 11

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


CHARACTER_COUNT = len(Character)


class HotkeyShortcut(str, Enum):
    """Bindable actions: one selector per character plus previous/next cycling."""
    MARIO = "0"
    LUIGI = "1"
    YOSHI = "2"
    WARIO = "3"
    PEACH = "4"
    TOAD = "5"
    WALUIGI = "6"
    ROSALINA = "7"
    SONIC = "8"
    KNUCKLES = "9"
    GOOMBA = "10"
    KIRBY = "11"
    PREVIOUS_CHARACTER = "previousCharacter"
    NEXT_CHARACTER = "nextCharacter"

    @property
    def character_id(self) -> Optional[int]:
        """Character selected by this shortcut, None for previous/next."""
        if self.value.isdigit():
            return int(self.value)
        return None

    @classmethod
    def for_character(cls, character_id: int) -> HotkeyShortcut:
        return cls(str(character_id))


def empty_hotkey_bindings() -> dict[HotkeyShortcut, list[str]]:
    return {shortcut: [] for shortcut in HotkeyShortcut}


@dataclass
class CyclingEntry:
    """One position in the character cycling order."""
    character_id: int
    on: bool = True

    def to_dict(self) -> dict:
        return {"character_id": self.character_id, "on": self.on}


def default_cycling_order() -> list[CyclingEntry]:
    return [CyclingEntry(c.value, True) for c in Character]


def _parse_hotkey_bindings(raw: object) -> dict[HotkeyShortcut, list[str]]:
    bindings = empty_hotkey_bindings()
    if not isinstance(raw, dict):
        return bindings
    for key, value in raw.items():
        try:
            shortcut = HotkeyShortcut(str(key))
        except ValueError:
            continue
        if isinstance(value, str):
            value = [value]
        keys = [str(k) for k in list(value or []) if k]
        # Only the first key of a shortcut is ever used
        bindings[shortcut] = keys[:1]
    return bindings


def _parse_cycling_order(raw: object) -> list[CyclingEntry]:
    if not isinstance(raw, list):
        return default_cycling_order()
    order: list[CyclingEntry] = []
    seen: set[int] = set()
    for item in raw:
        if not isinstance(item, dict):
            continue
        cid = item.get("character_id", item.get("characterId"))
        if not isinstance(cid, int) or isinstance(cid, bool):
            continue
        if cid < 0 or cid >= CHARACTER_COUNT or cid in seen:
            continue
        seen.add(cid)
        order.append(CyclingEntry(cid, bool(item.get("on", True))))
    for c in Character:
        if c.value not in seen:
            order.append(CyclingEntry(c.value, True))
    return order


@dataclass
class SaveData:
    """Committed user settings, as persisted and as seeded into the editor."""
    username: str = ""
    character: int = Character.MARIO.value
    emu_chat: bool = False
    global_hotkeys_enabled: bool = False
    hotkey_bindings: dict[HotkeyShortcut, list[str]] = field(default_factory=empty_hotkey_bindings)
    character_cycling_order: list[CyclingEntry] = field(default_factory=default_cycling_order)
    # Selected gamepad id; None = no gamepad
    gamepad_id: Optional[str] = None

    def copy(self) -> SaveData:
        """Deep copy; drafts and committed values never share mutable parts."""
        return SaveData(
            username=self.username,
            character=self.character,
            emu_chat=self.emu_chat,
            global_hotkeys_enabled=self.global_hotkeys_enabled,
            hotkey_bindings={s: list(keys) for s, keys in self.hotkey_bindings.items()},
            character_cycling_order=[
                CyclingEntry(e.character_id, e.on) for e in self.character_cycling_order
            ],
            gamepad_id=self.gamepad_id,
        )

    @classmethod
    def from_dict(cls, data: dict) -> SaveData:
        character = data.get("character", Character.MARIO.value)
        if not isinstance(character, int) or not 0 <= character < CHARACTER_COUNT:
            character = Character.MARIO.value
        gamepad_id = data.get("gamepad_id", data.get("gamepadId"))
        return cls(
            username=str(data.get("username", "") or ""),
            character=character,
            emu_chat=bool(data.get("emu_chat", data.get("emuChat", False))),
            global_hotkeys_enabled=bool(
                data.get("global_hotkeys_enabled", data.get("globalHotkeysEnabled", False))
            ),
            hotkey_bindings=_parse_hotkey_bindings(
                data.get("hotkey_bindings", data.get("hotkeyBindings"))
            ),
            # "characterCylingOrder" is the legacy (misspelled) key from older saves
            character_cycling_order=_parse_cycling_order(
                data.get(
                    "character_cycling_order",
                    data.get("characterCyclingOrder", data.get("characterCylingOrder")),
                )
            ),
            gamepad_id=str(gamepad_id) if gamepad_id else None,
        )

    def to_dict(self) -> dict:
        """Serialize to dict for the JSON settings file (round-trip with from_dict)."""
        return {
            "username": self.username,
            "character": self.character,
            "emu_chat": self.emu_chat,
            "global_hotkeys_enabled": self.global_hotkeys_enabled,
            "hotkey_bindings": {s.value: list(keys) for s, keys in self.hotkey_bindings.items()},
            "character_cycling_order": [e.to_dict() for e in self.character_cycling_order],
            "gamepad_id": self.gamepad_id,
        }
