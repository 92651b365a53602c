import unittest

from netplay_settings.models import (
    CHARACTER_COUNT,
    Character,
    CyclingEntry,
    HotkeyShortcut,
    SaveData,
)


class SaveDataTests(unittest.TestCase):
    def test_defaults_cover_every_shortcut_and_character(self) -> None:
        data = SaveData()
        self.assertEqual(set(data.hotkey_bindings), set(HotkeyShortcut))
        self.assertTrue(all(keys == [] for keys in data.hotkey_bindings.values()))
        self.assertEqual(
            [e.character_id for e in data.character_cycling_order], list(range(CHARACTER_COUNT))
        )
        self.assertIsNone(data.gamepad_id)

    def test_to_dict_round_trips(self) -> None:
        data = SaveData(
            username="kirby_main",
            character=Character.KIRBY.value,
            emu_chat=True,
            global_hotkeys_enabled=True,
            gamepad_id="Xbox Controller",
        )
        data.hotkey_bindings[HotkeyShortcut.PREVIOUS_CHARACTER] = ["ctrl+q"]
        data.character_cycling_order[2] = CyclingEntry(2, False)
        self.assertEqual(SaveData.from_dict(data.to_dict()), data)

    def test_from_dict_migrates_legacy_camel_case_keys(self) -> None:
        cfg = SaveData.from_dict(
            {
                "username": "yoshi",
                "character": 2,
                "emuChat": True,
                "globalHotkeysEnabled": True,
                "hotkeyBindings": {"3": ["F"], "nextCharacter": ["e"]},
                "characterCylingOrder": [
                    {"characterId": 5, "on": False},
                    {"characterId": 0, "on": True},
                ],
                "gamepadId": "Pad",
            }
        )
        self.assertTrue(cfg.emu_chat)
        self.assertTrue(cfg.global_hotkeys_enabled)
        self.assertEqual(cfg.hotkey_bindings[HotkeyShortcut.WARIO], ["F"])
        self.assertEqual(cfg.hotkey_bindings[HotkeyShortcut.NEXT_CHARACTER], ["e"])
        self.assertEqual(cfg.hotkey_bindings[HotkeyShortcut.MARIO], [])
        self.assertEqual(cfg.character_cycling_order[0], CyclingEntry(5, False))
        self.assertEqual(cfg.character_cycling_order[1], CyclingEntry(0, True))
        self.assertEqual(len(cfg.character_cycling_order), CHARACTER_COUNT)
        self.assertEqual(cfg.gamepad_id, "Pad")

    def test_from_dict_repairs_cycling_order(self) -> None:
        cfg = SaveData.from_dict(
            {
                "character_cycling_order": [
                    {"character_id": 3, "on": False},
                    {"character_id": 3, "on": True},
                    {"character_id": 99, "on": True},
                    "junk",
                ]
            }
        )
        ids = [e.character_id for e in cfg.character_cycling_order]
        self.assertEqual(sorted(ids), list(range(CHARACTER_COUNT)))
        self.assertEqual(cfg.character_cycling_order[0], CyclingEntry(3, False))

    def test_from_dict_drops_unknown_shortcuts_and_extra_keys(self) -> None:
        cfg = SaveData.from_dict(
            {"hotkey_bindings": {"12": ["a"], "jump": ["b"], "0": ["x", "y"], "1": "z"}}
        )
        self.assertEqual(set(cfg.hotkey_bindings), set(HotkeyShortcut))
        self.assertEqual(cfg.hotkey_bindings[HotkeyShortcut.MARIO], ["x"])
        self.assertEqual(cfg.hotkey_bindings[HotkeyShortcut.LUIGI], ["z"])

    def test_from_dict_invalid_character_falls_back(self) -> None:
        self.assertEqual(SaveData.from_dict({"character": 12}).character, 0)
        self.assertEqual(SaveData.from_dict({"character": "3"}).character, 0)

    def test_copy_shares_no_mutable_parts(self) -> None:
        data = SaveData(username="abc")
        clone = data.copy()
        clone.hotkey_bindings[HotkeyShortcut.MARIO].append("m")
        clone.character_cycling_order[0].on = False
        self.assertEqual(data.hotkey_bindings[HotkeyShortcut.MARIO], [])
        self.assertTrue(data.character_cycling_order[0].on)

    def test_shortcut_character_ids(self) -> None:
        self.assertEqual(HotkeyShortcut("11").character_id, 11)
        self.assertIsNone(HotkeyShortcut.NEXT_CHARACTER.character_id)
        self.assertIs(HotkeyShortcut.for_character(7), HotkeyShortcut.ROSALINA)


if __name__ == "__main__":
    unittest.main()
