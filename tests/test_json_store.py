import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock

from netplay_settings.models import HotkeyShortcut, SaveData
from netplay_settings.store import JsonSettingsStore


class JsonSettingsStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "config" / "settings.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_loads_defaults(self) -> None:
        store = JsonSettingsStore(self.path)
        self.assertEqual(store.load(), SaveData())
        self.assertFalse(self.path.exists())

    def test_save_then_reload_from_disk(self) -> None:
        data = SaveData(username="daisy", character=4, emu_chat=True)
        data.hotkey_bindings[HotkeyShortcut.PEACH] = ["ctrl+4"]
        JsonSettingsStore(self.path).save(data)
        self.assertEqual(JsonSettingsStore(self.path).load(), data)
        with open(self.path) as f:
            raw = json.load(f)
        self.assertEqual(raw["hotkey_bindings"]["4"], ["ctrl+4"])

    def test_load_returns_private_copies(self) -> None:
        store = JsonSettingsStore(self.path)
        first = store.load()
        first.username = "changed"
        self.assertEqual(store.load().username, "")

    def test_invalid_json_falls_back_to_defaults(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json")
        with self.assertLogs("netplay_settings.store", level="ERROR"):
            data = JsonSettingsStore(self.path).load()
        self.assertEqual(data, SaveData())

    def test_non_object_json_falls_back_to_defaults(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2, 3]")
        self.assertEqual(JsonSettingsStore(self.path).load(), SaveData())

    def test_set_character_notifies_listeners(self) -> None:
        store = JsonSettingsStore(self.path)
        listener = Mock()
        store.add_character_listener(listener)
        store.set_character(6)
        listener.assert_called_once_with(6)
        self.assertEqual(JsonSettingsStore(self.path).load().character, 6)

        store.set_character(6)
        listener.assert_called_once_with(6)

        store.remove_character_listener(listener)
        store.set_character(2)
        listener.assert_called_once_with(6)

    def test_save_notifies_only_on_character_change(self) -> None:
        store = JsonSettingsStore(self.path)
        store.load()
        listener = Mock()
        store.add_character_listener(listener)
        store.save(SaveData(username="abc"))
        listener.assert_not_called()
        store.save(SaveData(username="abc", character=9))
        listener.assert_called_once_with(9)


if __name__ == "__main__":
    unittest.main()
