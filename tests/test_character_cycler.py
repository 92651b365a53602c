import unittest

from netplay_settings.automation.character_cycler import cycle_character, resolve_shortcut
from netplay_settings.models import CyclingEntry, HotkeyShortcut


class CharacterCyclerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.order = [
            CyclingEntry(4, True),
            CyclingEntry(0, False),
            CyclingEntry(7, True),
            CyclingEntry(2, True),
        ]

    def test_next_follows_cycling_order_and_wraps(self) -> None:
        self.assertEqual(cycle_character(self.order, 4, 1), 7)
        self.assertEqual(cycle_character(self.order, 7, 1), 2)
        self.assertEqual(cycle_character(self.order, 2, 1), 4)

    def test_previous_wraps(self) -> None:
        self.assertEqual(cycle_character(self.order, 4, -1), 2)

    def test_disabled_current_steps_from_its_position(self) -> None:
        self.assertEqual(cycle_character(self.order, 0, 1), 7)
        self.assertEqual(cycle_character(self.order, 0, -1), 4)

    def test_current_missing_from_order(self) -> None:
        self.assertEqual(cycle_character(self.order, 11, 1), 4)
        self.assertEqual(cycle_character(self.order, 11, -1), 2)

    def test_nothing_enabled_keeps_current(self) -> None:
        order = [CyclingEntry(e.character_id, False) for e in self.order]
        self.assertEqual(cycle_character(order, 7, 1), 7)

    def test_resolve_shortcut(self) -> None:
        self.assertEqual(resolve_shortcut("9", 4, self.order), 9)
        self.assertEqual(resolve_shortcut(HotkeyShortcut.NEXT_CHARACTER, 4, self.order), 7)
        self.assertEqual(resolve_shortcut("previousCharacter", 4, self.order), 2)


if __name__ == "__main__":
    unittest.main()
