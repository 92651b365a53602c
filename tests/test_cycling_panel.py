import unittest

from netplay_settings.editor import cycling_order
from netplay_settings.models import default_cycling_order
from netplay_settings.ui.cycling_panel import drop_target_index


class DropTargetIndexTests(unittest.TestCase):
    def test_drop_below_original_row(self) -> None:
        # Dropped above row 3 while dragging row 0: lands at index 2
        self.assertEqual(drop_target_index(0, 3, 12), 2)

    def test_drop_above_original_row(self) -> None:
        self.assertEqual(drop_target_index(7, 2, 12), 2)

    def test_drop_past_last_row_clamps_to_end(self) -> None:
        self.assertEqual(drop_target_index(0, 12, 12), 11)
        self.assertEqual(drop_target_index(11, 12, 12), 11)

    def test_drop_on_itself_is_a_no_op_move(self) -> None:
        self.assertEqual(drop_target_index(4, 4, 12), 4)
        self.assertEqual(drop_target_index(4, 5, 12), 4)

    def test_drop_result_is_a_valid_reorder(self) -> None:
        order = default_cycling_order()
        for old in range(len(order)):
            for before in range(len(order) + 1):
                new = drop_target_index(old, before, len(order))
                result = cycling_order.reorder(order, old, new)
                self.assertEqual(len(result), len(order))


if __name__ == "__main__":
    unittest.main()
