import unittest

from jotbox.picker import TargetPicker


class TargetPickerTests(unittest.TestCase):
    def test_digits_accumulate_left_to_right(self) -> None:
        picker = TargetPicker()
        picker.arm("e")
        picker.digit(4)
        picker.digit(2)
        self.assertEqual(picker.accumulated_id, 42)
        self.assertEqual(picker.prompt(), "e 42")
        self.assertEqual(picker.confirm(), ("e", 42))
        self.assertFalse(picker.armed)

    def test_digits_ignored_while_idle(self) -> None:
        picker = TargetPicker()
        picker.digit(7)
        self.assertEqual(picker.accumulated_id, 0)
        self.assertIsNone(picker.confirm())

    def test_rearm_resets_id(self) -> None:
        picker = TargetPicker()
        picker.arm("d")
        picker.digit(9)
        picker.arm("t")
        picker.digit(1)
        self.assertEqual(picker.confirm(), ("t", 1))

    def test_reset(self) -> None:
        picker = TargetPicker()
        picker.arm("d")
        picker.digit(0)
        self.assertEqual(picker.prompt(), "d 0")
        picker.reset()
        self.assertEqual(picker.prompt(), "")
        self.assertIsNone(picker.confirm())


if __name__ == "__main__":
    unittest.main()
