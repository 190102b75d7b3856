import unittest

from chip8.errors import NoKeySourceError
from chip8.keypad import Keypad


class ScriptedKeys:
    """key source replaying a fixed sequence, None entries mean no event yet"""
    def __init__(self, events):
        self.events = list(events)
        self.polls = 0

    def poll_for_key(self):
        self.polls += 1
        return self.events.pop(0) if self.events else None


class TestKeypad(unittest.TestCase):
    def test_layout(self):
        keypad = Keypad()
        self.assertEqual([keypad.map_key(k) for k in "1234qwerasdfzxcv"], list(range(16)))
        self.assertIsNone(keypad.map_key("p"))

    def test_press_release(self):
        keypad = Keypad()
        self.assertEqual(keypad.press("w"), 0x5)
        self.assertTrue(keypad.is_pressed(0x5))
        self.assertTrue(keypad.is_pressed(0x15))    # only the low nibble counts
        keypad.release("w")
        self.assertFalse(keypad.is_pressed(0x5))
        self.assertFalse(any(keypad.pressed))

    def test_unmapped_press_is_ignored(self):
        keypad = Keypad()
        self.assertIsNone(keypad.press("p"))
        self.assertFalse(any(keypad.pressed))

    def test_read_blocks_until_mapped_key(self):
        source = ScriptedKeys([None, "p", None, "v"])
        keypad = Keypad(source)
        self.assertEqual(keypad.read(), 0xF)
        self.assertEqual(source.polls, 4)

    def test_read_without_source(self):
        with self.assertRaises(NoKeySourceError):
            Keypad().read()


if __name__ == "__main__":
    unittest.main()
