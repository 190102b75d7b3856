import unittest

from chip8.screen import Screen


class TestScreen(unittest.TestCase):
    def test_row_major_layout(self):
        screen = Screen()
        screen.write_pixel(3, 2, True)
        self.assertTrue(screen.buffer[3 + 2 * 64])
        self.assertTrue(screen.read_pixel(3, 2))

    def test_flip(self):
        screen = Screen()
        self.assertFalse(screen.flip_pixel(0, 0))
        self.assertTrue(screen.read_pixel(0, 0))
        self.assertTrue(screen.flip_pixel(0, 0))
        self.assertFalse(screen.read_pixel(0, 0))

    def test_clear(self):
        screen = Screen()
        screen.write_pixel(63, 31, True)
        screen.clear()
        self.assertEqual(len(screen.buffer), 2048)
        self.assertFalse(any(screen.buffer))

    def test_out_of_bounds(self):
        with self.assertRaises(ValueError):
            Screen().read_pixel(64, 0)
        with self.assertRaises(ValueError):
            Screen().write_pixel(0, 32, True)

    def test_text_rendering(self):
        screen = Screen()
        screen.write_pixel(1, 0, True)
        lines = str(screen).split("\n")
        self.assertEqual(len(lines), 32)
        self.assertEqual(lines[0], " *" + " " * 62)


if __name__ == "__main__":
    unittest.main()
