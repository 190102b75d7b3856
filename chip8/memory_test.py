import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr

from chip8.errors import MemoryAccessError, ProgramTooLargeError
from chip8.fonts import C8_FONTS
from chip8.memory import Memory


class TestMemory(unittest.TestCase):
    def test_bounds(self):
        mem = Memory()
        mem[4095] = 1
        self.assertEqual(mem[4095], 1)
        with self.assertRaises(MemoryAccessError):
            mem[4096]
        with self.assertRaises(MemoryAccessError):
            mem[-1] = 0
        with self.assertRaises(MemoryAccessError):
            mem.read_word(4095)

    def test_byte_values(self):
        with self.assertRaises(ValueError):
            Memory()[0] = 256

    def test_fonts(self):
        mem = Memory()
        mem.load_fonts()
        self.assertEqual(len(C8_FONTS), 80)
        self.assertEqual([mem[i] for i in range(80)], C8_FONTS)

    def test_load_bytes(self):
        mem = Memory()
        mem.load_bytes(b"\x6a\x05")
        self.assertEqual(mem.read_word(0x200), 0x6A05)

    def test_program_too_large(self):
        with self.assertRaises(ProgramTooLargeError):
            Memory().load_bytes(bytes(4096 - 0x200 + 1))

    def test_load_rom(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "rom.ch8")
            with open(path, "wb") as f:
                f.write(b"\x00\xe0")
            mem = Memory()
            self.assertTrue(mem.load_rom(path))
            self.assertEqual(mem.read_word(0x200), 0x00E0)

    def test_unreadable_rom_is_reported(self):
        mem = Memory()
        err = io.StringIO()
        with redirect_stderr(err):
            self.assertFalse(mem.load_rom("/does/not/exist.ch8"))
        self.assertIn("empty program", err.getvalue())
        self.assertEqual(mem.read_word(0x200), 0)


if __name__ == "__main__":
    unittest.main()
