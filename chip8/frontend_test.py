import os
import unittest

os.environ["SDL_VIDEODRIVER"] = "dummy"     # no window needed, only the event queue
import pygame

from chip8.chip8 import Chip8
from chip8.frontend import Keyboard, key_identifier


def post(event_type, key):
    pygame.event.post(pygame.event.Event(event_type, key=key, mod=0, unicode="", scancode=0))


class TestKeyboard(unittest.TestCase):
    def setUp(self):
        pygame.display.init()
        pygame.display.set_mode((1, 1))
        pygame.event.clear()
        self.keyboard = Keyboard()
        self.chip = Chip8(key_source=self.keyboard, beep=None)
        self.chip.initialize()
        self.keyboard.attach(self.chip)

    def tearDown(self):
        pygame.quit()

    def test_key_identifier(self):
        self.assertEqual(key_identifier(pygame.K_1), "1")
        self.assertEqual(key_identifier(pygame.K_q), "q")

    def test_pump_presses_and_releases(self):
        post(pygame.KEYDOWN, pygame.K_w)
        self.assertTrue(self.keyboard.pump())
        self.assertTrue(self.chip.keypad.is_pressed(0x5))
        post(pygame.KEYUP, pygame.K_w)
        self.keyboard.pump()
        self.assertFalse(self.chip.keypad.is_pressed(0x5))

    def test_release_during_wait_key(self):
        # key 1 is held when the machine starts waiting and released before key q goes down
        post(pygame.KEYDOWN, pygame.K_1)
        self.keyboard.pump()
        self.assertTrue(self.chip.keypad.is_pressed(0x0))
        self.chip.load_bytes(b"\xfa\x0a")
        post(pygame.KEYUP, pygame.K_1)
        post(pygame.KEYDOWN, pygame.K_q)
        self.chip.cycle()
        self.assertEqual(self.chip.v_regs[0xA], 0x4)
        self.assertFalse(self.chip.keypad.is_pressed(0x0))
        self.assertTrue(self.chip.keypad.is_pressed(0x4))

    def test_unmapped_keys_keep_waiting(self):
        self.chip.load_bytes(b"\xfa\x0a")
        post(pygame.KEYDOWN, pygame.K_p)
        post(pygame.KEYDOWN, pygame.K_v)
        self.chip.cycle()
        self.assertEqual(self.chip.v_regs[0xA], 0xF)

    def test_quit(self):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        self.assertFalse(self.keyboard.pump())
        post(pygame.KEYDOWN, pygame.K_ESCAPE)
        with self.assertRaises(SystemExit):
            self.keyboard.poll_for_key()


if __name__ == "__main__":
    unittest.main()
