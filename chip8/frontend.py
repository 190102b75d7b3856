"""pygame collaborators: a window the framebuffer is rendered to and the host keyboard"""
import os
import sys

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame

from chip8.config import BACKGROUND_RGB, FOREGROUND_RGB, SCALE, SCREEN_HEIGHT, SCREEN_WIDTH


class Display:
    """render sink, draws the boolean grid of a Screen on a scaled pygame window"""
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, bg_color=BACKGROUND_RGB, fg_color=FOREGROUND_RGB,
                 echo=False):
        self.w, self.h, self.scale = w, h, s
        self.background = pygame.Color(*bg_color)
        self.foreground = pygame.Color(*fg_color)
        self.echo = echo    # also print each frame on the terminal
        self.surface = pygame.display.set_mode((w * self.scale, h * self.scale))
        self.surface.fill(self.background)
        pygame.display.flip()

    def __call__(self, screen):
        self.surface.fill(self.background)
        for y, row in enumerate(screen.rows()):
            for x, pixel in enumerate(row):
                if pixel:
                    pygame.draw.rect(
                        self.surface,
                        self.foreground,
                        (x * self.scale, y * self.scale, self.scale, self.scale)
                    )
        pygame.display.flip()
        if self.echo:
            print(screen, end="\n\n")


def key_identifier(key):
    """translate a pygame key constant into the identifier used by the keypad layout"""
    return pygame.key.name(key).lower()


class Keyboard:
    """
    host keyboard backend, bound to a machine with attach()
    every key down/up event reaches the machine's keypad, both from pump() in the emulation loop
    and from poll_for_key() while the blocking wait-key instruction is pending
    """
    def __init__(self):
        self.chip = None
        self.quit_requested = False

    def attach(self, chip):
        self.chip = chip

    def _is_quit(self, event):
        return event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE)

    def _route(self, event):
        """apply a key event to the keypad, return the identifier of a key that went down"""
        if event.type == pygame.KEYDOWN:
            identifier = key_identifier(event.key)
            self.chip.key_down(identifier)
            return identifier
        if event.type == pygame.KEYUP:
            self.chip.key_up(key_identifier(event.key))
        return None

    def pump(self):
        """loop through the event queue, return False once the user asked to quit"""
        for event in pygame.event.get():
            if self._is_quit(event):
                self.quit_requested = True
            else:
                self._route(event)
        return not self.quit_requested

    def poll_for_key(self):
        event = pygame.event.wait(10)
        if self._is_quit(event):
            # nothing can interrupt a pending wait-key besides the process going away
            pygame.quit()
            sys.exit(0)
        return self._route(event)


def beep():
    # terminal bell, there is no audio synthesis
    print("\a", end="", flush=True)
