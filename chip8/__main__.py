import argparse
import sys

import pygame

from chip8 import frontend
from chip8.chip8 import Chip8
from chip8.config import CLOCK_SPEED, DEFAULT_ROM, SCALE
from chip8.errors import Chip8Error


def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 virtual machine")
    parser.add_argument("-f", "--file", "-p", "--program", dest="file", default=DEFAULT_ROM,
                        help="input rom file (default: %(default)s)")
    parser.add_argument("-s", "--speed", type=int, default=CLOCK_SPEED, help="cycles per second")
    parser.add_argument("--scale", type=int, default=SCALE, help="window pixels per CHIP-8 pixel")
    parser.add_argument("--text", action="store_true", help="also print every frame on the terminal")
    return parser.parse_args(argv)


# ******************** ENTRY POINT SECTION
def main(argv=None):
    args = get_args(argv)
    # pygame initialization
    pygame.init()
    clock = pygame.time.Clock()
    pygame.display.set_caption(args.file.split('/')[-1])
    # IO
    display = frontend.Display(s=args.scale, echo=args.text)
    keyboard = frontend.Keyboard()
    # CPU
    chip = Chip8(renderer=display, key_source=keyboard, beep=frontend.beep)
    keyboard.attach(chip)
    chip.load_program(args.file)
    chip.initialize()
    # emulation loop
    try:
        while keyboard.pump():
            # cycles per second
            clock.tick(args.speed)
            chip.cycle()    # emulate one machine cycle (fetch, decode, execute, update timers, draw)
    except Chip8Error as e:
        sys.exit(f"********** THE EMULATOR CRASHED: {e}\n********** WITH THE FOLLOWING STATE\n{chip}")
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
