import os

# ******************** MACHINE SECTION
MEMORY_SIZE = 4096
ROM_START_ADDRESS = 0x200
FONT_START_ADDRESS = 0x000
FONT_SPRITE_SIZE = 5        # each character font is made of 5 bytes
REGISTER_COUNT = 16
STACK_SIZE = 16
ADDRESS_MASK = 0x0FFF       # I and PC are 12-bit registers
INSTRUCTION_SIZE = 0x2

# ******************** I/O SECTION
SCREEN_HEIGHT = 32
SCREEN_WIDTH = 64
# row-major physical layout, position in the string is the hex key code
KEY_LAYOUT = "1234qwerasdfzxcv"

# ******************** FRONTEND SECTION
SCALE = 15
CLOCK_SPEED = 300           # cycles per second
DEFAULT_ROM = "pong2.c8"    # used when no program is given, a missing file means an empty program
BACKGROUND_RGB = (80, 69, 155)
FOREGROUND_RGB = (136, 126, 203)

DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False
