import sys

from chip8.config import DEBUG, FONT_START_ADDRESS, MEMORY_SIZE, ROM_START_ADDRESS
from chip8.errors import MemoryAccessError, ProgramTooLargeError
from chip8.fonts import C8_FONTS


# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    def __init__(self):
        self.inner = bytearray(MEMORY_SIZE)

    def _check(self, address):
        if not 0 <= address < MEMORY_SIZE:
            raise MemoryAccessError(f"Address 0x{address:04x} is outside of the 4KB address space")

    def __len__(self):
        return MEMORY_SIZE

    def __getitem__(self, address):
        self._check(address)
        return self.inner[address]

    def __setitem__(self, address, value):
        self._check(address)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Memory cells hold a single byte, got {value}")
        self.inner[address] = value

    def read_word(self, address):
        """read two bytes big-endian, as instructions are stored"""
        return self[address] << 8 | self[address + 1]

    def load_fonts(self, offset=FONT_START_ADDRESS):
        self.inner[offset:offset+len(C8_FONTS)] = bytes(C8_FONTS)

    def load_bytes(self, rom, offset=ROM_START_ADDRESS):
        """copy a raw program image verbatim starting at offset"""
        if offset + len(rom) > MEMORY_SIZE:
            raise ProgramTooLargeError(
                f"A program of {len(rom)} bytes does not fit in memory starting at 0x{offset:03x}"
            )
        self.inner[offset:offset+len(rom)] = rom

    def load_rom(self, path):
        """
        load ROM file from user specified path
        an unreadable path leaves the program area blank and prints a notice instead of raising
        """
        try:
            with open(path, mode='rb') as f:
                rom = f.read()
        except OSError as e:
            print(f"WARNING: unable to read ROM at path {path} ({e.strerror}), starting with an empty program",
                  file=sys.stderr)
            return False
        self.load_bytes(rom)
        if DEBUG: print(f"The ROM at path {path} has been loaded successfully")
        return True
