class Chip8Error(Exception):
    """base class for every fatal condition raised by the virtual machine"""


class UnknownOpcodeError(Chip8Error, NotImplementedError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Failed to convert 0x{value:04x} to a known opcode")


class RegisterIndexError(Chip8Error, IndexError):
    pass


class StackOverflowError(Chip8Error, IndexError):
    pass


class StackUnderflowError(Chip8Error, IndexError):
    pass


class MemoryAccessError(Chip8Error, IndexError):
    pass


class ProgramTooLargeError(Chip8Error, ValueError):
    pass


class NoKeySourceError(Chip8Error):
    pass
