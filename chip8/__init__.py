from chip8.chip8 import Chip8
from chip8.errors import (
    Chip8Error, MemoryAccessError, NoKeySourceError, ProgramTooLargeError, RegisterIndexError,
    StackOverflowError, StackUnderflowError, UnknownOpcodeError,
)
from chip8.opcode import OpCode, OpForm, OpKind, decode

__all__ = [
    "Chip8", "Chip8Error", "MemoryAccessError", "NoKeySourceError", "ProgramTooLargeError",
    "RegisterIndexError", "StackOverflowError", "StackUnderflowError", "UnknownOpcodeError",
    "OpCode", "OpForm", "OpKind", "decode",
]
