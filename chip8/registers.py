from chip8.config import ADDRESS_MASK, REGISTER_COUNT, STACK_SIZE
from chip8.errors import RegisterIndexError, StackOverflowError, StackUnderflowError
from chip8.nibble import to_hex_char

FLAG = 0xF      # VF conventionally receives the carry/borrow/collision flag


def register_name(index):
    return f"V{to_hex_char(index)}"


class DataRegisters:
    """the 16 variable registers V0-VF, 8 bits each"""
    def __init__(self):
        self.cells = [0] * REGISTER_COUNT

    def _check(self, index):
        if not 0 <= index < REGISTER_COUNT:
            raise RegisterIndexError(f"Register index {index} out of bounds, valid range is [0, 15]")

    def __getitem__(self, index):
        self._check(index)
        return self.cells[index]

    def __setitem__(self, index, value):
        self._check(index)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"{register_name(index)} holds 8 bits, got {value}")
        self.cells[index] = value

    def __len__(self):
        return REGISTER_COUNT

    def __iter__(self):
        return iter(self.cells)

    def __repr__(self):
        return " ".join(f"{register_name(i)}={v:02x}" for i, v in enumerate(self.cells))


class AddressRegister:
    """12-bit register, every write is masked to 12 bits"""
    def __init__(self, value=0):
        self.value = value & ADDRESS_MASK

    def read(self):
        return self.value

    def write(self, value):
        self.value = value & ADDRESS_MASK

    def __repr__(self):
        return f"0x{self.value:03x}"


class ProgramCounter(AddressRegister):
    def step(self, size):
        """advance by size bytes, masked to 12 bits"""
        self.write(self.value + size)


# ********** A FIXED ARRAY OF 16 RETURN ADDRESSES AND ITS POINTER
class Stack:
    def __init__(self):
        self.slots = [0] * STACK_SIZE
        self.pointer = 0    # 0 means empty, STACK_SIZE means full

    def __len__(self):
        return self.pointer

    def push(self, address):
        if self.pointer >= STACK_SIZE:
            raise StackOverflowError("The CHIP-8 stack can contain at most 16 addresses. Limit exceeded")
        self.slots[self.pointer] = address
        self.pointer += 1

    def pop(self):
        """return the most recent address and clear its slot"""
        if self.pointer == 0:
            raise StackUnderflowError("Return with an empty CHIP-8 stack")
        self.pointer -= 1
        address = self.slots[self.pointer]
        self.slots[self.pointer] = 0
        return address

    def __repr__(self):
        return "[" + ", ".join(f"0x{a:03x}" for a in self.slots[:self.pointer]) + "]"


class Timer:
    """8-bit countdown counter, floors at zero"""
    def __init__(self, value=0):
        self.value = 0
        self.reset(value)

    def reset(self, value):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Timers hold 8 bits, got {value}")
        self.value = value

    def tick(self):
        if self.value > 0:
            self.value -= 1

    def __bool__(self):
        return self.value > 0

    def __repr__(self):
        return str(self.value)
