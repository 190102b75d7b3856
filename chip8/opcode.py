from collections import defaultdict
from enum import Enum

from chip8.config import DEBUG
from chip8.errors import UnknownOpcodeError
from chip8.nibble import split_word, to_hex_char


class OpKind(Enum):
    """coarse classification of an instruction, used for telemetry only"""
    ASSIGNMENT = "assignment"
    BCD = "bcd"
    BIT_OP = "bit-op"
    CALL = "call"
    CONDITIONAL = "conditional"
    CONSTANT = "constant"
    DISPLAY = "display"
    FLOW = "flow"
    KEY_OP = "key-op"
    MATH = "math"
    MEMORY = "memory"
    RANDOM = "random"
    SOUND = "sound"
    TIMER = "timer"


class OpForm(Enum):
    """
    the 35 instruction forms, each value is the template the form is matched against
    hex digits in a template are literal, X/Y/N are wildcards:
    NNN: address, NN: 8-bit constant, N: 4-bit constant, X and Y: register identifiers
    """
    CALL_MACHINE_ROUTINE = "0NNN"
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1NNN"
    CALL = "2NNN"
    SKIP_EQ_IMM = "3XNN"
    SKIP_NE_IMM = "4XNN"
    SKIP_EQ_REG = "5XYN"       # matched on the leading digit only
    SET_IMM = "6XNN"
    ADD_IMM = "7XNN"
    SET_REG = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_REG = "8XY4"
    SUB_REG = "8XY5"
    SHR = "8XY6"
    SUBN_REG = "8XY7"
    SHL = "8XYE"
    SKIP_NE_REG = "9XY0"
    SET_ADDRESS = "ANNN"
    JUMP_PLUS_V0 = "BNNN"
    RAND = "CXNN"
    DRAW = "DXYN"
    SKIP_IF_PRESSED = "EX9E"
    SKIP_IF_NOT_PRESSED = "EXA1"
    READ_DELAY = "FX07"
    WAIT_KEY = "FX0A"
    SET_DELAY = "FX15"
    SET_SOUND = "FX18"
    ADD_TO_ADDRESS = "FX1E"
    FONT_ADDRESS = "FX29"
    STORE_BCD = "FX33"
    STORE_REGS = "FX55"
    LOAD_REGS = "FX65"


KINDS = {
    OpForm.CALL_MACHINE_ROUTINE: OpKind.CALL,
    OpForm.CLEAR_SCREEN: OpKind.DISPLAY,
    OpForm.RETURN: OpKind.FLOW,
    OpForm.JUMP: OpKind.FLOW,
    OpForm.CALL: OpKind.FLOW,
    OpForm.SKIP_EQ_IMM: OpKind.CONDITIONAL,
    OpForm.SKIP_NE_IMM: OpKind.CONDITIONAL,
    OpForm.SKIP_EQ_REG: OpKind.CONDITIONAL,
    OpForm.SET_IMM: OpKind.CONSTANT,
    OpForm.ADD_IMM: OpKind.CONSTANT,
    OpForm.SET_REG: OpKind.ASSIGNMENT,
    OpForm.OR: OpKind.BIT_OP,
    OpForm.AND: OpKind.BIT_OP,
    OpForm.XOR: OpKind.BIT_OP,
    OpForm.ADD_REG: OpKind.MATH,
    OpForm.SUB_REG: OpKind.MATH,
    OpForm.SHR: OpKind.BIT_OP,
    OpForm.SUBN_REG: OpKind.MATH,
    OpForm.SHL: OpKind.BIT_OP,
    OpForm.SKIP_NE_REG: OpKind.CONDITIONAL,
    OpForm.SET_ADDRESS: OpKind.MEMORY,
    OpForm.JUMP_PLUS_V0: OpKind.FLOW,
    OpForm.RAND: OpKind.RANDOM,
    OpForm.DRAW: OpKind.DISPLAY,
    OpForm.SKIP_IF_PRESSED: OpKind.KEY_OP,
    OpForm.SKIP_IF_NOT_PRESSED: OpKind.KEY_OP,
    OpForm.READ_DELAY: OpKind.TIMER,
    OpForm.WAIT_KEY: OpKind.KEY_OP,
    OpForm.SET_DELAY: OpKind.TIMER,
    OpForm.SET_SOUND: OpKind.SOUND,
    OpForm.ADD_TO_ADDRESS: OpKind.MEMORY,
    OpForm.FONT_ADDRESS: OpKind.MEMORY,
    OpForm.STORE_BCD: OpKind.BCD,
    OpForm.STORE_REGS: OpKind.MEMORY,
    OpForm.LOAD_REGS: OpKind.MEMORY,
}


def _build_table():
    """group templates by their leading digit, most specific first"""
    # WATCH OUT: order is important!!!
    # 00E0 and 00EE must be tried before the 0NNN catch-all
    table = defaultdict(list)
    for form in OpForm:
        table[form.value[0]].append(form)
    for forms in table.values():
        forms.sort(key=lambda f: sum(c in "NXY" for c in f.value))
    return dict(table)


TABLE = _build_table()


def _matches(template, digits):
    return all(t in "NXY" or t == d for t, d in zip(template, digits))


class OpCode:
    """a decoded instruction word, operand fields are extracted once here"""
    __slots__ = ("raw", "form", "kind")

    def __init__(self, raw, form):
        self.raw = raw
        self.form = form
        self.kind = KINDS[form]

    @property
    def x(self):
        return (self.raw & 0x0F00) >> 8

    @property
    def y(self):
        return (self.raw & 0x00F0) >> 4

    @property
    def n(self):
        return self.raw & 0x000F

    @property
    def nn(self):
        return self.raw & 0x00FF

    @property
    def nnn(self):
        return self.raw & 0x0FFF

    def __eq__(self, other):
        if not isinstance(other, OpCode):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self):
        return hash(self.raw)

    def __repr__(self):
        return f"OpCode(raw=0x{self.raw:04x}, form={self.form.name}, kind={self.kind.name})"


def hex_digits(word):
    """render a word as its four upper case hex digits"""
    return "".join(to_hex_char(n) for n in split_word(word))


def decode(word):
    """classify a 16-bit instruction word, raise UnknownOpcodeError when no form matches"""
    digits = hex_digits(word)
    if DEBUG: print(f"opcode: 0x{word:04x}", end="    ")
    for form in TABLE.get(digits[0], ()):
        if _matches(form.value, digits):
            return OpCode(word, form)
    raise UnknownOpcodeError(word)
