"""
byte <-> nibble pair conversions and nibble <-> hex digit conversions

every operand of an instruction is a 4-bit field, these helpers are the only
place where such fields are split out of a byte or rendered as characters
"""
from collections import namedtuple

HEX_DIGITS = "0123456789ABCDEF"

NibblePair = namedtuple("NibblePair", ["high", "low"])


def _check_nibble(value):
    if not 0 <= value <= 0xF:
        raise ValueError(f"A nibble must be in range [0, 15], got {value}")


def split_byte(value: int) -> NibblePair:
    """split a byte in its high and low nibbles"""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"A byte must be in range [0, 255], got {value}")
    return NibblePair((value & 0xF0) >> 4, value & 0x0F)


def join_nibbles(high: int, low: int) -> int:
    """inverse of split_byte"""
    _check_nibble(high)
    _check_nibble(low)
    return high << 4 | low


def split_word(value: int) -> tuple:
    """split a 16-bit word in its four nibbles, most significant first"""
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"A word must be in range [0, 65535], got {value}")
    return split_byte(value >> 8) + split_byte(value & 0xFF)


def to_hex_char(value: int) -> str:
    _check_nibble(value)
    return HEX_DIGITS[value]


def from_hex_char(char: str) -> int:
    # lower case digits are accepted as well, rendering is always upper case
    if len(char) != 1 or char.upper() not in HEX_DIGITS:
        raise ValueError(f"{char!r} is not a hex digit")
    return HEX_DIGITS.index(char.upper())
