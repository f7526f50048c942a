#!/usr/bin/env python3

from .enums import intTypes


class IndexOutOfRangeError(IndexError):
    """Raised when a bit index falls outside [0, width) for its type."""


# --- Bit Pattern Adapters --- #
def to_pattern(value: int, int_type: intTypes = intTypes.INT) -> int:
    """Returns the unsigned bit pattern of a value of the given type."""
    if not int_type.min <= value <= int_type.max:
        raise ValueError(
            f"Value out of range for {int_type.name}: {value}. Min: {int_type.min} Max: {int_type.max}"
        )
    return value & int_type.mask


def from_pattern(pattern: int, int_type: intTypes = intTypes.INT) -> int:
    """Reinterprets a width-bit pattern as a value of the given type."""
    pattern &= int_type.mask
    if int_type.signed and pattern >> (int_type.width - 1):
        return pattern - (1 << int_type.width)
    return pattern


def check_index(bit_position: int, int_type: intTypes = intTypes.INT) -> int:
    """Validates a bit index against the width of the given type."""
    # bool is an int subclass, but never a meaningful index
    if isinstance(bit_position, bool) or not isinstance(bit_position, int):
        raise TypeError(f"Bit index must be an int, got: {type(bit_position).__name__}")
    if not 0 <= bit_position < int_type.width:
        raise IndexOutOfRangeError(
            f"Bit index out of range for {int_type.name}: {bit_position}. Valid: 0..{int_type.width - 1}"
        )
    return bit_position


# --- Bit Helpers --- #
def get_bit(field: int, bit_position: int, int_type: intTypes = intTypes.INT) -> bool:
    """Gets the value of a single bit at a given position."""
    check_index(bit_position, int_type)
    return ((to_pattern(field, int_type) >> bit_position) & 0x1) == 1


def toggle_bit(field: int, bit_position: int, int_type: intTypes = intTypes.INT) -> int:
    """Flips a single bit, keeping the result within the type's width."""
    check_index(bit_position, int_type)
    mask = (1 << bit_position) & int_type.mask
    return from_pattern(to_pattern(field, int_type) ^ mask, int_type)


def set_bit(
    field: int, bit_position: int, value: bool, int_type: intTypes = intTypes.INT
) -> int:
    """Sets a specific bit in a field to 1 or 0."""
    if get_bit(field, bit_position, int_type) != bool(value):
        return toggle_bit(field, bit_position, int_type)
    return field


def to_binary_string(field: int, int_type: intTypes = intTypes.INT) -> str:
    """Returns the field in binary, most significant bit first. e.g. 5 = 00000101"""
    return "".join(
        "1" if get_bit(field, i, int_type) else "0"
        for i in range(int_type.width - 1, -1, -1)
    )
