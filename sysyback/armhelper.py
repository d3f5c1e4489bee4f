"""Helpers for ARM immediate operands and instruction emission."""

from __future__ import annotations

import struct
from typing import Callable

_MASK = 0xFFFFFFFF


def bitcast_to_uint(value: float) -> int:
    """Reinterpret a single-precision float as its 32-bit pattern."""
    return struct.unpack("<I", struct.pack("<f", value))[0]


def _rotl(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & _MASK if amount else value


def is_immediate(value: int) -> bool:
    """Whether ``value`` fits an ARM data-processing immediate."""
    word = value & _MASK
    return any(_rotl(word, rot) <= 0xFF for rot in range(0, 32, 2))


def divide_into_immediates(value: int) -> list[int]:
    """Split ``value`` into immediates whose sum is ``value``."""
    rest = value & _MASK
    parts = []
    while rest:
        low = (rest & -rest).bit_length() - 1
        shift = low - low % 2
        chunk = rest & (0xFF << shift)
        parts.append(chunk)
        rest ^= chunk
    return parts


def is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def log2(value: int) -> int:
    """Floor of the base-2 logarithm of a positive integer."""
    if value <= 0:
        raise ValueError(f"log2 of non-positive value {value}")
    return value.bit_length() - 1


def count_lines(text: str) -> int:
    """Number of line breaks in ``text``."""
    return text.count("\n")


def is_ldr_str_immediate(value: int) -> bool:
    """Whether ``value`` fits the offset of an ldr/str instruction."""
    return -4095 <= value <= 4095


def emit_immediate_with_check(
    emitln: Callable[[str], None],
    operation: str,
    operand1: str,
    operand2: str,
    imm: int,
    suffix: str = "",
) -> bool:
    """Emit ``operation`` with an immediate if it can be encoded.

    Only ``add`` and ``sub`` are supported; a negative immediate is
    emitted with the opposite operation. Returns False, emitting
    nothing, when the immediate cannot be encoded.
    """
    opposite = {"add": "sub", "sub": "add"}
    if operation not in opposite:
        raise ValueError(f"unsupported immediate operation '{operation}'")
    if is_immediate(imm):
        emitln(f"{operation}{suffix} {operand1}, {operand2}, #{imm}")
        return True
    if is_immediate(-imm):
        emitln(f"{opposite[operation]}{suffix} {operand1}, {operand2}, #{-imm}")
        return True
    return False