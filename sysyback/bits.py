"""Helpers for 32-bit register masks."""

WORD_MASK = 0xFFFFFFFF


def _check(pos: int) -> None:
    if not 0 <= pos < 32:
        raise ValueError(f"bit position {pos} is outside 0..31")


def is_set(value: int, pos: int) -> bool:
    """Return whether bit ``pos`` of ``value`` is set."""
    _check(pos)
    return bool(value & (1 << pos))


def set_bit(value: int, pos: int) -> int:
    """Return ``value`` with bit ``pos`` set."""
    _check(pos)
    return (value | (1 << pos)) & WORD_MASK


def clear_bit(value: int, pos: int) -> int:
    """Return ``value`` with bit ``pos`` cleared."""
    _check(pos)
    return value & ~(1 << pos) & WORD_MASK


def all_bits() -> int:
    """Return a mask with every one of the 32 bits set."""
    return WORD_MASK