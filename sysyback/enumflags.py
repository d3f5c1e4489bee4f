"""Reflection over enumerations used as bit flags.

An enumeration counts as a flags enumeration when it has members
whose values are single bits, and every member in the reflected
value range is zero or a single bit. Flag members are the members
whose value is a single bit below ``2**FLAG_BITS``. They are ordered by
value.
"""

from __future__ import annotations

import enum
from typing import Optional, Union

from .enumreflect import CharPredicate, enum_cast, enum_name, enum_values

FLAG_BITS = 64


def _flag_members(enum_cls: type) -> tuple:
    # enum_values validates the type and that every value is an integer.
    enum_values(enum_cls)
    members = [
        member
        for member in enum_cls
        if member.value > 0
        and member.value & (member.value - 1) == 0
        and member.value.bit_length() <= FLAG_BITS
    ]
    return tuple(sorted(members, key=lambda m: m.value))


def is_flags(enum_cls: type) -> bool:
    """Whether ``enum_cls`` is reflected as a set of bit flags."""
    flags = _flag_members(enum_cls)
    defaults = enum_values(enum_cls)
    if not flags or len(defaults) > len(flags):
        return False
    return all(m.value == 0 or m.value & (m.value - 1) == 0 for m in defaults)


def _reflected(enum_cls: type) -> tuple:
    return _flag_members(enum_cls) if is_flags(enum_cls) else enum_values(enum_cls)


def flags_or(enum_cls: type) -> int:
    """Bitwise OR of the values of every reflected member."""
    result = 0
    for member in _reflected(enum_cls):
        result |= member.value
    return result


def _as_int(enum_cls: type, value: Union[int, enum.Enum]) -> int:
    if isinstance(value, enum.Enum):
        if not isinstance(value, enum_cls):
            raise TypeError(f"{value!r} is not a member of {enum_cls.__name__}")
        return value.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"cannot use {type(value).__name__} as a flag value")
    return value


def _to_result(enum_cls: type, bits: int):
    try:
        return enum_cls(bits)
    except ValueError:
        return bits


def enum_flags_name(enum_cls: type, value: Union[int, enum.Enum]) -> str:
    """Name of ``value``; for flags, the set bits' names joined by ``|``.

    Returns "" when the value has no name or holds bits that no member
    names.
    """
    bits = _as_int(enum_cls, value)
    if not is_flags(enum_cls):
        member = enum_cast(enum_cls, bits)
        return "" if member is None else enum_name(member)

    names = []
    check = 0
    for member in _flag_members(enum_cls):
        if bits & member.value:
            check |= member.value
            names.append(member.name)
    if check != 0 and check == bits:
        return "|".join(names)
    return ""


def _is_sparse_flags(members: tuple) -> bool:
    low = members[0].value.bit_length() - 1
    high = members[-1].value.bit_length() - 1
    return high - low + 1 != len(members)


def enum_flags_cast(
    enum_cls: type,
    value: Union[str, int, enum.Enum],
    predicate: Optional[CharPredicate] = None,
):
    """Convert a name, ``|``-joined names or an integer to a value.

    For a flags enumeration the result is a member when the enumeration
    can represent the combination, otherwise the plain integer. For any
    other enumeration this is :func:`enum_cast`. Returns None when the
    input does not match.
    """
    if not is_flags(enum_cls):
        return enum_cast(enum_cls, value, predicate)

    members = _flag_members(enum_cls)
    if isinstance(value, str):
        result = 0
        rest = value
        while rest:
            part, sep, rest = rest.partition("|")
            found = enum_cast(enum_cls, part, predicate)
            if found is None or found not in members:
                found = next(
                    (
                        m
                        for m in members
                        if enum_cast(enum_cls, part, predicate) is m
                        or _names_match(part, m.name, predicate)
                    ),
                    None,
                )
            if found is None:
                return None
            result |= found.value
            if not sep:
                break
        if result != 0:
            return _to_result(enum_cls, result)
        return None

    if predicate is not None:
        raise TypeError("a name predicate applies only to lookups by name")
    bits = _as_int(enum_cls, value)

    if _is_sparse_flags(members):
        check = 0
        for member in members:
            if bits & member.value:
                check |= member.value
        if check != 0 and check == bits:
            return _to_result(enum_cls, bits)
        return None

    if members[0].value <= bits <= flags_or(enum_cls):
        return _to_result(enum_cls, bits)
    return None


def _names_match(lhs: str, rhs: str, predicate: Optional[CharPredicate]) -> bool:
    if predicate is None:
        return lhs == rhs
    return len(lhs) == len(rhs) and all(predicate(a, b) for a, b in zip(lhs, rhs))