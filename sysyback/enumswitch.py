"""Hashing, dispatch, fusing and text conversion of enumeration values."""

from __future__ import annotations

import enum
import zlib
from typing import Any, Callable, Optional, Union

from .enumflags import enum_flags_cast, enum_flags_name, is_flags
from .enumreflect import enum_values

FUSE_BITS = 64
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_WORD = 0xFFFFFFFF


def _as_bytes(text: Union[str, bytes]) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    if isinstance(text, (bytes, bytearray)):
        return bytes(text)
    raise TypeError(f"cannot hash {type(text).__name__}")


def crc32_hash(text: Union[str, bytes]) -> int:
    """CRC-32 (reflected, polynomial 0xEDB88320) of ``text``."""
    return zlib.crc32(_as_bytes(text)) & _WORD


def fnv1a_hash(text: Union[str, bytes]) -> int:
    """32-bit FNV-1a hash of ``text``."""
    acc = _FNV_OFFSET
    for byte in _as_bytes(text):
        acc = ((acc ^ byte) * _FNV_PRIME) & _WORD
    return acc


def _reflected_members(enum_cls: type) -> tuple:
    """Members a switch can reach: flag bits for flags, else all reflected."""
    if not is_flags(enum_cls):
        return enum_values(enum_cls)
    members = [
        member
        for member in enum_cls
        if member.value > 0
        and member.value & (member.value - 1) == 0
        and member.value.bit_length() <= FUSE_BITS
    ]
    return tuple(sorted(members, key=lambda m: m.value))


def _find(members: tuple, candidate: Any) -> Optional[enum.Enum]:
    return next((m for m in members if m is candidate), None)


def enum_switch(
    handler: Callable[[enum.Enum], Any],
    enum_cls: type,
    value: Union[str, int, enum.Enum],
    default: Any = None,
) -> Any:
    """Call ``handler`` with the member ``value`` names and return its result.

    ``value`` may be a member, an integer or a name. When it does not
    denote exactly one reflected member, ``default`` is returned.
    """
    members = _reflected_members(enum_cls)
    if isinstance(value, enum.Enum):
        if not isinstance(value, enum_cls):
            raise TypeError(f"{value!r} is not a member of {enum_cls.__name__}")
        candidate = value
    else:
        candidate = enum_flags_cast(enum_cls, value)
    member = _find(members, candidate)
    if member is None:
        return default
    return handler(member)


def enum_for_each(enum_cls: type, handler: Callable[[enum.Enum], Any]) -> list:
    """Call ``handler`` on every reflected member in order; collect results."""
    return [handler(member) for member in _reflected_members(enum_cls)]


def _index_bits(count: int) -> int:
    return (count + 1).bit_length() - 1


def enum_fuse(*args: enum.Enum) -> Optional[int]:
    """Combine several members into one integer, bijectively.

    The last member occupies the lowest bits. Returns None when one of
    the members is not reflected.
    """
    if len(args) < 2:
        raise ValueError("enum_fuse requires at least 2 values")
    for value in args:
        if not isinstance(value, enum.Enum):
            raise TypeError(f"{value!r} is not an enumeration member")
    reflected = [_reflected_members(type(value)) for value in args]
    if sum(_index_bits(len(members)) for members in reflected) > FUSE_BITS:
        raise ValueError("enum_fuse does not work for large enums")

    fused = 0
    for value, members in reversed(list(zip(args, reflected))):
        index = next((i for i, m in enumerate(members) if m is value), None)
        if index is None:
            return None
        fused = (fused << _index_bits(len(members))) | index
    return fused


def format_enum(enum_cls: type, value: Union[int, enum.Enum, None]) -> str:
    """Text of ``value``: its (flag) name, or its integer when unnamed."""
    if value is None:
        return ""
    name = enum_flags_name(enum_cls, value)
    if name:
        return name
    return str(value.value if isinstance(value, enum.Enum) else value)


def parse_enum(enum_cls: type, text: str):
    """Read the first whitespace-separated token of ``text`` as a value.

    Raises ValueError when there is no token or it names no value.
    """
    tokens = text.split()
    if not tokens:
        raise ValueError(f"no {enum_cls.__name__} value in empty input")
    result = enum_flags_cast(enum_cls, tokens[0])
    if result is None:
        raise ValueError(f"'{tokens[0]}' is not a {enum_cls.__name__} value")
    return result