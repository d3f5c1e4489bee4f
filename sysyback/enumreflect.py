"""Reflection over integer-valued enumerations.

Only members whose integer value lies in ``RANGE_MIN..RANGE_MAX`` are
reflected. Reflected members are ordered by value, and aliases share
the name of the member they alias.
"""

from __future__ import annotations

import enum
from typing import Callable, Optional, Union

RANGE_MIN = -128
RANGE_MAX = 128

CharPredicate = Callable[[str, str], bool]


def _is_ident_char(c: str) -> bool:
    return ("0" <= c <= "9") or ("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_"


def pretty_name(name: str) -> str:
    """Return the trailing identifier of ``name``, or "" if there is none."""
    start = len(name)
    while start > 0 and _is_ident_char(name[start - 1]):
        start -= 1
    tail = name[start:]
    if tail and (("a" <= tail[0] <= "z") or ("A" <= tail[0] <= "Z") or tail[0] == "_"):
        return tail
    return ""


def _to_lower(c: str) -> str:
    return chr(ord(c) + 32) if "A" <= c <= "Z" else c


def case_insensitive(lhs: str, rhs: str) -> bool:
    """Compare two characters, ignoring ASCII letter case."""
    return _to_lower(lhs) == _to_lower(rhs)


def _check_enum(enum_cls: type) -> None:
    if not (isinstance(enum_cls, type) and issubclass(enum_cls, enum.Enum)):
        raise TypeError(f"{enum_cls!r} is not an enumeration type")


def _members(enum_cls: type) -> tuple:
    _check_enum(enum_cls)
    members = []
    for member in enum_cls:
        value = member.value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{enum_cls.__name__}.{member.name} does not have an integer value"
            )
        if RANGE_MIN <= value <= RANGE_MAX:
            members.append(member)
    return tuple(sorted(members, key=lambda m: m.value))


def enum_type_name(enum_cls: type) -> str:
    """The unqualified name of an enumeration type."""
    _check_enum(enum_cls)
    name = pretty_name(enum_cls.__qualname__)
    if not name:
        raise ValueError("enumeration type does not have a name")
    return name


def enum_count(enum_cls: type) -> int:
    """Number of reflected members."""
    return len(_members(enum_cls))


def enum_values(enum_cls: type) -> tuple:
    """Reflected members, ordered by value."""
    return _members(enum_cls)


def enum_names(enum_cls: type) -> tuple:
    """Names of the reflected members, ordered by value."""
    return tuple(m.name for m in _members(enum_cls))


def enum_entries(enum_cls: type) -> tuple:
    """Pairs of (member, name), ordered by value."""
    return tuple((m, m.name) for m in _members(enum_cls))


def enum_value(enum_cls: type, index: int) -> enum.Enum:
    """The reflected member at ``index``; raises IndexError if out of range."""
    members = _members(enum_cls)
    if not 0 <= index < len(members):
        raise IndexError(f"enum index {index} out of range for {enum_cls.__name__}")
    return members[index]


def enum_index(member: enum.Enum) -> Optional[int]:
    """Position of ``member`` among the reflected members, or None."""
    if not isinstance(member, enum.Enum):
        raise TypeError(f"{member!r} is not an enumeration member")
    for index, candidate in enumerate(_members(type(member))):
        if candidate is member:
            return index
    return None


def enum_name(member: enum.Enum) -> str:
    """Name of ``member``, or "" when it is not reflected."""
    index = enum_index(member)
    if index is None:
        return ""
    return _members(type(member))[index].name


def is_sparse(enum_cls: type) -> bool:
    """Whether the reflected values leave gaps between lowest and highest."""
    members = _members(enum_cls)
    if not members:
        return False
    span = members[-1].value - members[0].value + 1
    return span != len(members)


def _names_equal(lhs: str, rhs: str, predicate: Optional[CharPredicate]) -> bool:
    if predicate is None:
        return lhs == rhs
    return len(lhs) == len(rhs) and all(predicate(a, b) for a, b in zip(lhs, rhs))


def enum_cast(
    enum_cls: type,
    value: Union[str, int, enum.Enum],
    predicate: Optional[CharPredicate] = None,
) -> Optional[enum.Enum]:
    """Find the reflected member with the given name, integer or member value.

    ``predicate`` compares names character by character and is allowed
    only when ``value`` is a name. Returns None when nothing matches.
    """
    members = _members(enum_cls)
    if isinstance(value, enum.Enum):
        if not isinstance(value, enum_cls):
            raise TypeError(f"{value!r} is not a member of {enum_cls.__name__}")
        value = value.value
    if isinstance(value, str):
        for member in members:
            if _names_equal(value, member.name, predicate):
                return member
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        if predicate is not None:
            raise TypeError("a name predicate applies only to lookups by name")
        for member in members:
            if member.value == value:
                return member
        return None
    raise TypeError(f"cannot look up {enum_cls.__name__} by {type(value).__name__}")


def enum_contains(
    enum_cls: type,
    value: Union[str, int, enum.Enum],
    predicate: Optional[CharPredicate] = None,
) -> bool:
    """Whether :func:`enum_cast` finds a member for ``value``."""
    return enum_cast(enum_cls, value, predicate) is not None