import enum
from itertools import product

import pytest

from sysyback.enumswitch import (
    crc32_hash,
    enum_for_each,
    enum_fuse,
    enum_switch,
    fnv1a_hash,
    format_enum,
    parse_enum,
)


class Color(enum.Enum):
    RED = 0
    GREEN = 1
    BLUE = 2


class Shape(enum.Enum):
    SQUARE = 0
    CIRCLE = 1


class Perm(enum.Flag):
    R = 1
    W = 2
    X = 4


def test_crc32_check_value():
    assert crc32_hash("123456789") == 0xCBF43926


def test_crc32_empty_and_bytes():
    assert crc32_hash("") == 0
    assert crc32_hash(b"RED") == crc32_hash("RED")


def test_fnv1a_empty_is_offset_basis():
    assert fnv1a_hash("") == 2166136261


def test_fnv1a_distinguishes_names_and_fits_word():
    hashes = {fnv1a_hash(m.name) for m in Color}
    assert len(hashes) == 3
    assert all(0 <= h <= 0xFFFFFFFF for h in hashes)


def test_hash_rejects_non_text():
    with pytest.raises(TypeError):
        crc32_hash(12)


def test_switch_by_member_int_and_name():
    assert enum_switch(lambda m: m.name, Color, Color.GREEN) == "GREEN"
    assert enum_switch(lambda m: m.name, Color, 2) == "BLUE"
    assert enum_switch(lambda m: m.name, Color, "RED") == "RED"


def test_switch_default_when_unmatched():
    assert enum_switch(lambda m: m.name, Color, "PURPLE", "none") == "none"
    assert enum_switch(lambda m: m.name, Color, 7) is None


def test_switch_wrong_member_type():
    with pytest.raises(TypeError):
        enum_switch(lambda m: m, Color, Shape.SQUARE)


def test_switch_flags_only_single_bits():
    assert enum_switch(lambda m: m, Perm, "W") is Perm.W
    assert enum_switch(lambda m: m, Perm, 3, "combo") == "combo"


def test_for_each_in_value_order():
    assert enum_for_each(Color, lambda m: m) == [Color.RED, Color.GREEN, Color.BLUE]
    assert enum_for_each(Perm, lambda m: m.name) == ["R", "W", "X"]


def test_fuse_is_bijective():
    results = {enum_fuse(c, s) for c, s in product(Color, Shape)}
    assert len(results) == len(Color) * len(Shape)
    reverse = {enum_fuse(s, c) for c, s in product(Color, Shape)}
    assert len(reverse) == len(Color) * len(Shape)


def test_fuse_first_values_are_zero():
    assert enum_fuse(Color.RED, Shape.SQUARE) == 0


def test_fuse_requires_two_members():
    with pytest.raises(ValueError):
        enum_fuse(Color.RED)
    with pytest.raises(TypeError):
        enum_fuse(Color.RED, 1)


def test_format_names_and_numbers():
    assert format_enum(Color, Color.BLUE) == "BLUE"
    assert format_enum(Color, 9) == "9"
    assert format_enum(Perm, 3) == "R|W"
    assert format_enum(Color, None) == ""


def test_parse_errors():
    with pytest.raises(ValueError):
        parse_enum(Color, "   ")
    with pytest.raises(ValueError):
        parse_enum(Color, "PURPLE")
    with pytest.raises(ValueError):
        parse_enum(Perm, "R|Q")