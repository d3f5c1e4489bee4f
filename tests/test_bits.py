import pytest

from sysyback.bits import all_bits, clear_bit, is_set, set_bit


def test_all_bits_value():
    assert all_bits() == 0xFFFFFFFF


def test_set_then_is_set():
    value = set_bit(0, 5)
    assert is_set(value, 5)
    assert not is_set(value, 4)


@pytest.mark.parametrize("pos", [0, 7, 16, 31])
def test_set_clear_round_trip(pos):
    assert clear_bit(set_bit(0, pos), pos) == 0
    assert not is_set(clear_bit(all_bits(), pos), pos)


def test_every_bit_set_in_full_mask():
    assert all(is_set(all_bits(), pos) for pos in range(32))


def test_invalid_position_raises():
    with pytest.raises(ValueError):
        set_bit(0, 32)
    with pytest.raises(ValueError):
        is_set(0, -1)