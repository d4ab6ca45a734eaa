import numpy as np
import pytest

from ringntt.bit_reverse import bit_reverse_indices, bit_reverse_number, bit_reverse_slice
from ringntt.errors import LengthNotPowerOfTwoError


@pytest.mark.parametrize("value, width, expected", [
    (100, 7, 19),     # 0b1100100 -> 0b0010011
    (100, 10, 152),   # 0b0001100100 -> 0b0010011000
    (100, 12, 608),   # 0b000001100100 -> 0b001001100000
    (9, 6, 36),
    (0, 5, 0),
    (1, 1, 1),
])
def test_bit_reverse_number(value, width, expected):
    assert bit_reverse_number(value, width) == expected


def test_bit_reverse_number_is_self_inverse():
    for width in range(1, 10):
        for value in range(1 << width):
            assert bit_reverse_number(bit_reverse_number(value, width), width) == value


@pytest.mark.parametrize("sequence, expected", [
    ([0, 1, 2, 3, 4, 5, 6, 7], [0, 4, 2, 6, 1, 5, 3, 7]),
    (list(range(16)), [0, 8, 4, 12, 2, 10, 6, 14, 1, 9, 5, 13, 3, 11, 7, 15]),
    ([0, 1, 4, 5], [0, 4, 1, 5]),
    (["a", "b"], ["a", "b"]),
])
def test_bit_reverse_slice(sequence, expected):
    assert bit_reverse_slice(sequence) == expected


def test_bit_reverse_slice_is_involution():
    values = [11, 22, 33, 44, 55, 66, 77, 88]
    assert bit_reverse_slice(bit_reverse_slice(values)) == values


def test_bit_reverse_slice_returns_new_list():
    values = [1, 2, 3, 4]
    result = bit_reverse_slice(values)
    result[0] = 99
    assert values == [1, 2, 3, 4]


def test_bit_reverse_slice_on_array():
    values = np.arange(8) * 1.5 + 0.5j
    result = bit_reverse_slice(values)

    assert isinstance(result, np.ndarray)
    np.testing.assert_array_equal(result, values[[0, 4, 2, 6, 1, 5, 3, 7]])
    np.testing.assert_array_equal(bit_reverse_slice(result), values)
    assert not np.shares_memory(result, values)


@pytest.mark.parametrize("length", [0, 1, 3, 6, 12])
def test_bit_reverse_slice_rejects_other_lengths(length):
    with pytest.raises(LengthNotPowerOfTwoError):
        bit_reverse_slice(list(range(length)))


def test_bit_reverse_indices():
    assert bit_reverse_indices(4).tolist() == [0, 2, 1, 3]
    indices = bit_reverse_indices(256)
    assert indices[1] == 128
    assert indices[128] == 1
    assert sorted(indices.tolist()) == list(range(256))
