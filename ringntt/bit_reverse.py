from typing import Sequence, Union

import numpy as np

from .errors import LengthNotPowerOfTwoError
from .number_theory import is_power_of_two


def bit_reverse_number(value: int, width: int) -> int:
    """
    Reverse the low `width` bits of value.

    9 = 0b1001 at width 6 is 0b001001, whose reverse is 0b100100 = 36.
    """
    result = 0
    for _ in range(width):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def bit_reverse_indices(n: int) -> np.ndarray:
    """Generate bit-reversed indices for size n."""
    if not is_power_of_two(n):
        raise LengthNotPowerOfTwoError(f"Length {n} is not a power of two")
    width = n.bit_length() - 1
    return np.array([bit_reverse_number(i, width) for i in range(n)], dtype=np.int64)


def bit_reverse_slice(sequence: Union[Sequence, np.ndarray]) -> Union[list, np.ndarray]:
    """
    Reorder a sequence by the bit-reversed value of each index.

    [0, 1, 2, 3] becomes [0, 2, 1, 3]. Applying the permutation twice gives
    back the original order. Arrays come back as a new array, anything else
    as a new list.
    """
    indices = bit_reverse_indices(len(sequence))
    if isinstance(sequence, np.ndarray):
        return sequence[indices]
    return [sequence[i] for i in indices]
