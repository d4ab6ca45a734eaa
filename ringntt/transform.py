import operator
from typing import Sequence, Tuple

from .bit_reverse import bit_reverse_slice
from .errors import InvalidDegreeError, InvalidLengthError
from .number_theory import is_power_of_two


class RadixTwoTransform:
    """
    Iterative radix-2 Cooley-Tukey network shared by the NTT and FFT engines.

    Subclasses provide the arithmetic through `_butterfly` and the twiddle
    tables. `twiddle_stride` is 1 when the tables hold powers of an n-th root
    of unity and 2 when they hold powers of a 2n-th root (whose square is
    the n-th root the network runs on).
    """

    twiddle_stride = 1

    def __init__(self, n: int, verbose: bool = False):
        if not is_power_of_two(n):
            raise InvalidDegreeError(f"Degree n = {n} must be a power of two >= 2")
        self.n = operator.index(n)
        self.log_n = n.bit_length() - 1
        self.verbose = verbose

    def _check_length(self, values: Sequence) -> None:
        if len(values) != self.n:
            raise InvalidLengthError(f"Input must have length {self.n}, got {len(values)}")

    def _butterfly(self, even, odd, twiddle) -> Tuple:
        """Return (even + twiddle * odd, even - twiddle * odd)."""
        raise NotImplementedError

    def _network(self, values: Sequence, twiddles: Sequence):
        """Bit-reverse values, then run log2(n) butterfly stages on the copy."""
        if len(values) != len(twiddles):
            raise InvalidLengthError(
                f"Input length {len(values)} does not match twiddle table length {len(twiddles)}")

        result = bit_reverse_slice(values)

        for stage in range(self.log_n):
            half = 1 << stage
            size = half << 1
            step = (self.n // size) * self.twiddle_stride

            for j in range(half):
                twiddle = twiddles[j * step]
                for start in range(j, self.n, size):
                    result[start], result[start + half] = self._butterfly(
                        result[start], result[start + half], twiddle)

            if self.verbose:
                print(f" -> Stage {stage + 1}/{self.log_n} (half-size {half}): {list(result)}")

        return result
