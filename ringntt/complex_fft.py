from typing import Sequence, Tuple

import numpy as np

from .errors import InvalidLengthError
from .transform import RadixTwoTransform


class ComplexFFT(RadixTwoTransform):
    """
    Radix-2 FFT over the complex numbers for power-of-two lengths.

    The forward transform uses the kernel omega = exp(-2*pi*i/n), the same
    sign convention as numpy.fft.fft; the inverse uses omega^-1 and divides
    by n.
    """

    def generator(self, n: int) -> complex:
        return np.exp(-2j * np.pi / n)

    def __init__(self, n: int, verbose: bool = False):
        """
        Initialize the FFT for length n.

        Args:
            n: Transform size, a power of two
            verbose: Print every butterfly stage
        """
        super().__init__(n, verbose)

        self.omega = self.generator(n)
        self.omega_inv = np.conjugate(self.omega)

        angles = 2 * np.pi * np.arange(n) / n
        self.omega_powers = np.exp(-1j * angles)
        self.omega_inverse_powers = np.exp(1j * angles)
        self.omega_powers.setflags(write=False)
        self.omega_inverse_powers.setflags(write=False)

        if self.verbose:
            print(f"Initialized complex FFT for n={n}, omega={complex(self.omega):.6f}")

    def _butterfly(self, even: complex, odd: complex, twiddle: complex) -> Tuple[complex, complex]:
        t = twiddle * odd
        return even + t, even - t

    def forward(self, samples: Sequence[complex]) -> np.ndarray:
        """Compute the forward FFT of n samples."""
        self._check_length(samples)
        values = np.array(samples, dtype=complex)

        if self.verbose:
            print(f" -> Input: {values}")

        result = self._network(values, self.omega_powers)

        if self.verbose:
            print(f" <- Output: {result}")
        return result

    def inverse(self, spectrum: Sequence[complex]) -> np.ndarray:
        """Compute the inverse FFT, including the 1/n scale."""
        self._check_length(spectrum)
        values = np.array(spectrum, dtype=complex)

        if self.verbose:
            print(f" -> Input: {values}")

        result = self._network(values, self.omega_inverse_powers) / self.n

        if self.verbose:
            print(f" <- Output: {result}")
        return result

    def pointwise_multiply(self, a: Sequence[complex], b: Sequence[complex]) -> np.ndarray:
        """Multiply two spectra element-wise."""
        self._check_length(a)
        if len(b) != len(a):
            raise InvalidLengthError(f"Vectors must have equal length, got {len(a)} and {len(b)}")
        return np.asarray(a, dtype=complex) * np.asarray(b, dtype=complex)

    def convolve(self, a: Sequence[complex], b: Sequence[complex]) -> np.ndarray:
        """Cyclic convolution of two length-n sequences."""
        return self.inverse(self.pointwise_multiply(self.forward(a), self.forward(b)))
