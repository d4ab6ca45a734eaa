"""
Polynomial arithmetic in Z_q[X]/(X^n + 1) on top of the transform engines.

The NTT engine for a given (q, n) is built once and cached, so repeated
products only pay for the transforms themselves.
"""

import operator
from functools import lru_cache
from typing import List, Sequence

import numpy as np

from .complex_fft import ComplexFFT
from .errors import InvalidDegreeError, InvalidLengthError, UnequalDegreeError, UnequalModulusError
from .integer_ntt import IntegerNTT
from .number_theory import is_power_of_two


@lru_cache(maxsize=128)
def get_ntt_engine(q: int, n: int) -> IntegerNTT:
    """Return the shared NTT engine for modulus q and degree n."""
    return IntegerNTT(q, n)


def naive_negacyclic_multiply(poly1: Sequence[int], poly2: Sequence[int], q: int) -> List[int]:
    """Schoolbook multiplication in Z_q[X]/(X^n + 1), using X^n = -1."""
    n = len(poly1)
    if len(poly2) != n:
        raise InvalidLengthError(f"Polynomials must have the same length, got {n} and {len(poly2)}")

    result = [0] * n
    for i in range(n):
        for j in range(n):
            k = i + j
            if k < n:
                result[k] = (result[k] + poly1[i] * poly2[j]) % q
            else:
                result[k - n] = (result[k - n] - poly1[i] * poly2[j]) % q
    return result


def ntt_negacyclic_multiply(poly1: Sequence[int], poly2: Sequence[int], q: int) -> List[int]:
    """Multiply two polynomials in Z_q[X]/(X^n + 1) through the cached NTT engine."""
    if len(poly1) != len(poly2):
        raise InvalidLengthError(f"Polynomials must have the same length, got {len(poly1)} and {len(poly2)}")
    return get_ntt_engine(q, len(poly1)).multiply(poly1, poly2)


def fft_polynomial_multiply(poly1: Sequence[int], poly2: Sequence[int]) -> List[int]:
    """
    Multiply two integer polynomials in Z[X] with a zero-padded complex FFT.

    Args:
        poly1: Coefficients of the first polynomial, lowest degree first
        poly2: Coefficients of the second polynomial

    Returns:
        The len(poly1) + len(poly2) - 1 coefficients of the product, rounded
        to the nearest integer, or [] if either input is empty
    """
    if len(poly1) == 0 or len(poly2) == 0:
        return []

    min_size = len(poly1) + len(poly2) - 1
    size = 2
    while size < min_size:
        size *= 2

    a = list(poly1) + [0] * (size - len(poly1))
    b = list(poly2) + [0] * (size - len(poly2))

    product = ComplexFFT(size).convolve(a, b)
    return [int(x) for x in np.rint(product.real[:min_size])]


class Polynomial:
    """An element of Z_q[X]/(X^n + 1) with n a power of two."""

    def __init__(self, coefficients: Sequence[int], q: int):
        n = len(coefficients)
        if not is_power_of_two(n):
            raise InvalidDegreeError(f"Number of coefficients {n} must be a power of two")

        self.q = operator.index(q)
        self.n = n
        self.coefficients = tuple(int(c) for c in coefficients)

    def _check_compatible(self, other: "Polynomial") -> None:
        if self.q != other.q:
            raise UnequalModulusError(f"Moduli differ: {self.q} != {other.q}")
        if self.n != other.n:
            raise UnequalDegreeError(f"Degrees differ: {self.n} != {other.n}")

    def add(self, other: "Polynomial") -> "Polynomial":
        self._check_compatible(other)
        return Polynomial([(a + b) % self.q for a, b in zip(self.coefficients, other.coefficients)], self.q)

    def subtract(self, other: "Polynomial") -> "Polynomial":
        self._check_compatible(other)
        return Polynomial([(a - b) % self.q for a, b in zip(self.coefficients, other.coefficients)], self.q)

    def multiply(self, other: "Polynomial") -> "Polynomial":
        """Negacyclic product, computed with the NTT."""
        self._check_compatible(other)
        return Polynomial(ntt_negacyclic_multiply(self.coefficients, other.coefficients, self.q), self.q)

    def mod(self) -> List[int]:
        """Coefficients reduced into [0, q)."""
        return [c % self.q for c in self.coefficients]

    def __add__(self, other: "Polynomial") -> "Polynomial":
        return self.add(other)

    def __sub__(self, other: "Polynomial") -> "Polynomial":
        return self.subtract(other)

    def __mul__(self, other: "Polynomial") -> "Polynomial":
        return self.multiply(other)

    def __eq__(self, other):
        if isinstance(other, Polynomial):
            return self.q == other.q and self.mod() == other.mod()
        return NotImplemented

    def __hash__(self):
        return hash((self.q, tuple(self.mod())))

    def __repr__(self):
        return f"Polynomial({list(self.coefficients)}, q={self.q})"
