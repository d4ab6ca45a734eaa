"""Tests for Polynomial and the convolution helpers."""

import random

import numpy as np
import pytest

from ringntt.errors import InvalidDegreeError, InvalidLengthError, UnequalDegreeError, UnequalModulusError
from ringntt.polynomial import (
    Polynomial,
    fft_polynomial_multiply,
    get_ntt_engine,
    naive_negacyclic_multiply,
    ntt_negacyclic_multiply,
)

Q = 7681


@pytest.fixture
def a():
    return Polynomial([1, 2, 3, 4], Q)


@pytest.fixture
def b():
    return Polynomial([5, 6, 7, 8], Q)


class TestPolynomial:
    def test_add(self, a, b):
        assert a.add(b).coefficients == (6, 8, 10, 12)

    def test_add_wraps_modulus(self, a):
        c = Polynomial([7681, 7682, 7683, 7684], Q)
        assert a.add(c).coefficients == (1, 3, 5, 7)

    def test_subtract(self, a, b):
        assert b.subtract(a).coefficients == (4, 4, 4, 4)
        assert a.subtract(b).coefficients == (Q - 4,) * 4

    def test_multiply(self, a, b):
        assert a.multiply(b).coefficients == (7625, 7645, 2, 60)

    def test_multiply_commutes(self, a, b):
        assert a.multiply(b) == b.multiply(a)

    def test_mod(self):
        p = Polynomial([7681, -1, 15363, 2], Q)
        assert p.mod() == [0, 7680, 1, 2]

    def test_operators(self, a, b):
        assert a + b == a.add(b)
        assert b - a == b.subtract(a)
        assert a * b == a.multiply(b)

    def test_equality_uses_reduced_coefficients(self, a):
        assert a == Polynomial([1 + Q, 2, 3 - Q, 4], Q)
        assert a != Polynomial([1, 2, 3, 4], 12289)
        assert hash(a) == hash(Polynomial([1 + Q, 2, 3, 4], Q))

    def test_not_equal_to_other_types(self, a):
        assert a != [1, 2, 3, 4]

    def test_stores_immutable_copy(self):
        coefficients = [1, 2, 3, 4]
        p = Polynomial(coefficients, Q)
        coefficients[0] = 99
        assert p.coefficients == (1, 2, 3, 4)

    def test_repr(self, a):
        assert repr(a) == "Polynomial([1, 2, 3, 4], q=7681)"

    @pytest.mark.parametrize("coefficients", [[1, 2, 3, 4, 5], [1], []])
    def test_invalid_degree(self, coefficients):
        with pytest.raises(InvalidDegreeError):
            Polynomial(coefficients, Q)

    def test_unequal_modulus(self, a):
        with pytest.raises(UnequalModulusError):
            a.add(Polynomial([1, 2, 3, 4], 7682))

    def test_unequal_degree(self, a):
        with pytest.raises(UnequalDegreeError):
            a.multiply(Polynomial([1, 2, 3, 4, 5, 6, 7, 8], Q))

    def test_modulus_checked_before_degree(self, a):
        with pytest.raises(UnequalModulusError):
            a.subtract(Polynomial([1, 2], 12289))


class TestNegacyclicMultiply:
    def test_naive_known_product(self):
        assert naive_negacyclic_multiply([1, 2, 3, 4], [5, 6, 7, 8], Q) == [7625, 7645, 2, 60]

    @pytest.mark.parametrize("q, n", [(7681, 8), (12289, 64), (8380417, 16)])
    def test_ntt_matches_naive(self, q, n):
        rng = random.Random(q + n)
        for _ in range(3):
            p1 = [rng.randrange(q) for _ in range(n)]
            p2 = [rng.randrange(q) for _ in range(n)]
            assert ntt_negacyclic_multiply(p1, p2, q) == naive_negacyclic_multiply(p1, p2, q)

    def test_length_mismatch(self):
        with pytest.raises(InvalidLengthError):
            naive_negacyclic_multiply([1, 2], [1, 2, 3, 4], Q)
        with pytest.raises(InvalidLengthError):
            ntt_negacyclic_multiply([1, 2], [1, 2, 3, 4], Q)

    def test_engine_is_cached(self):
        assert get_ntt_engine(Q, 16) is get_ntt_engine(Q, 16)
        assert get_ntt_engine(Q, 16) is not get_ntt_engine(Q, 32)

    def test_engine_cache_is_bounded(self):
        assert get_ntt_engine.cache_info().maxsize == 128

    def test_numpy_modulus(self):
        p = Polynomial([1, 2, 3, 4], np.int64(Q))
        assert type(p.q) is int
        assert p * Polynomial([5, 6, 7, 8], Q) == Polynomial([7625, 7645, 2, 60], Q)


class TestFFTPolynomialMultiply:
    def test_known_product(self):
        assert fft_polynomial_multiply([3, 2], [1, 5]) == [3, 17, 10]

    @pytest.mark.parametrize("poly1, poly2", [([], []), ([], [1, 2]), ([3], [])])
    def test_empty_input(self, poly1, poly2):
        assert fft_polynomial_multiply(poly1, poly2) == []

    def test_constants(self):
        assert fft_polynomial_multiply([7], [6]) == [42]

    def test_unequal_lengths(self):
        # (1 + x + x^2)(2 - x) = 2 + x + x^2 - x^3
        assert fft_polynomial_multiply([1, 1, 1], [2, -1]) == [2, 1, 1, -1]

    def test_matches_direct_convolution(self):
        rng = random.Random(3)
        p1 = [rng.randint(-100, 100) for _ in range(37)]
        p2 = [rng.randint(-100, 100) for _ in range(21)]

        expected = [0] * (len(p1) + len(p2) - 1)
        for i, x in enumerate(p1):
            for j, y in enumerate(p2):
                expected[i + j] += x * y

        assert fft_polynomial_multiply(p1, p2) == expected
