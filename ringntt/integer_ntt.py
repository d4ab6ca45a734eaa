import operator
import random
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidLengthError
from .number_theory import DEFAULT_TRIALS, find_ntt_prime, find_root_of_unity, mod_inv
from .transform import RadixTwoTransform


class IntegerNTT(RadixTwoTransform):
    """
    Negacyclic Number Theoretic Transform over Z_q[X]/(X^n + 1).

    The forward pass twists the coefficients by powers of psi, a primitive
    2n-th root of unity mod q, and then runs a cyclic NTT on omega = psi^2.
    Pointwise products in the transform domain are products in the ring.
    """

    twiddle_stride = 2

    def __init__(self, q: int, n: int, trials: int = DEFAULT_TRIALS,
                 rng: Optional[random.Random] = None, verbose: bool = False):
        """
        Initialize the NTT for modulus q and degree n.

        Args:
            q: Prime modulus with q ≡ 1 (mod 2n)
            n: Degree of the cyclotomic polynomial X^n + 1, a power of two
            trials: Miller-Rabin rounds used when checking q
            rng: Witness source for the primality check
            verbose: Print parameters and every butterfly stage
        """
        super().__init__(n, verbose)
        self.q = operator.index(q)

        self.psi = find_root_of_unity(2 * self.n, self.q, trials=trials, rng=rng, verbose=verbose)
        self.psi_inv = mod_inv(self.psi, self.q)
        self.n_inv = mod_inv(self.n, self.q)

        self.psi_powers = self._powers(self.psi)
        self.psi_inverse_powers = self._powers(self.psi_inv)

        if self.verbose:
            print(f"Initialized negacyclic NTT for n={n}, q={q}")
            print(f"Primitive {2 * n}th root psi={self.psi}, psi^-1={self.psi_inv}")
            print(f"n^-1 mod q = {self.n_inv}")

    @classmethod
    def for_degree(cls, n: int, min_bits: int = 20, trials: int = DEFAULT_TRIALS,
                   rng: Optional[random.Random] = None, verbose: bool = False) -> "IntegerNTT":
        """Build an NTT over the smallest NTT-friendly prime q >= 2^min_bits."""
        q = find_ntt_prime(n, min_bits, trials=trials, rng=rng, verbose=verbose)
        return cls(q, n, trials=trials, rng=rng, verbose=verbose)

    def _powers(self, root: int) -> Tuple[int, ...]:
        powers = [1]
        for _ in range(1, self.n):
            powers.append((powers[-1] * root) % self.q)
        return tuple(powers)

    def _butterfly(self, even: int, odd: int, twiddle: int) -> Tuple[int, int]:
        t = (twiddle * odd) % self.q
        return (even + t) % self.q, (even - t) % self.q

    def forward(self, coefficients: Sequence[int]) -> List[int]:
        """Compute the forward negacyclic NTT of n coefficients."""
        self._check_length(coefficients)

        twisted = [(int(c) * w) % self.q for c, w in zip(coefficients, self.psi_powers)]
        if self.verbose:
            print(f" -> Input: {list(coefficients)}")
            print(f" -> After psi twist: {twisted}")

        result = self._network(twisted, self.psi_powers)

        if self.verbose:
            print(f" <- Output: {result}")
        return result

    def inverse(self, values: Sequence[int]) -> List[int]:
        """Compute the inverse negacyclic NTT, undoing the twist and the 1/n scale."""
        self._check_length(values)

        reduced = [int(v) % self.q for v in values]
        if self.verbose:
            print(f" -> Input: {reduced}")

        unscaled = self._network(reduced, self.psi_inverse_powers)
        result = [(u * w % self.q) * self.n_inv % self.q
                  for u, w in zip(unscaled, self.psi_inverse_powers)]

        if self.verbose:
            print(f" <- Output: {result}")
        return result

    def pointwise_multiply(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        """Multiply two transformed vectors element-wise mod q."""
        self._check_length(a)
        if len(b) != len(a):
            raise InvalidLengthError(f"Vectors must have equal length, got {len(a)} and {len(b)}")
        return [(int(x) * int(y)) % self.q for x, y in zip(a, b)]

    def multiply(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        """Multiply two polynomials in Z_q[X]/(X^n + 1)."""
        return self.inverse(self.pointwise_multiply(self.forward(a), self.forward(b)))
