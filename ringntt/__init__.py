"""Radix-2 NTT and FFT kernels for polynomial multiplication in Z_q[X]/(X^n + 1)."""

from .bit_reverse import bit_reverse_indices, bit_reverse_number, bit_reverse_slice
from .complex_fft import ComplexFFT
from .errors import (
    InvalidDegreeError,
    InvalidExponentError,
    InvalidGCDError,
    InvalidLengthError,
    InvalidOrderError,
    LengthNotPowerOfTwoError,
    NotPrimeError,
    PrimitiveRootNotFoundError,
    TransformError,
    UnequalDegreeError,
    UnequalModulusError,
)
from .integer_ntt import IntegerNTT
from .number_theory import (
    DEFAULT_TRIALS,
    egcd,
    find_ntt_prime,
    find_primitive_root,
    find_root_of_unity,
    has_order,
    is_power_of_two,
    is_prime,
    mod_inv,
    mod_pow,
    prime_factors,
)
from .polynomial import (
    Polynomial,
    fft_polynomial_multiply,
    get_ntt_engine,
    naive_negacyclic_multiply,
    ntt_negacyclic_multiply,
)

__version__ = "0.1.0"
