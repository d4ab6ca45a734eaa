import operator
import random
from typing import Iterator, List, Optional, Tuple

from .errors import (
    InvalidDegreeError,
    InvalidExponentError,
    InvalidGCDError,
    InvalidOrderError,
    NotPrimeError,
    PrimitiveRootNotFoundError,
)

# Miller-Rabin rounds; a composite survives one round with probability <= 1/4.
DEFAULT_TRIALS = 1000


def is_power_of_two(number: int) -> bool:
    """Check if a number is a power of two. 0 and 1 are not."""
    if number <= 1:
        return False
    return number & (number - 1) == 0


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (gcd, x, y) such that a * x + b * y = gcd(a, b)."""
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_x, x = x, old_x - quotient * x
        old_y, y = y, old_y - quotient * y

    return old_r, old_x, old_y


def mod_inv(a: int, m: int) -> int:
    """Compute x in [0, m) such that (a * x) % m == 1."""
    a, m = operator.index(a), operator.index(m)
    gcd, x, _ = egcd(a, m)
    if gcd != 1:
        raise InvalidGCDError(f"{a} has no inverse mod {m} (gcd = {gcd})")
    return x % m


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    Compute (base^exponent) % modulus by repeated squaring.

    An exponent of -1 computes the modular inverse instead; any smaller
    exponent is rejected.
    """
    base, exponent, modulus = operator.index(base), operator.index(exponent), operator.index(modulus)
    if exponent == -1:
        return mod_inv(base, modulus)
    if exponent < -1:
        raise InvalidExponentError(f"Exponent must be >= -1, got {exponent}")

    result = 1 % modulus
    base = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result


def is_prime(number: int, trials: int = DEFAULT_TRIALS, rng: Optional[random.Random] = None) -> bool:
    """
    Check if a number is (probably) prime with the Miller-Rabin test.

    Args:
        number: The candidate
        trials: Number of random witnesses to try
        rng: Source of witnesses; defaults to an OS-seeded SystemRandom

    Returns:
        False if the number is certainly composite, True if it survived every trial
    """
    number = operator.index(number)
    if trials < 1:
        raise ValueError(f"Number of Miller-Rabin trials must be >= 1, got {trials}")

    if number < 4:
        return number == 2 or number == 3
    if number % 2 == 0:
        return False

    if rng is None:
        rng = random.SystemRandom()

    odd_exponent = number - 1
    while odd_exponent % 2 == 0:
        odd_exponent //= 2

    for _ in range(trials):
        witness = rng.randint(1, number - 1)
        exponent = odd_exponent
        power = mod_pow(witness, exponent, number)

        while exponent != number - 1 and power != 1 and power != number - 1:
            power = (power * power) % number
            exponent *= 2

        if power != number - 1 and exponent % 2 == 0:
            return False

    return True


def prime_factors(number: int) -> List[int]:
    """Distinct prime factors of number in ascending order, by trial division."""
    factors = []
    remaining = operator.index(number)
    i = 2
    while i * i <= remaining:
        if remaining % i == 0:
            factors.append(i)
            while remaining % i == 0:
                remaining //= i
        i += 1
    if remaining > 1:
        factors.append(remaining)
    return factors


def has_order(value: int, order: int, m: int) -> bool:
    """Check that value has multiplicative order exactly `order` modulo m."""
    order = operator.index(order)
    if mod_pow(value, order, m) != 1:
        return False
    return all(mod_pow(value, order // f, m) != 1 for f in prime_factors(order))


def _primitive_roots(m: int, phi_factors: List[int]) -> Iterator[int]:
    """Yield the primitive roots of prime m in ascending order."""
    phi = m - 1
    for candidate in range(2, m + 1):
        if all(mod_pow(candidate, phi // f, m) != 1 for f in phi_factors):
            yield candidate


def find_primitive_root(m: int, trials: int = DEFAULT_TRIALS, rng: Optional[random.Random] = None) -> int:
    """Find the smallest primitive root (a generator) modulo prime m."""
    m = operator.index(m)
    if not is_prime(m, trials, rng):
        raise NotPrimeError(f"{m} is not prime")
    if m == 2:
        # 1 generates the trivial group (Z/2Z)*
        return 1

    root = next(_primitive_roots(m, prime_factors(m - 1)), None)
    if root is None:
        raise PrimitiveRootNotFoundError(f"No primitive root found modulo {m}")
    return root


def find_root_of_unity(order: int, m: int, trials: int = DEFAULT_TRIALS,
                       rng: Optional[random.Random] = None, verbose: bool = False) -> int:
    """
    Find a primitive `order`-th root of unity modulo prime m.

    The root is g^((m - 1) / order) for the first primitive root g whose
    result has order exactly `order`. A degenerate candidate moves the search
    on to the next primitive root rather than being returned.

    Args:
        order: Required multiplicative order, must divide m - 1
        m: Prime modulus
        trials: Miller-Rabin rounds for the primality check
        rng: Witness source for the primality check
        verbose: Print each rejected candidate

    Returns:
        The root of unity
    """
    order, m = operator.index(order), operator.index(m)
    if not is_prime(m, trials, rng):
        raise NotPrimeError(f"{m} is not prime")
    if order <= 0 or (m - 1) % order != 0:
        raise InvalidOrderError(f"Order {order} does not divide {m} - 1 = {m - 1}")
    if order == 1:
        return 1

    exponent = (m - 1) // order
    retries = 0
    for generator in _primitive_roots(m, prime_factors(m - 1)):
        candidate = mod_pow(generator, exponent, m)
        if has_order(candidate, order, m):
            return candidate
        retries += 1
        if verbose:
            print(f" -> Root {candidate} = {generator}^{exponent} mod {m} does not have order {order}, retry #{retries}")

    raise PrimitiveRootNotFoundError(f"No root of unity of order {order} found modulo {m}")


def find_ntt_prime(n: int, min_bits: int = 20, trials: int = DEFAULT_TRIALS,
                   rng: Optional[random.Random] = None, verbose: bool = False) -> int:
    """
    Find the smallest prime q with q ≡ 1 (mod 2n) and q >= 2^min_bits.

    Such a q admits a primitive 2n-th root of unity, which the negacyclic NTT
    of degree n needs.
    """
    n, min_bits = operator.index(n), operator.index(min_bits)
    if not is_power_of_two(n):
        raise InvalidDegreeError(f"Degree {n} must be a power of two")

    required_modulus = 2 * n
    min_prime = 2 ** min_bits
    k = max(1, (min_prime - 1) // required_modulus)

    if verbose:
        print(f"Searching for prime q ≡ 1 (mod {required_modulus}) with q >= 2^{min_bits} = {min_prime}")
        print(f"Starting search from k = {k}")

    while True:
        candidate = k * required_modulus + 1
        if candidate >= min_prime and is_prime(candidate, trials, rng):
            if verbose:
                print(f"Found suitable prime: q = {candidate} (≡ 1 mod {required_modulus}, {candidate.bit_length()} bits)")
            return candidate
        k += 1
