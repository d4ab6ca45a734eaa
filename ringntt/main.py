#!/usr/bin/env python3
"""
Command-line driver for the NTT and FFT kernels.

Examples:
  %(prog)s ntt 256 -q 7681             # Random NTT round trips for n=256, q=7681
  %(prog)s ntt 1024 --min-bits 30 -v   # Pick the smallest NTT prime >= 2^30, verbose
  %(prog)s fft 64 --num-tests 10       # Random FFT round trips, checked against numpy.fft
  %(prog)s poly-mult 16 -q 7681        # NTT negacyclic products against schoolbook
  %(prog)s params 4 -q 7681            # Show psi, generator and factorisation of q - 1
  %(prog)s benchmark --min-N 4 --max-N 1024 --num-runs 20
"""

import argparse
import random
import sys
import time

import numpy as np
from sympy import factorint

from .complex_fft import ComplexFFT
from .errors import TransformError
from .integer_ntt import IntegerNTT
from .number_theory import find_ntt_prime, find_primitive_root, is_power_of_two
from .polynomial import naive_negacyclic_multiply


def generate_random_vector(N, mode='integer', q=None, rng=None):
    """Generate a random test vector of size N."""
    rng = rng or random.Random()

    if mode == 'complex':
        return [complex(rng.uniform(-10, 10), rng.uniform(-10, 10)) for _ in range(N)]
    return [rng.randrange(q) for _ in range(N)]


def build_ntt(N, q=None, min_bits=20, verbose=False):
    if q is not None:
        return IntegerNTT(q, N, verbose=verbose)
    return IntegerNTT.for_degree(N, min_bits=min_bits, verbose=verbose)


def run_ntt_roundtrips(N, num_tests, q=None, min_bits=20, rng=None, verbose=False):
    """Check inverse(forward(v)) == v for random vectors."""
    ntt = build_ntt(N, q, min_bits, verbose=verbose and num_tests <= 3)

    print(f"Testing negacyclic NTT with {num_tests} random vectors (n={N}, q={ntt.q})")
    print("=" * 60)

    all_passed = True
    for i in range(num_tests):
        test_vec = generate_random_vector(N, 'integer', q=ntt.q, rng=rng)
        recovered = ntt.inverse(ntt.forward(test_vec))

        success = recovered == test_vec
        status = "✓ PASS" if success else "✗ FAIL"
        all_passed = all_passed and success
        print(f"Test {i+1}: Random integer vector, {status}")

        if not success:
            print(f"  Expected: {test_vec}")
            print(f"  Got:      {recovered}")

    print(f"\nSummary: {num_tests} tests completed")
    return all_passed


def run_fft_roundtrips(N, num_tests, rng=None, verbose=False, tolerance=1e-9):
    """Check the FFT against numpy.fft.fft and inverse(forward(v)) against v."""
    fft = ComplexFFT(N, verbose=verbose and num_tests <= 3)

    print(f"Testing complex FFT with {num_tests} random vectors (n={N})")
    print("=" * 60)

    all_passed = True
    max_error = 0.0
    for i in range(num_tests):
        test_vec = np.array(generate_random_vector(N, 'complex', rng=rng), dtype=complex)
        spectrum = fft.forward(test_vec)
        recovered = fft.inverse(spectrum)

        forward_error = np.max(np.abs(spectrum - np.fft.fft(test_vec)))
        roundtrip_error = np.max(np.abs(recovered - test_vec))
        error = max(forward_error, roundtrip_error)
        max_error = max(max_error, error)

        success = error < tolerance * N
        status = "✓ PASS" if success else "✗ FAIL"
        all_passed = all_passed and success
        print(f"Test {i+1}: Random complex vector, {status}")

        if verbose or not success:
            print(f"  Forward error vs numpy: {forward_error:.2e}")
            print(f"  Roundtrip error: {roundtrip_error:.2e}")

    print(f"\nSummary: {num_tests} tests completed, max error {max_error:.2e}")
    return all_passed


def run_poly_mult_checks(N, num_tests, q=None, min_bits=20, rng=None, verbose=False):
    """Compare NTT negacyclic products with schoolbook multiplication."""
    ntt = build_ntt(N, q, min_bits, verbose=verbose and num_tests <= 3)

    print(f"Testing NTT polynomial multiplication with {num_tests} random pairs (n={N}, q={ntt.q})")
    print("=" * 60)

    all_passed = True
    for i in range(num_tests):
        poly1 = generate_random_vector(N, 'integer', q=ntt.q, rng=rng)
        poly2 = generate_random_vector(N, 'integer', q=ntt.q, rng=rng)

        expected = naive_negacyclic_multiply(poly1, poly2, ntt.q)
        result = ntt.multiply(poly1, poly2)

        success = result == expected
        status = "✓ PASS" if success else "✗ FAIL"
        all_passed = all_passed and success
        print(f"Test {i+1}: Random polynomial pair, {status}")

        if verbose or not success:
            print(f"  NTT:   {result}")
            print(f"  Naive: {expected}")

    print(f"\nSummary: {num_tests} tests completed")
    return all_passed


def show_params(N, q=None, min_bits=20):
    """Print the NTT parameters for degree N."""
    if q is None:
        q = find_ntt_prime(N, min_bits)
    ntt = IntegerNTT(q, N)
    factors = " * ".join(f"{p}^{e}" if e > 1 else f"{p}" for p, e in sorted(factorint(q - 1).items()))

    print(f"n        = {N}")
    print(f"q        = {q} ({q.bit_length()} bits)")
    print(f"q - 1    = {factors}")
    print(f"g        = {find_primitive_root(q)}")
    print(f"psi      = {ntt.psi} (order {2 * N})")
    print(f"psi^-1   = {ntt.psi_inv}")
    print(f"omega    = {(ntt.psi * ntt.psi) % q}")
    print(f"n^-1     = {ntt.n_inv}")
    return True


def benchmark_transforms(min_N=4, max_N=1024, num_runs=20, min_bits=20, rng=None):
    """
    Time NTT and FFT round trips against schoolbook negacyclic multiplication.

    Args:
        min_N: Smallest power-of-two size to time
        max_N: Largest power-of-two size to time
        num_runs: Number of timing runs per method per size
        min_bits: Minimum bit size of the NTT prime

    Returns:
        Dictionary of per-size timings in milliseconds
    """
    N_values = [N for N in (1 << k for k in range(1, max_N.bit_length())) if min_N <= N <= max_N]

    results = {'N_values': N_values, 'ntt_times_ms': [], 'fft_times_ms': [],
               'naive_times_ms': [], 'primes_used': []}

    print("=" * 80)
    print(f"{'N':<6} {'NTT (ms)':<12} {'FFT (ms)':<12} {'Naive (ms)':<12} {'Prime':<12}")
    print("-" * 80)

    for N in N_values:
        ntt = IntegerNTT.for_degree(N, min_bits=min_bits)
        fft = ComplexFFT(N)
        vec = generate_random_vector(N, 'integer', q=ntt.q, rng=rng)
        cvec = generate_random_vector(N, 'complex', rng=rng)

        start_time = time.perf_counter()
        for _ in range(num_runs):
            ntt.inverse(ntt.forward(vec))
        ntt_ms = (time.perf_counter() - start_time) * 1000 / num_runs

        start_time = time.perf_counter()
        for _ in range(num_runs):
            fft.inverse(fft.forward(cvec))
        fft_ms = (time.perf_counter() - start_time) * 1000 / num_runs

        start_time = time.perf_counter()
        for _ in range(num_runs):
            naive_negacyclic_multiply(vec, vec, ntt.q)
        naive_ms = (time.perf_counter() - start_time) * 1000 / num_runs

        results['ntt_times_ms'].append(ntt_ms)
        results['fft_times_ms'].append(fft_ms)
        results['naive_times_ms'].append(naive_ms)
        results['primes_used'].append(ntt.q)

        print(f"{N:<6} {ntt_ms:<12.3f} {fft_ms:<12.3f} {naive_ms:<12.3f} {ntt.q:<12}")

    print("=" * 80)
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Test and benchmark driver for the radix-2 NTT/FFT kernels',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1].replace("%(prog)s", "ringntt"))

    parser.add_argument('mode', choices=['ntt', 'fft', 'poly-mult', 'params', 'benchmark'],
                        help='Which check to run')
    parser.add_argument('N', type=int, nargs='?',
                        help='Transform size (power of two). Not used in benchmark mode.')
    parser.add_argument('-q', '--modulus', type=int,
                        help='Prime modulus for the NTT (must satisfy q ≡ 1 (mod 2N))')
    parser.add_argument('--min-bits', type=int, default=20,
                        help='Minimum bit size of the automatically chosen prime (default: 20)')
    parser.add_argument('--num-tests', type=int, default=3,
                        help='Number of random test cases to run (default: 3)')
    parser.add_argument('--min-N', type=int, default=4,
                        help='Minimum N for benchmark mode (default: 4)')
    parser.add_argument('--max-N', type=int, default=1024,
                        help='Maximum N for benchmark mode (default: 1024)')
    parser.add_argument('--num-runs', type=int, default=20,
                        help='Number of timing runs per method in benchmark mode (default: 20)')
    parser.add_argument('--seed', type=int,
                        help='Seed for the random test vectors')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print engine parameters and butterfly stages')

    args = parser.parse_args(argv)

    if args.mode != 'benchmark':
        if args.N is None:
            parser.error(f"N is required in {args.mode} mode")
        if not is_power_of_two(args.N):
            print(f"Error: N={args.N} must be a power of two >= 2")
            return 1

    rng = random.Random(args.seed)

    try:
        if args.mode == 'ntt':
            success = run_ntt_roundtrips(args.N, args.num_tests, args.modulus, args.min_bits,
                                         rng=rng, verbose=args.verbose)
        elif args.mode == 'fft':
            success = run_fft_roundtrips(args.N, args.num_tests, rng=rng, verbose=args.verbose)
        elif args.mode == 'poly-mult':
            success = run_poly_mult_checks(args.N, args.num_tests, args.modulus, args.min_bits,
                                           rng=rng, verbose=args.verbose)
        elif args.mode == 'params':
            success = show_params(args.N, args.modulus, args.min_bits)
        else:
            results = benchmark_transforms(args.min_N, args.max_N, args.num_runs, args.min_bits, rng=rng)
            success = bool(results['N_values'])
    except TransformError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"\n{'✅ PASS' if success else '❌ FAIL'}")
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
