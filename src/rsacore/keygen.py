"""Core Key Generation Utility, producing the numeric components of an RSA key pair.

The first prime is deliberately one bit longer than half the modulus, and the second prime is searched for inside the
window that makes the product exactly the requested size. Number-theoretic dead ends (no usable prime in the window,
a public exponent that is not invertible) are retried internally; only a failing random source escapes.

Typical usage example:

    p, q, n = generate_primes(1024)
    comps = generate_key(2048)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import typing

from rsacore import primes
from rsacore import rand
from rsacore.errors import InvalidKeySizeError
from rsacore.errors import KeyGenerationError

PUBLIC_EXPONENT: int = 65537
MINIMUM_BITS: int = 64
PRIME_ROUNDS: int = 128

logger = logging.getLogger(__name__)


class KeyComponents(typing.NamedTuple):
    """The eight PKCS#1 private key integers plus the nominal modulus size."""
    n: int
    e: int
    d: int
    p: int
    q: int
    dp: int
    dq: int
    qinv: int
    bits: int


def _find_cofactor(p: int, bits: int, rng: rand.RandomSource) -> int | None:
    """Search a prime q such that p*q has exactly `bits` bits.

    Starts from a random point of `[q_min, 2*q_min)`. If the next prime overshoots, the previous prime is tried, and
    if that also misses the window the starting point is moved halfway toward `q_min`.

    Args:
        p: The first prime.
        bits: Target modulus size.
        rng: Random source.

    Returns:
        A suitable prime, or None if the window around `q_min` holds no prime and `p` should be discarded.
    """
    q_min = -(-(1 << (bits - 1)) // p)
    q_max = ((1 << bits) - 1) // p
    qn = q_min + rng.uniform_int(q_min)
    while True:
        q = primes.find_next(qn, PRIME_ROUNDS, rng)
        if q <= q_max:
            return q
        q = primes.find_previous(qn, PRIME_ROUNDS, rng)
        if q_min <= q <= q_max:
            return q
        if qn == q_min:
            return None
        qn = q_min + (qn - q_min) // 2
        logger.debug("Cofactor search overshot, bisecting toward the lower bound.")


def generate_primes(bits: int, rng: rand.RandomSource | None = None) -> tuple[int, int, int]:
    """Generates a pair of distinct primes whose product has exactly `bits` bits.

    Args:
        bits: The modulus size. Must be at least `MINIMUM_BITS`.
        rng: Random source. Defaults to the shared entropy stream.

    Returns:
        Tuple of (p, q, n) with n = p*q.

    Raises:
        InvalidKeySizeError: If `bits` is below `MINIMUM_BITS`.
        KeyGenerationError: If the modulus came out shorter than requested, which must never happen.
    """
    if bits < MINIMUM_BITS:
        raise InvalidKeySizeError(f"Size must be at least {MINIMUM_BITS}.")
    rng = rng or rand.default()
    while True:
        p = primes.find(bits // 2 + 1, PRIME_ROUNDS, rng)
        q = _find_cofactor(p, bits, rng)
        if q is None or q == p:
            logger.debug("Discarding first prime, no usable cofactor.")
            continue
        n = p * q
        if n.bit_length() != bits:
            raise KeyGenerationError(f"Modulus has {n.bit_length()} bits, expected {bits}.")
        return p, q, n


def derive_private(p: int, q: int, e: int = PUBLIC_EXPONENT) -> tuple[int, int, int, int] | None:
    """Derives the private exponent and CRT values for a prime pair.

    Args:
        p: Private prime 1.
        q: Private prime 2.
        e: Public exponent.

    Returns:
        Tuple of (d, d mod (p-1), d mod (q-1), q^-1 mod p), or None if `e` is not invertible modulo lcm(p-1, q-1).
    """
    p1, q1 = p - 1, q - 1
    lam = p1 * q1 // math.gcd(p1, q1)
    g, _, d = primes.eea(lam, e)
    if g != 1:
        return None
    d %= lam
    return d, d % p1, d % q1, pow(q, -1, p)


def generate_key(bits: int, rng: rand.RandomSource | None = None) -> KeyComponents:
    """Generates the full set of RSA key components.

    Args:
        bits: The modulus size. Must be at least `MINIMUM_BITS`.
        rng: Random source. Defaults to the shared entropy stream.

    Returns:
        The key components, with `e` fixed to `PUBLIC_EXPONENT`.
    """
    if bits < MINIMUM_BITS:
        raise InvalidKeySizeError(f"Size must be at least {MINIMUM_BITS}.")
    rng = rng or rand.default()
    while True:
        p, q, n = generate_primes(bits, rng)
        derived = derive_private(p, q)
        if derived is None:
            logger.debug("Public exponent not invertible for this prime pair, retrying.")
            continue
        d, dp, dq, qinv = derived
        logger.info("Generated %d-bit RSA key.", bits)
        return KeyComponents(n, PUBLIC_EXPONENT, d, p, q, dp, dq, qinv, bits)
