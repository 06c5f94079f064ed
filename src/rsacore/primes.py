"""Primality utilities: Jacobi symbol, Solovay-Strassen testing and prime search.

Random witnesses and random starting points come from an injectable `RandomSource`. Prime search prefilters its
candidates with trial division against a cached list of small primes before running the probabilistic test.

Typical usage example:

    jacobi(1001, 9907)
    is_prime(2**127 - 1)
    p = find(512)
    q = find_next(p + 1)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsacore import rand

DEFAULT_ROUNDS: int = 128

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes to generate a set of primes up to `n`.
    Includes memory space optimization and sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = 10000) -> list[int]:
    """Get the small primes, automatically generating if necessary.

    The module level list acts as a cache; it is regenerated if the requested range is greater or if the cache is empty.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        List of primes in ascending order, covering at least everything up to `n`.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check the provided `no` against the known small primes.

    Args:
         no: The number to check. Must be integer and non-negative.
         n: The number up to which small primes are used. Passed to `get_pre_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime**2 > no:
            return True
        if no % prime == 0:
            return False
    return True


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*s0 + b*t0 = r0 = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of two integers, as well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def jacobi(a: int, b: int) -> int:
    """Computes the Jacobi symbol (a/b).

    Iterative version of the reciprocity law: factors of two are stripped in a single shift and the roles of the two
    odd values are swapped until one of them reaches 1.

    Args:
        a: Any integer.
        b: An odd positive integer.

    Returns:
        -1, 0 or 1. Zero exactly when gcd(a, b) > 1.

    Raises:
        ValueError: If `b` is not odd and positive.
    """
    if b <= 0 or b % 2 == 0:
        raise ValueError("b must be an odd positive integer")
    s = 1
    while True:
        if b == 1 or a == 1:
            return s
        a %= b
        if a == 0:
            return 0
        tz = (a & -a).bit_length() - 1
        c = a >> tz
        # (2/b) = -1 iff b = 3, 5 (mod 8)
        if tz & 1 and (b & 7) in (3, 5):
            s = -s
        if (c & 3) == 3 and (b & 3) == 3:
            s = -s
        a, b = b, c


def is_prime(p: int, rounds: int = DEFAULT_ROUNDS, rng: rand.RandomSource | None = None) -> bool:
    """Perform the Solovay-Strassen primality test.

    Every round draws a fresh witness and compares Euler's criterion with the Jacobi symbol. A composite survives a
    single round with probability at most 1/2, so the false-positive rate is bounded by 2**-rounds.

    Args:
        p: Integer to be tested.
        rounds: Number of independent rounds. Defaults to 128.
        rng: Random source for witnesses. Defaults to the shared entropy stream.

    Returns:
        True if `p` is probably prime, False if it is certainly composite.
    """
    if rounds < 1:
        raise ValueError("rounds must be >= 1")
    if p < 2:
        return False
    if p % 2 == 0:
        return p == 2
    rng = rng or rand.default()
    half = (p - 1) // 2
    for _ in range(rounds):
        a = rng.uniform_int(p - 2) + 2
        j = jacobi(a, p)
        if j == 0:
            return False
        if pow(a, half, p) != j % p:
            return False
    return True


def _is_candidate(no: int, rounds: int, rng: rand.RandomSource) -> bool:
    return _trial_division(no) and is_prime(no, rounds, rng)


def find(bits: int, rounds: int = DEFAULT_ROUNDS, rng: rand.RandomSource | None = None) -> int:
    """Find a random probable prime starting from a random odd `bits`-bit number.

    Args:
        bits: Size of the random starting point. The top bit is always set. Must be >= 2.
        rounds: Solovay-Strassen rounds per candidate.
        rng: Random source. Defaults to the shared entropy stream.

    Returns:
        The first probable prime at or above the random starting point.
    """
    if bits < 2:
        raise ValueError("bits must be >= 2")
    rng = rng or rand.default()
    return find_next(rng.randbits_exact(bits), rounds, rng)


def find_next(start: int, rounds: int = DEFAULT_ROUNDS, rng: rand.RandomSource | None = None) -> int:
    """Find the smallest odd probable prime at or above `start`.

    Args:
        start: Starting point; rounded up to the next odd number.
        rounds: Solovay-Strassen rounds per candidate.
        rng: Random source. Defaults to the shared entropy stream.

    Returns:
        A probable prime.
    """
    rng = rng or rand.default()
    candidate = max(start | 1, 3)
    while not _is_candidate(candidate, rounds, rng):
        candidate += 2
    return candidate


def find_previous(start: int, rounds: int = DEFAULT_ROUNDS, rng: rand.RandomSource | None = None) -> int:
    """Find the largest probable prime at or below `start`.

    Args:
        start: Starting point; even values are rounded down to the previous odd number.
        rounds: Solovay-Strassen rounds per candidate.
        rng: Random source. Defaults to the shared entropy stream.

    Returns:
        A probable prime.

    Raises:
        ValueError: If there is no prime at or below `start`.
    """
    if start == 2:
        return 2
    rng = rng or rand.default()
    candidate = start if start % 2 else start - 1
    while candidate >= 3:
        if _is_candidate(candidate, rounds, rng):
            return candidate
        candidate -= 2
    raise ValueError("No prime at or below start")
