"""Sieve-based bulk discovery of primes.

``sieve_search`` extends a PrimeCache with an odd-only sieve of Eratosthenes,
using the primes already in the cache as sieving primes. Because the cache
is extended while the sieve runs, the sieve finds its own sieving primes as
it goes past the seed.

``reference_primes`` is a standalone whole-range NumPy sieve that never
touches a cache. It is used to verify the cache.
"""

from __future__ import annotations

import logging

import numpy as np

from prime_cache.core.arithmetic import integral_sqrt
from prime_cache.core.cache import PrimeCache

log = logging.getLogger(__name__)


def _harvest(cache: PrimeCache, is_factor: np.ndarray, lo: int, hi: int) -> int:
    """Append unflagged odd values with flag index in [lo, hi) beyond the frontier."""
    indices = np.flatnonzero(~is_factor[lo:hi]) + lo
    values = 2 * indices + 1
    return cache.extend(values[values > cache.largest_discovered_prime].tolist())


def sieve_search(cache: PrimeCache, search_size_limit: int, complete: bool = True) -> None:
    """Ensure the cache holds every prime <= search_size_limit.

    Flag index k stands for the odd value 2k + 1. For each cached prime p
    (skipping 2) up to isqrt(N), every odd multiple from p * p on is flagged.
    After that, no unflagged value below p * p can be composite, so the
    window between the previous prime's square and p * p is harvested into
    the cache.

    Args:
        cache: Cache to extend in place.
        search_size_limit: Upper bound N (inclusive).
        complete: If True (default), harvest the rest of the range up to N
            after the last sieving prime. If False, stop at the square of
            the last sieving prime, leaving (p_last ** 2, N] for a later
            growth call.

    Raises:
        ValueError: If search_size_limit is less than 2.
    """
    if search_size_limit < 2:
        raise ValueError(f"search_size_limit must be >= 2, got {search_size_limit}")

    old_count = cache.discovered_count
    n = int(search_size_limit)
    # One slot per odd value <= n; index 0 is 1, which is not prime
    is_factor = np.zeros((n + 1) // 2, dtype=bool)
    is_factor[0] = True

    max_test = integral_sqrt(n)
    prime_index = 1
    while cache[prime_index] <= max_test:
        prime = cache[prime_index]
        # Even multiples are not represented, so stepping the index by p steps the value by 2p
        is_factor[prime * prime // 2::prime] = True

        previous = cache[prime_index - 1]
        _harvest(cache, is_factor, previous * previous // 2, prime * prime // 2)
        prime_index += 1

    if complete:
        last = cache[prime_index - 1]
        _harvest(cache, is_factor, last * last // 2, len(is_factor))

    log.debug(
        "Sieve to %d added %d primes (largest=%d)",
        n, cache.discovered_count - old_count, cache.largest_discovered_prime,
    )


def reference_primes(limit: int) -> np.ndarray:
    """Whole-range odd-only sieve that never touches a cache.

    Used as an independent oracle for the cache. Slot k of the sieve is the
    odd value 2k + 1, and 2 is prepended to the result.

    Args:
        limit: Upper bound (inclusive).

    Returns:
        int64 array of every prime <= limit; empty if limit < 2.
    """
    if limit < 2:
        return np.array([], dtype=np.int64)

    odd_is_prime = np.ones((limit + 1) // 2, dtype=bool)
    odd_is_prime[0] = False

    for k in range(1, (integral_sqrt(limit) + 1) // 2):
        if odd_is_prime[k]:
            p = 2 * k + 1
            odd_is_prime[p * p // 2::p] = False

    odd_primes = 2 * np.flatnonzero(odd_is_prime) + 1
    return np.concatenate(([2], odd_primes)).astype(np.int64)
