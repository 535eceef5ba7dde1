"""Trial division against an ordered sequence of known primes.

These functions never modify the sequence they are given, so they are safe
to run from worker threads or processes on a snapshot of the cache.
"""

from __future__ import annotations

from typing import List, Sequence

from prime_cache.core.arithmetic import integral_sqrt
from prime_cache.exceptions import InvariantViolation


def is_prime_by_trial_division(value: int, primes: Sequence[int]) -> bool:
    """Decide whether an odd value >= 3 is prime.

    Divides by the known odd primes up to the integral square root of value.
    Index 0 (the prime 2) is skipped since odd candidates never have 2 as a
    factor.

    Args:
        value: Odd integer >= 3. Even values are not handled here.
        primes: Gap-free ascending primes starting at 2, covering every prime
            up to isqrt(value).

    Returns:
        True if value is prime, False otherwise.

    Raises:
        InvariantViolation: If primes does not reach isqrt(value).
    """
    max_test = integral_sqrt(value)
    for index in range(1, len(primes)):
        prime = primes[index]
        if prime > max_test:
            return True
        if value % prime == 0:
            return False

    if primes[-1] < max_test:
        raise InvariantViolation(
            f"Too few primes known to test {value:,d} by trial division: "
            f"need primes up to {max_test:,d}, largest known is {primes[-1]:,d}"
        )
    return True


def check_range_for_primes(primes: Sequence[int], start: int, end: int) -> List[int]:
    """Find the primes in the inclusive range [start, end].

    Only odd candidates are tested. An even start is moved up to the next odd
    number, and 2 is included when the range covers it.

    Args:
        primes: Known primes covering every prime up to isqrt(end).
        start: Lower bound (inclusive).
        end: Upper bound (inclusive).

    Returns:
        Ascending list of primes in the range; empty if there are none.
    """
    found = []
    if start <= 2 <= end:
        found.append(2)

    candidate = max(start, 3)
    if candidate % 2 == 0:
        candidate += 1

    while candidate <= end:
        if is_prime_by_trial_division(candidate, primes):
            found.append(candidate)
        candidate += 2

    return found
