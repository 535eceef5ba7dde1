"""Self-extending cache of the prime numbers discovered so far.

The cache holds every prime from 2 up to its frontier (the largest prime
discovered), with no gaps. It only grows at the tail, either one prime at a
time by trial division, or in bulk through ``extend`` which the sieve and the
parallel searcher use to merge their results.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from typing import Callable, Iterable, Iterator, List, Tuple

import numpy as np

from prime_cache.core.arithmetic import INT64_MAX, integral_sqrt
from prime_cache.core.trial_division import check_range_for_primes, is_prime_by_trial_division
from prime_cache.exceptions import InvariantViolation, PrimeOverflowError

log = logging.getLogger(__name__)

# Enough to trial-divide every candidate up to 13 ** 2 = 169
SEED_PRIMES = (2, 3, 5, 7, 11, 13)


class PrimeCache:
    """Ordered, gap-free, append-only sequence of primes starting at 2.

    Indexing past the tail grows the cache lazily::

        >>> cache = PrimeCache()
        >>> cache[6]
        17
        >>> cache.discovered_count
        7

    Only the thread that owns the cache should mutate it. Concurrent readers
    should work from ``snapshot()`` instead.
    """

    def __init__(self):
        self._primes: List[int] = list(SEED_PRIMES)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}[count={len(self._primes):,d}, largest={self._primes[-1]:,d}]>"

    def __len__(self) -> int:
        return len(self._primes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.snapshot())

    def __contains__(self, value: int) -> bool:
        i = bisect_left(self._primes, value)
        return i < len(self._primes) and self._primes[i] == value

    def __getitem__(self, index: int) -> int:
        return self.prime_at(index)

    @property
    def discovered_count(self) -> int:
        """Number of primes discovered so far."""
        return len(self._primes)

    @property
    def largest_discovered_prime(self) -> int:
        """The frontier: the largest prime discovered so far."""
        return self._primes[-1]

    def snapshot(self) -> Tuple[int, ...]:
        """Return an immutable copy of the primes discovered so far."""
        return tuple(self._primes)

    def to_array(self) -> np.ndarray:
        """Return the primes discovered so far as an int64 array.

        Raises:
            PrimeOverflowError: If the frontier does not fit in int64.
        """
        if self._primes[-1] > INT64_MAX:
            raise PrimeOverflowError(f"Largest prime {self._primes[-1]:,d} does not fit in int64")
        return np.array(self._primes, dtype=np.int64)

    def prime_at(self, index: int) -> int:
        """Return the prime at the given 0-based ordinal index.

        Grows the cache one prime at a time until it is long enough, logging
        once per call. Growth is strictly sequential since each candidate needs
        every smaller prime up to its square root to already be cached.

        Args:
            index: Non-negative index (0 -> 2).

        Returns:
            The index-th prime.

        Raises:
            TypeError: If index is not an integer.
            ValueError: If index is negative.
        """
        if not isinstance(index, (int, np.integer)) or isinstance(index, bool):
            raise TypeError(f"index must be an int, got {type(index).__name__}")
        if index < 0:
            raise ValueError(f"index must be >= 0, got {index}")

        if index < len(self._primes):
            return self._primes[index]

        self._grow_while(lambda: len(self._primes) <= index)
        return self._primes[index]

    def _find_next_prime(self) -> int:
        candidate = self._primes[-1] + 2
        while not is_prime_by_trial_division(candidate, self._primes):
            candidate += 2
        return candidate

    def _grow_while(self, needs_more: Callable[[], bool]) -> int:
        old_count = len(self._primes)
        while needs_more():
            self._primes.append(self._find_next_prime())

        added = len(self._primes) - old_count
        if added:
            log.debug("Grew cache by %d primes to %d (largest=%d)", added, len(self._primes), self._primes[-1])
        return added

    def ensure_covers(self, limit: int) -> None:
        """Grow the cache until the frontier is >= limit."""
        self._grow_while(lambda: self._primes[-1] < limit)

    def primes_up_to(self, limit: int) -> Iterator[int]:
        """Yield every prime <= limit in order, growing the cache first."""
        self.ensure_covers(limit)
        for prime in self._primes:
            if prime > limit:
                return
            yield prime

    def is_prime(self, value: int) -> bool:
        """Check whether any integer is prime.

        Unlike the trial-division primitive this accepts values < 3 and even
        values, and grows the cache to cover isqrt(value) first.
        """
        if value < 2:
            return False
        if value == 2:
            return True
        if value % 2 == 0:
            return False
        if value <= self._primes[-1]:
            return value in self

        self.ensure_covers(integral_sqrt(value))
        return is_prime_by_trial_division(value, self._primes)

    def check_range_for_primes(self, start: int, end: int) -> List[int]:
        """Return the primes in [start, end] using the cached primes.

        Pure read: the cache is not grown, so it must already cover
        isqrt(end).

        Raises:
            ValueError: If start > end.
            InvariantViolation: If the cache does not cover isqrt(end).
        """
        if start > end:
            raise ValueError(f"start ({start}) must be <= end ({end})")
        return check_range_for_primes(self._primes, start, end)

    def extend(self, new_primes: Iterable[int]) -> int:
        """Append primes discovered in bulk to the tail of the cache.

        The values must be odd and strictly increasing above the current
        frontier. The caller is responsible for them being exactly the primes
        following the frontier; this only guards the ordering.

        Args:
            new_primes: Ascending primes greater than the frontier.

        Returns:
            Number of primes appended.

        Raises:
            InvariantViolation: If the values would break the ordering.
        """
        new_primes = [int(p) for p in new_primes]
        last = self._primes[-1]
        for prime in new_primes:
            if prime <= last or prime % 2 == 0:
                raise InvariantViolation(
                    f"Cannot append {prime:,d} after {last:,d}: values must be odd and strictly increasing"
                )
            last = prime

        self._primes.extend(new_primes)
        if new_primes:
            log.debug("Extended cache by %d primes (largest=%d)", len(new_primes), last)
        return len(new_primes)
