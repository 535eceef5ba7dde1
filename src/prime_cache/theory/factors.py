"""Number-theoretic utilities built on cache lookups."""

from __future__ import annotations

from prime_cache.core.arithmetic import integral_sqrt
from prime_cache.core.cache import PrimeCache


def largest_prime_factor_of(cache: PrimeCache, value: int) -> int:
    """Find the largest prime dividing value.

    Divides out primes in increasing order, growing the cache when the next
    prime is not known yet. The index only advances once the current prime
    no longer divides the quotient. Once the next prime's square exceeds the
    quotient, the quotient itself is prime and is returned, so the cache only
    ever grows to about the square root of the largest cofactor. It is still
    trial division: a value with two large prime factors grows the cache up
    to the smaller of them.

    Args:
        cache: Prime cache to read (and grow).
        value: Integer >= 2.

    Returns:
        The largest prime factor of value.

    Raises:
        ValueError: If value is less than 2.
    """
    if value < 2:
        raise ValueError(f"value must be >= 2, got {value}")

    ceiling = integral_sqrt(value)
    prime_index = 0
    quotient = value
    while True:
        while quotient % cache[prime_index] != 0:
            prime_index += 1
            if prime_index == cache.discovered_count:
                # Grow in batches, never past what the quotient can need
                cache.ensure_covers(min(integral_sqrt(quotient), 2 * cache.largest_discovered_prime))
            if cache[prime_index] ** 2 > quotient:
                return quotient

        prime = cache[prime_index]
        quotient //= prime
        if prime > ceiling or quotient < prime:
            return prime


def _highest_power_at_most(prime: int, limit: int) -> int:
    power = prime
    while power * prime <= limit:
        power *= prime
    return power


def smallest_multiple_of_all_numbers_to(cache: PrimeCache, value: int) -> int:
    """Least common multiple of every integer from 1 to value.

    Each prime p <= value contributes its highest power <= value. Only primes
    up to isqrt(value) can have a square <= value, so larger primes contribute
    p itself.

    Args:
        cache: Prime cache to read (and grow).
        value: Integer >= 1.

    Returns:
        The smallest number divisible by every integer in 1..value.

    Raises:
        ValueError: If value is less than 1.
    """
    if value < 1:
        raise ValueError(f"value must be >= 1, got {value}")

    ceiling = integral_sqrt(value)
    multiple = 1
    for prime in cache.primes_up_to(value):
        if prime <= ceiling:
            multiple *= _highest_power_at_most(prime, value)
        else:
            multiple *= prime

    return multiple
