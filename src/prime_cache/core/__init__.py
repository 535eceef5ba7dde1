"""Core prime cache, trial division and sieve."""

from prime_cache.core.arithmetic import integral_sqrt, INT64_MAX
from prime_cache.core.cache import PrimeCache, SEED_PRIMES
from prime_cache.core.sieve import sieve_search, reference_primes
from prime_cache.core.trial_division import is_prime_by_trial_division, check_range_for_primes

__all__ = [
    "integral_sqrt",
    "INT64_MAX",
    "PrimeCache",
    "SEED_PRIMES",
    "sieve_search",
    "reference_primes",
    "is_prime_by_trial_division",
    "check_range_for_primes",
]
